# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import logging
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Mapping

__all__ = ["ColorPickerConfig", "DEFAULT_SIZE", "DEFAULT_VALUE"]

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 300
DEFAULT_VALUE = "#000000"


@dataclass
class ColorPickerConfig:
    """Host-supplied settings for a color picker.

    Attributes:
        size: Edge length of the widget in logical pixels.
        disabled: Blocks new drag sessions when True.
        value: Initial color as ``#RRGGBB`` or ``#RGB``.
        show_value: Draws the current hex string inside the square.
        notify_unchanged: When True, ``changed`` fires on every release, even if
            the gesture ended on the color it started from.
    """
    size: int = DEFAULT_SIZE
    disabled: bool = False
    value: str = DEFAULT_VALUE
    show_value: bool = True
    notify_unchanged: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ColorPickerConfig":
        """Builds a config from a host dictionary, skipping unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.debug("Ignoring unknown color picker options: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
