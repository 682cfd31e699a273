# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""

from .exceptions import HuePickerError, FormatError
from .colormath import ColorMath, hex_to_rgb, rgb_to_hex, rgb_to_hsl, hsl_to_rgb
from .geometry import WidgetGeometry, derive_geometry
from .config import ColorPickerConfig
from .controller import ColorPickerController, DragState
from .qt_colorpicker import ColorPickerWidget

__all__ = [
    "HuePickerError", "FormatError",
    "ColorMath", "hex_to_rgb", "rgb_to_hex", "rgb_to_hsl", "hsl_to_rgb",
    "WidgetGeometry", "derive_geometry",
    "ColorPickerConfig",
    "ColorPickerController", "DragState",
    "ColorPickerWidget",
]

__version__ = "0.1.0"
