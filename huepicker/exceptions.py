# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""

__all__ = ["HuePickerError", "FormatError"]


class HuePickerError(Exception):
    """Base class for all errors raised by the color picker."""


class FormatError(HuePickerError, ValueError):
    """Raised when a string is not a well-formed ``#RGB`` or ``#RRGGBB`` color.

    Attributes:
        value: The rejected input, kept for the caller's error report.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid hex color format: {value!r}")
