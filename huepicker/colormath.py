# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import re
import numpy as np
from typing import Tuple

from .exceptions import FormatError

__all__ = ["ColorMath", "RGBTuple", "HSLTuple", "wrap_hue",
           "hex_to_rgb", "rgb_to_hex", "rgb_to_hsl", "hsl_to_rgb"]

RGBTuple = Tuple[float, float, float]
HSLTuple = Tuple[float, float, float]

_HEX_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

ONE_THIRD = 1.0 / 3.0
TWO_THIRDS = 2.0 / 3.0


def wrap_hue(h: float) -> float:
    """Wraps a hue into [0, 1)."""
    h = h % 1.0
    # a tiny negative input rounds up to exactly 1.0
    return 0.0 if h >= 1.0 else h


class ColorMath:
    """Conversions between hex strings, normalized RGB and HSL.

    All channels are floats in [0, 1]. Hue is a fraction of a full turn, not
    degrees, and always wraps modulo 1.
    """

    @staticmethod
    def hex_to_rgb(color: str) -> RGBTuple:
        """Parses ``#RRGGBB`` or the ``#RGB`` shorthand.

        Args:
            color: Hex color string including the leading ``#``.

        Returns:
            Tuple of (r, g, b) in the range 0.0 - 1.0.

        Raises:
            FormatError: If the string is not a well-formed hex color.
        """
        if not isinstance(color, str) or not _HEX_PATTERN.fullmatch(color):
            raise FormatError(color)

        if len(color) == 7:
            return tuple(int(color[i:i + 2], 16) / 255 for i in (1, 3, 5))
        return tuple(int(color[i], 16) / 15 for i in (1, 2, 3))

    @staticmethod
    def rgb_to_hex(rgb: RGBTuple) -> str:
        """Formats normalized RGB as a lowercase ``#rrggbb`` string.

        Channels are expected to be clamped to [0, 1] already.
        """
        # halves round up; round() would round them to even
        return "#" + "".join(f"{int(c * 255 + 0.5):02x}" for c in rgb)

    @staticmethod
    def rgb_to_hsl(rgb: RGBTuple) -> HSLTuple:
        """Converts normalized RGB to HSL.

        Achromatic colors get a hue of 0. The returned hue is wrapped into
        [0, 1) so consumers never see the negative sector value produced when
        red is the maximum and blue exceeds green.
        """
        r, g, b = rgb
        lo = min(r, g, b)
        hi = max(r, g, b)
        delta = hi - lo

        h = 0.0
        s = 0.0
        l = (lo + hi) / 2

        if 0 < l < 1:
            s = delta / (2 * l if l < 0.5 else 2 - 2 * l)

        if delta > 0:
            if hi == r and hi != g:
                h += (g - b) / delta
            if hi == g and hi != b:
                h += 2 + (b - r) / delta
            if hi == b and hi != r:
                h += 4 + (r - g) / delta
            h = wrap_hue(h / 6)

        return h, s, l

    @staticmethod
    def hue_to_channel(m1: float, m2: float, h: float) -> float:
        """Evaluates one RGB channel for a hue offset over the six sextants."""
        h = h % 1.0
        if h * 6 < 1:
            return m1 + (m2 - m1) * h * 6
        if h * 2 < 1:
            return m2
        if h * 3 < 2:
            return m1 + (m2 - m1) * (TWO_THIRDS - h) * 6
        return m1

    @staticmethod
    def hsl_to_rgb(hsl: HSLTuple) -> RGBTuple:
        """Converts HSL to normalized RGB using the two-midpoint method."""
        h, s, l = hsl
        m2 = l * (s + 1) if l <= 0.5 else l + s - l * s
        m1 = l * 2 - m2
        return (ColorMath.hue_to_channel(m1, m2, h + ONE_THIRD),
                ColorMath.hue_to_channel(m1, m2, h),
                ColorMath.hue_to_channel(m1, m2, h - ONE_THIRD))

    @staticmethod
    def hsl_to_rgb_vectorized(h, s, l):
        """NumPy variant of :meth:`hsl_to_rgb` for scalar or array input.

        Args:
            h: Hue (0.0 - 1.0), scalar or numpy array.
            s: Saturation (0.0 - 1.0), scalar or numpy array.
            l: Lightness (0.0 - 1.0), scalar or numpy array.

        Returns:
            Tuple of (r, g, b) arrays with values in 0.0 - 1.0.
        """
        h, s, l = np.broadcast_arrays(np.asarray(h, dtype=np.float64),
                                      np.asarray(s, dtype=np.float64),
                                      np.asarray(l, dtype=np.float64))
        m2 = np.where(l <= 0.5, l * (s + 1), l + s - l * s)
        m1 = l * 2 - m2

        def channel(hh):
            hh = hh % 1.0
            rising = m1 + (m2 - m1) * hh * 6
            falling = m1 + (m2 - m1) * (TWO_THIRDS - hh) * 6
            return np.select([hh * 6 < 1, hh * 2 < 1, hh * 3 < 2],
                             [rising, m2, falling], default=m1)

        return channel(h + ONE_THIRD), channel(h), channel(h - ONE_THIRD)

    @staticmethod
    def luminance(rgb: RGBTuple) -> float:
        """Perceptual luminance used to pick marker contrast."""
        r, g, b = rgb
        return 0.3 * r + 0.59 * g + 0.11 * b

    @staticmethod
    def is_dark(rgb: RGBTuple) -> bool:
        """True when light markers read better on top of ``rgb``."""
        return ColorMath.luminance(rgb) <= 0.6

    @staticmethod
    def hue_color(hue: float) -> str:
        """Hex of the fully saturated, mid-lightness color for ``hue``."""
        return ColorMath.rgb_to_hex(ColorMath.hsl_to_rgb((hue, 1.0, 0.5)))


hex_to_rgb = ColorMath.hex_to_rgb
rgb_to_hex = ColorMath.rgb_to_hex
rgb_to_hsl = ColorMath.rgb_to_hsl
hsl_to_rgb = ColorMath.hsl_to_rgb
