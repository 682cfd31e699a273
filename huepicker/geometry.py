# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import math
from dataclasses import dataclass
from typing import Tuple

__all__ = ["WidgetGeometry", "derive_geometry", "ring_point", "square_point",
           "hit_ring", "RING_HIT_MARGIN"]

# Extra pixels around the square that still count as a square press
RING_HIT_MARGIN = 2


@dataclass(frozen=True)
class WidgetGeometry:
    """Drawable regions of the picker, all derived from ``size``.

    Attributes:
        size: Edge length of the square widget in logical pixels.
        mid: Center of the widget in its own coordinate frame.
        circle_width: Stroke width of the hue ring.
        radius: Radius of the ring's center line.
        marker_size: Outer radius of the position markers.
        square_size: Edge length of the saturation/lightness square (even).
    """
    size: float
    mid: float
    circle_width: float
    radius: float
    marker_size: float
    square_size: int


def derive_geometry(size: float) -> WidgetGeometry:
    """Computes the picker layout for a widget of edge length ``size``.

    Args:
        size: Widget edge length, must be positive.

    Returns:
        WidgetGeometry: A fresh geometry; callers re-derive it on every size change.
    """
    circle_width = size / 10
    radius = (size - circle_width) / 2
    square_size = 2 * math.floor((radius - circle_width / 2) * math.sqrt(0.5))
    return WidgetGeometry(
        size=size,
        mid=size / 2,
        circle_width=circle_width,
        radius=radius,
        marker_size=circle_width * 0.3,
        square_size=square_size,
    )


def ring_point(geometry: WidgetGeometry, hue: float) -> Tuple[float, float]:
    """Position of ``hue`` on the ring, relative to the midpoint (0 is up)."""
    angle = hue * 2 * math.pi
    return math.sin(angle) * geometry.radius, -math.cos(angle) * geometry.radius


def square_point(geometry: WidgetGeometry, saturation: float,
                 lightness: float) -> Tuple[float, float]:
    """Position of a saturation/lightness pair in the square, relative to the midpoint.

    Full saturation sits on the left edge and full lightness on the top edge.
    """
    sq = geometry.square_size
    return sq * (0.5 - saturation), sq * (0.5 - lightness)


def hit_ring(geometry: WidgetGeometry, x: float, y: float) -> bool:
    """True when a midpoint-relative press lands outside the square's hit box."""
    return max(abs(x), abs(y)) > geometry.square_size / 2 + RING_HIT_MARGIN
