# -*- coding: utf-8 -*-
"""
PADDOL: Python Advanced Design & Dispersion Optimization Lab
Copyright (c) 2025 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later
"""
import math
import logging
import numpy as np
from PySide6.QtGui import (QPainter, QImage, QColor, QPen, QBrush,
                           QLinearGradient, QPainterPath)
from PySide6.QtCore import Qt, QPointF, QRectF

from .colormath import ColorMath, HSLTuple
from .geometry import WidgetGeometry, ring_point, square_point

__all__ = ["RING_SEGMENTS", "upscale_for_sharpness", "draw_hue_ring",
           "build_mask_image", "draw_square_mask", "draw_markers",
           "render_ring_layer", "render_overlay_layer"]

logger = logging.getLogger(__name__)

RING_SEGMENTS = 24

DARK = QColor(0, 0, 0)
LIGHT = QColor(255, 255, 255)


def upscale_for_sharpness(size: float, device_pixel_ratio: float = 1.0) -> QImage:
    """Allocates a transparent drawing layer sized for the display density.

    The backing store holds ``size * device_pixel_ratio`` pixels per side while
    painters keep working in logical ``size`` units. Call once per layer,
    before any painter translates the origin to the widget midpoint.

    Args:
        size: Logical edge length of the layer.
        device_pixel_ratio: Physical pixels per logical pixel of the target screen.

    Returns:
        QImage: Premultiplied ARGB layer filled with transparency.
    """
    dpr = max(1.0, float(device_pixel_ratio))
    side = max(1, int(math.ceil(size * dpr)))
    layer = QImage(side, side, QImage.Format.Format_ARGB32_Premultiplied)
    layer.setDevicePixelRatio(dpr)
    layer.fill(Qt.GlobalColor.transparent)
    return layer


def draw_hue_ring(geometry: WidgetGeometry, painter: QPainter) -> None:
    """Strokes the hue ring as gradient-filled quadratic segments.

    Each of the ``RING_SEGMENTS`` wedges is a quadratic curve whose control
    point keeps both endpoints tangent to the circle, stroked with a linear
    gradient between the hues at its ends. The painter works in a frame scaled
    by the radius and its origin must be the midpoint.

    Args:
        geometry: Current widget geometry.
        painter: Active painter on the ring layer.
    """
    r = geometry.radius
    n = RING_SEGMENTS
    # Each segment starts slightly before the previous one ends to hide
    # anti-aliasing seams.
    nudge = 8 / r / n * math.pi

    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(Qt.BrushStyle.NoBrush)
    painter.scale(r, r)

    hues = np.arange(n + 1) / n
    stops = np.clip(np.column_stack(ColorMath.hsl_to_rgb_vectorized(hues, 1.0, 0.5)), 0.0, 1.0)

    angle1 = 0.0
    color1 = QColor(DARK)
    for i in range(n + 1):
        d2 = i / n
        angle2 = d2 * 2 * math.pi
        x1, y1 = math.sin(angle1), -math.cos(angle1)
        x2, y2 = math.sin(angle2), -math.cos(angle2)
        am = (angle1 + angle2) / 2
        tan = 1 / math.cos((angle2 - angle1) / 2)
        xm, ym = math.sin(am) * tan, -math.cos(am) * tan
        color2 = QColor.fromRgbF(*(float(v) for v in stops[i]))

        if i > 0:
            grad = QLinearGradient(x1, y1, x2, y2)
            grad.setColorAt(0.0, color1)
            grad.setColorAt(1.0, color2)
            pen = QPen(QBrush(grad), geometry.circle_width / r)
            pen.setCapStyle(Qt.PenCapStyle.FlatCap)
            painter.setPen(pen)

            path = QPainterPath(QPointF(x1, y1))
            path.quadTo(QPointF(xm, ym), QPointF(x2, y2))
            painter.drawPath(path)

        angle1 = angle2 - nudge
        color1 = color2

    painter.restore()


def build_mask_image(square_size: int) -> QImage:
    """Computes the saturation/lightness overlay at half resolution.

    For every pixel the normalized coordinates ``s = 1 - x/n`` and
    ``l = 1 - y/n`` are turned into a gray level and an alpha value so that the
    hue underneath fades to white at the top, to black at the bottom and to gray
    on the right.

    Args:
        square_size: Edge length of the square in logical pixels.

    Returns:
        QImage: Straight-alpha RGBA image of ``square_size // 2 + 1`` pixels per side.
    """
    n = max(1, square_size // 2)
    y, x = np.mgrid[0:n + 1, 0:n + 1]
    l = 1.0 - y / n
    s = 1.0 - x / n

    a = 1.0 - 2.0 * np.minimum(l * s, (1.0 - l) * s)
    with np.errstate(divide="ignore", invalid="ignore"):
        c = np.where(a > 0, (2.0 * l - 1.0 + a) * 0.5 / a, 0.0)

    side = n + 1
    rgba = np.empty((side, side, 4), dtype=np.uint8)
    gray = np.rint(np.clip(c, 0.0, 1.0) * 255).astype(np.uint8)
    rgba[..., 0] = gray
    rgba[..., 1] = gray
    rgba[..., 2] = gray
    rgba[..., 3] = np.rint(np.clip(a, 0.0, 1.0) * 255).astype(np.uint8)

    img = QImage(rgba.data, side, side, 4 * side, QImage.Format.Format_RGBA8888)
    # QImage does not own the numpy buffer
    return img.copy()


def draw_square_mask(geometry: WidgetGeometry, painter: QPainter) -> None:
    """Blits the half-resolution mask, scaled 2x, over the square.

    The painter origin must be the midpoint.
    """
    sq = geometry.square_size
    mask = build_mask_image(sq)
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
    painter.drawImage(QRectF(-sq / 2, -sq / 2, sq, sq), mask, QRectF(mask.rect()))
    painter.restore()


def draw_markers(geometry: WidgetGeometry, hsl: HSLTuple, invert: bool,
                 painter: QPainter) -> None:
    """Clears the overlay and draws the ring and square position markers.

    The ring marker always uses a dark outer and light inner circle. The square
    marker uses the same scheme unless ``invert`` is set, in which case the
    colors swap so the marker stays visible on dark colors.

    Args:
        geometry: Current widget geometry.
        hsl: Selected color, hue in [0, 1).
        invert: Contrast flag, True when the selected color is dark.
        painter: Active painter on the overlay layer, origin at the midpoint.
    """
    mid, size = geometry.mid, geometry.size
    painter.save()
    painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
    painter.fillRect(QRectF(-mid, -mid, size, size), Qt.GlobalColor.transparent)
    painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(Qt.BrushStyle.NoBrush)

    lw = math.ceil(geometry.marker_size / 4)
    r = geometry.marker_size - lw
    c1, c2 = (LIGHT, DARK) if invert else (DARK, LIGHT)

    x1, y1 = ring_point(geometry, hsl[0])
    x2, y2 = square_point(geometry, hsl[1], hsl[2])
    circles = [
        (x1, y1, geometry.marker_size, DARK),
        (x1, y1, r, LIGHT),
        (x2, y2, geometry.marker_size, c1),
        (x2, y2, r, c2),
    ]
    for cx, cy, radius, color in circles:
        painter.setPen(QPen(color, lw))
        painter.drawEllipse(QPointF(cx, cy), radius, radius)

    painter.restore()


def render_ring_layer(geometry: WidgetGeometry, device_pixel_ratio: float = 1.0) -> QImage:
    """Builds the static layer holding the hue ring and the square mask."""
    layer = upscale_for_sharpness(geometry.size, device_pixel_ratio)
    p = QPainter(layer)
    try:
        p.translate(geometry.mid, geometry.mid)
        draw_hue_ring(geometry, p)
        draw_square_mask(geometry, p)
    finally:
        p.end()
    logger.debug("Rendered ring layer: size=%s dpr=%s", geometry.size, device_pixel_ratio)
    return layer


def render_overlay_layer(layer: QImage, geometry: WidgetGeometry, hsl: HSLTuple,
                         invert: bool) -> None:
    """Redraws the markers onto an existing overlay layer."""
    p = QPainter(layer)
    try:
        p.translate(geometry.mid, geometry.mid)
        draw_markers(geometry, hsl, invert, p)
    finally:
        p.end()
