"""Tests for procedural rendering onto QImage layers."""

import pytest
from PySide6.QtGui import QColor, QImage, QPainter

from huepicker import derive_geometry
from huepicker.renderer import (RING_SEGMENTS, build_mask_image, render_overlay_layer,
                                render_ring_layer, upscale_for_sharpness)


def rgba(image, x, y):
    c = image.pixelColor(x, y)
    return c.red(), c.green(), c.blue(), c.alpha()


class TestUpscale:

    def test_backing_store_follows_density(self):
        layer = upscale_for_sharpness(100, 2.0)
        assert layer.width() == 200
        assert layer.height() == 200
        assert layer.devicePixelRatio() == 2.0
        assert layer.format() == QImage.Format.Format_ARGB32_Premultiplied

    def test_starts_transparent(self):
        layer = upscale_for_sharpness(50)
        assert rgba(layer, 0, 0)[3] == 0
        assert rgba(layer, 49, 49)[3] == 0

    def test_density_below_one_is_clamped(self):
        layer = upscale_for_sharpness(80, 0.5)
        assert layer.width() == 80
        assert layer.devicePixelRatio() == 1.0

    def test_painter_works_in_logical_units(self):
        layer = upscale_for_sharpness(10, 2.0)
        p = QPainter(layer)
        p.fillRect(0, 0, 5, 5, QColor(0, 0, 255))
        p.end()
        # logical 5x5 covers 10x10 physical pixels
        assert rgba(layer, 9, 9)[3] == 255
        assert rgba(layer, 11, 11)[3] == 0


class TestMask:

    def test_half_resolution(self):
        mask = build_mask_image(168)
        assert mask.width() == 85
        assert mask.height() == 85

    def test_corners(self):
        mask = build_mask_image(168)
        n = 84
        # top: white, bottom: black, all opaque
        assert rgba(mask, 0, 0) == (255, 255, 255, 255)
        assert rgba(mask, n, 0) == (255, 255, 255, 255)
        assert rgba(mask, 0, n) == (0, 0, 0, 255)
        assert rgba(mask, n, n) == (0, 0, 0, 255)

    def test_saturated_edge_is_transparent(self):
        mask = build_mask_image(168)
        assert rgba(mask, 0, 42)[3] == 0

    def test_desaturated_edge_is_gray(self):
        mask = build_mask_image(168)
        r, g, b, a = rgba(mask, 84, 42)
        assert a == 255
        assert r == g == b
        assert 126 <= r <= 129

    def test_center_is_half_transparent_gray(self):
        mask = build_mask_image(168)
        r, g, b, a = rgba(mask, 42, 42)
        assert 120 <= a <= 135
        assert 120 <= r <= 135

    def test_tiny_square_does_not_divide_by_zero(self):
        mask = build_mask_image(0)
        assert mask.width() == 2


class TestRingLayer:

    @pytest.fixture
    def layer(self):
        return render_ring_layer(derive_geometry(200))

    def test_segment_count(self):
        assert RING_SEGMENTS == 24

    def test_top_of_ring_is_red(self, layer):
        # radius 90 around mid 100
        r, g, b, a = rgba(layer, 100, 10)
        assert a == 255
        assert r > 200 and g < 70 and b < 70

    def test_right_of_ring_is_chartreuse(self, layer):
        r, g, b, a = rgba(layer, 190, 100)
        assert a == 255
        assert g > 200 and b < 70
        assert 90 < r < 170

    def test_bottom_of_ring_is_cyan(self, layer):
        r, g, b, a = rgba(layer, 100, 190)
        assert a == 255
        assert r < 70 and g > 200 and b > 200

    def test_corners_are_empty(self, layer):
        assert rgba(layer, 0, 0)[3] == 0
        assert rgba(layer, 199, 199)[3] == 0

    def test_gap_between_ring_and_square_is_empty(self, layer):
        # square spans 44..156, ring stroke starts at radius 80
        assert rgba(layer, 100, 35)[3] == 0

    def test_square_center_holds_mask(self, layer):
        r, g, b, a = rgba(layer, 100, 100)
        assert 100 <= a <= 155
        assert abs(r - g) <= 2 and abs(g - b) <= 2

    def test_respects_density(self):
        layer = render_ring_layer(derive_geometry(200), 2.0)
        assert layer.width() == 400
        r, g, b, a = rgba(layer, 200, 20)
        assert a == 255 and r > 200


class TestMarkers:
    # size 400: radius 180, marker 12, lw 3, inner radius 9

    @pytest.fixture
    def g(self):
        return derive_geometry(400)

    def draw(self, g, hsl, invert):
        layer = upscale_for_sharpness(g.size)
        render_overlay_layer(layer, g, hsl, invert)
        return layer

    def test_ring_marker_dark_outside_light_inside(self, g):
        layer = self.draw(g, (0.0, 0.5, 0.5), False)
        # ring marker centered at (200, 20)
        r, g_, b, a = rgba(layer, 200, 8)
        assert a > 200 and r < 60
        r, g_, b, a = rgba(layer, 200, 11)
        assert a > 200 and r > 200

    def test_square_marker_colors(self, g):
        layer = self.draw(g, (0.0, 0.5, 0.5), False)
        # square marker centered at (200, 200)
        assert rgba(layer, 200, 188)[0] < 60
        assert rgba(layer, 200, 191)[0] > 200

    def test_square_marker_inverted(self, g):
        layer = self.draw(g, (0.0, 0.5, 0.5), True)
        assert rgba(layer, 200, 188)[0] > 200
        assert rgba(layer, 200, 191)[0] < 60
        # ring marker keeps its colors
        assert rgba(layer, 200, 8)[0] < 60

    def test_marker_center_is_transparent(self, g):
        layer = self.draw(g, (0.0, 0.5, 0.5), False)
        assert rgba(layer, 200, 200)[3] == 0

    def test_square_marker_position(self, g):
        # s=1, l=1 puts the marker in the top-left corner of the square
        layer = self.draw(g, (0.0, 1.0, 1.0), False)
        half = g.square_size / 2
        cx = cy = int(g.mid - half)
        assert rgba(layer, cx, cy - 12)[3] > 0
        assert rgba(layer, 200, 188)[3] == 0

    def test_redraw_clears_previous_markers(self, g):
        layer = upscale_for_sharpness(g.size)
        render_overlay_layer(layer, g, (0.0, 0.5, 0.5), False)
        render_overlay_layer(layer, g, (0.5, 0.5, 0.5), False)
        assert rgba(layer, 200, 8)[3] == 0
        # hue 0.5 sits at the bottom of the ring
        assert rgba(layer, 200, 391)[3] > 200
