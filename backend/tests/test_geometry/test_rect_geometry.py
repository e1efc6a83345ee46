"""Tests for rectangle geometry: SAT intersection, extents and padding."""

from __future__ import annotations

import numpy as np
import pytest

from knitcanvas.utils.geometry import (
    Rect,
    intersects,
    intersects_aabb,
    padded_rect,
    polygons_intersect,
    rotated_corners,
)


def test_separated_rects_do_not_intersect():
    a = Rect(0, 0, 10, 10)
    assert intersects(a, Rect(20, 0, 10, 10)) is False


def test_overlapping_rects_intersect():
    a = Rect(0, 0, 10, 10)
    assert intersects(a, Rect(5, 0, 10, 10)) is True


def test_touching_edges_are_not_a_collision():
    a = Rect(0, 0, 10, 10)
    assert intersects(a, Rect(10, 0, 10, 10)) is False
    assert intersects(a, Rect(0, 10, 10, 10)) is False
    assert intersects_aabb(a, Rect(10, 10, 10, 10)) is False


def test_intersects_is_symmetric():
    a = Rect(0, 0, 30, 20, rotation=30)
    b = Rect(25, 5, 10, 10)
    assert intersects(a, b) == intersects(b, a)


def test_contained_rect_intersects():
    assert intersects(Rect(0, 0, 100, 100), Rect(40, 40, 5, 5)) is True


def test_rotated_corners_unrotated_order():
    pts = rotated_corners(Rect(0, 0, 10, 20))
    np.testing.assert_allclose(pts, [[0, 0], [10, 0], [10, 20], [0, 20]])


def test_rotation_is_clockwise_about_center():
    # Canvas y points down, so +90 swings the top-left corner to the top-right
    pts = rotated_corners(Rect(0, 0, 10, 10, rotation=90))
    np.testing.assert_allclose(pts[0], [10, 0], atol=1e-9)


def test_rotated_extent():
    xmin, ymin, xmax, ymax = Rect(0, 0, 100, 50, rotation=90).extent()
    assert xmin == pytest.approx(25)
    assert xmax == pytest.approx(75)
    assert ymin == pytest.approx(-25)
    assert ymax == pytest.approx(75)


def test_diamond_clear_of_corner_box():
    # Extents overlap, the shapes don't: SAT must find the diagonal axis
    diamond = Rect(0, 0, 10, 10, rotation=45)
    box = Rect(11, 11, 10, 10)
    _, _, xmax, ymax = diamond.extent()
    assert xmax > box.x and ymax > box.y
    assert intersects(diamond, box) is False


def test_diamond_tip_reaches_box():
    diamond = Rect(0, 0, 10, 10, rotation=45)
    assert intersects(diamond, Rect(11, 0, 10, 10)) is True
    assert intersects(diamond, Rect(13, 0, 10, 10)) is False


def test_polygons_intersect_skips_degenerate_edges():
    square = np.array([[0, 0], [10, 0], [10, 10], [10, 10], [0, 10]], dtype=float)
    other = np.array([[5, 5], [15, 5], [15, 15], [5, 15]], dtype=float)
    assert polygons_intersect(square, other) is True


def test_padded_rect_shrinks_every_side():
    padded = padded_rect(Rect(0, 0, 100, 50, rotation=10), 15)
    assert padded == Rect(15, 15, 70, 20, rotation=10)


def test_padded_rect_never_collapses():
    padded = padded_rect(Rect(0, 0, 40, 20), 30)
    assert padded.width == 1.0
    assert padded.height == 1.0


def test_zero_padding_is_identity():
    rect = Rect(3, 4, 5, 6)
    assert padded_rect(rect, 0) is rect


def test_collapsed_padded_rect_stays_centered():
    rect = Rect(0, 0, 10, 10, rotation=30)
    padded = padded_rect(rect, 15)
    assert (padded.width, padded.height) == (1.0, 1.0)
    assert padded.center == rect.center
    assert padded.rotation == 30


def test_padded_rect_collapses_one_axis_only():
    padded = padded_rect(Rect(0, 0, 100, 20), 15)
    assert (padded.x, padded.width) == (15, 70)
    assert (padded.y, padded.height) == (9.5, 1.0)
