"""Tests for numorph.utils.geometry.

Test suites:
1. Rect / Inset
2. Corner radius scaling
3. Polyline flattening (winding, hard corners, bbox)

Run:
    pytest tests/test_geometry.py -v
"""

import math

import numpy as np
import pytest

from numorph.utils import geometry
from numorph.utils.geometry import Inset, Rect


# ============================================================================
# RECT / INSET
# ============================================================================

def test_rect_size_and_empty():
    r = Rect(10, 20, 110, 70)
    assert r.width == 100
    assert r.height == 50
    assert not r.is_empty()
    assert Rect(5, 5, 5, 10).is_empty()
    assert Rect().is_empty()


def test_rect_inset():
    r = Rect(0, 0, 100, 100).inset(Inset(1, 2, 3, 4))
    assert r == Rect(1, 2, 97, 96)


def test_rect_offset_and_round_out():
    r = Rect(0.5, 0.5, 10.2, 10.7).offset(1, 2)
    assert r == Rect(1.5, 2.5, 11.2, 12.7)
    assert r.round_out() == (1, 2, 12, 13)


def test_inset_set_mutates_in_place():
    inset = Inset()
    inset.set(1, 2, 3, 4)
    assert inset.as_tuple() == (1, 2, 3, 4)


# ============================================================================
# RADIUS SCALING
# ============================================================================

def test_scale_corner_radii_no_overlap_unchanged():
    assert geometry.scale_corner_radii(100, 100, (20, 20, 20, 20)) == (20, 20, 20, 20)


def test_scale_corner_radii_overlap_scaled_uniformly():
    tl, tr, br, bl = geometry.scale_corner_radii(100, 40, (40, 40, 40, 40))
    # Height 40 with two radii of 40 → factor 0.5
    assert tl == pytest.approx(20.0)
    assert tr == tl == br == bl


def test_scale_corner_radii_keeps_zero():
    radii = geometry.scale_corner_radii(10, 10, (0, 30, 0, 30))
    assert radii[0] == 0.0
    assert radii[2] == 0.0


# ============================================================================
# POLYLINES
# ============================================================================

def test_round_rect_polyline_is_clockwise():
    pts = geometry.round_rect_polyline(Rect(0, 0, 100, 60), (10, 20, 5, 0))
    assert geometry.is_clockwise(pts)


def test_round_rect_polyline_bbox_matches_rect():
    rect = Rect(3, 4, 103, 84)
    pts = geometry.round_rect_polyline(rect, (12, 12, 12, 12))
    bbox = geometry.polygon_bbox(pts)
    assert bbox.left == pytest.approx(rect.left)
    assert bbox.top == pytest.approx(rect.top)
    assert bbox.right == pytest.approx(rect.right)
    assert bbox.bottom == pytest.approx(rect.bottom)


def test_round_rect_polyline_hard_corner_vertex():
    pts = geometry.round_rect_polyline(Rect(0, 0, 50, 50), (0, 10, 10, 10))
    # Exact top-left corner present only when its radius is 0
    assert np.any(np.all(np.isclose(pts, [0.0, 0.0]), axis=1))
    assert not np.any(np.all(np.isclose(pts, [50.0, 0.0]), axis=1))


def test_round_rect_polyline_zero_radii_is_rectangle():
    pts = geometry.round_rect_polyline(Rect(0, 0, 10, 20), (0, 0, 0, 0))
    np.testing.assert_allclose(pts, [[0, 0], [10, 0], [10, 20], [0, 20]])
    assert geometry.polygon_signed_area(pts) == pytest.approx(200.0)


def test_ellipse_polyline_clockwise_and_area():
    pts = geometry.ellipse_polyline(Rect(0, 0, 200, 100))
    assert geometry.is_clockwise(pts)
    assert geometry.polygon_signed_area(pts) == pytest.approx(math.pi * 100 * 50, rel=0.01)
    # Starts at the leftmost point
    np.testing.assert_allclose(pts[0], [0.0, 50.0], atol=1e-9)


def test_ellipse_polyline_tiny_has_minimum_vertices():
    pts = geometry.ellipse_polyline(Rect(0, 0, 0.2, 0.2))
    assert len(pts) >= 8


def test_arc_segments_grows_with_radius():
    assert geometry.arc_segments(0.1, math.pi / 2) == 1
    assert geometry.arc_segments(100, math.pi / 2) > geometry.arc_segments(10, math.pi / 2)


def test_polygon_signed_area_degenerate():
    assert geometry.polygon_signed_area(np.zeros((2, 2))) == 0.0
    assert geometry.polygon_bbox(np.zeros((0, 2))) == Rect()
