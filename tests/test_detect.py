"""
Tests for page boundary detection.
"""

import itertools

import numpy as np
import pytest

from pagescan.detect import edge_map, edge_ratio, find_page_quad, is_simple_quad, order_points


def test_order_points():
    """Corners come back as tl, tr, br, bl regardless of input order."""
    pts = np.array([[300, 290], [10, 20], [12, 280], [310, 15]], dtype=np.float32)
    rect = order_points(pts)
    assert rect.tolist() == [[10, 20], [310, 15], [300, 290], [12, 280]]


@pytest.mark.parametrize("perm", list(itertools.permutations(range(4))))
def test_order_points_is_idempotent(perm):
    pts = np.array([[40, 30], [500, 60], [480, 420], [20, 400]], dtype=np.float32)
    once = order_points(pts[list(perm)])
    twice = order_points(once)
    assert np.array_equal(once, twice)
    assert np.array_equal(once, pts)


def test_is_simple_quad_rejects_repeated_corner():
    rect = np.array([[0, 0], [10, 0], [10, 0], [0, 10]], dtype=np.float32)
    assert not is_simple_quad(rect)


def test_edge_ratio():
    square = np.array([[0, 0], [100, 0], [100, 100], [0, 100]], dtype=np.float32)
    assert edge_ratio(square) == pytest.approx(1.0)
    a4 = np.array([[0, 0], [210, 0], [210, 297], [0, 297]], dtype=np.float32)
    assert edge_ratio(a4) == pytest.approx(210 / 297)


def test_find_page_quad_locates_page(page_photo, a4_corners):
    photo = page_photo(a4_corners)
    quad = find_page_quad(photo)

    assert quad is not None
    assert quad.shape == (4, 2)
    expected = np.array(a4_corners, dtype=np.float32)
    assert np.abs(quad - expected).max() < 8


def test_edge_map_thresholds_can_be_overridden(page_photo, a4_corners):
    photo = page_photo(a4_corners)
    assert edge_map(photo).any()
    assert not edge_map(photo, canny_low=5000, canny_high=5000).any()


def test_find_page_quad_none_on_blank():
    blank = np.full((480, 640, 3), 128, dtype=np.uint8)
    assert find_page_quad(blank) is None


def test_find_page_quad_ignores_small_quads(page_photo):
    # 120 x 90 of 800 x 600 is 2.25% of the frame.
    photo = page_photo([(100, 100), (220, 100), (220, 190), (100, 190)])
    assert find_page_quad(photo) is None


@pytest.mark.parametrize(
    "corners",
    [
        [(220, 40), (560, 55), (575, 560), (205, 545)],
        [(50, 50), (750, 50), (750, 550), (50, 550)],
        [(300, 190), (540, 200), (530, 420), (290, 410)],
        [(100, 100), (400, 100), (400, 300), (100, 300)],
    ],
)
def test_detected_quad_covers_min_area(page_photo, corners):
    photo = page_photo(corners)
    quad = find_page_quad(photo)

    assert quad is not None
    span = np.ptp(quad[:, 0]) * np.ptp(quad[:, 1])
    assert span >= 0.10 * photo.shape[0] * photo.shape[1]


@pytest.mark.parametrize(
    "corners",
    [
        # 238 x 200 corner span, its pixel bounding box is just over 10%.
        [(100, 100), (338, 100), (338, 300), (100, 300)],
        [(100, 120), (260, 110), (270, 300), (95, 310)],
    ],
)
def test_pages_just_under_min_area_are_rejected(page_photo, corners):
    assert find_page_quad(page_photo(corners)) is None
