"""
Page boundary detection.

Finds the most page-like four-sided contour in a photo. Candidates are scored
by how much of the frame they cover and how close their proportions are to
an A4 sheet.
"""

from __future__ import annotations

import logging
from typing import Optional

import cv2
import numpy as np

from pagescan import settings
from pagescan.imaging import normalize_illumination, to_gray
from pagescan.models import Quad

logger = logging.getLogger(__name__)


def order_points(pts: np.ndarray) -> Quad:
    """Order points as top-left, top-right, bottom-right, bottom-left."""
    pts = np.asarray(pts, dtype="float32").reshape(4, 2)
    rect = np.zeros((4, 2), dtype="float32")
    s = pts.sum(axis=1)
    rect[0] = pts[np.argmin(s)]
    rect[2] = pts[np.argmax(s)]

    diff = np.diff(pts, axis=1)  # y - x
    rect[1] = pts[np.argmin(diff)]
    rect[3] = pts[np.argmax(diff)]
    return rect


def is_simple_quad(rect: Quad) -> bool:
    """True when the ordered corners are distinct and form a convex polygon."""
    if len({(float(x), float(y)) for x, y in rect}) != 4:
        return False
    return bool(cv2.isContourConvex(rect.reshape(-1, 1, 2)))


def edge_ratio(rect: Quad) -> float:
    """Short/long ratio of the averaged opposite edges (1.0 for a square)."""
    tl, tr, br, bl = rect
    width = (np.linalg.norm(tr - tl) + np.linalg.norm(br - bl)) / 2.0
    height = (np.linalg.norm(bl - tl) + np.linalg.norm(br - tr)) / 2.0
    long_side = max(width, height)
    if long_side <= 0:
        return 0.0
    return float(min(width, height) / long_side)


def edge_map(
    image: np.ndarray,
    sigma: float = settings.ILLUMINATION_BLUR_SIGMA,
    canny_low: int = settings.CANNY_LOW,
    canny_high: int = settings.CANNY_HIGH,
) -> np.ndarray:
    """Shadow-compensated Canny edges of the image."""
    flat = normalize_illumination(to_gray(image), sigma)
    blurred = cv2.GaussianBlur(flat, settings.EDGE_BLUR_KERNEL, 0)
    return cv2.Canny(blurred, canny_low, canny_high)


def find_page_quad(
    image: np.ndarray,
    tolerance: float = settings.POLY_APPROX_TOLERANCE,
    min_area_ratio: float = settings.MIN_QUAD_AREA_RATIO,
    target_ratio: float = settings.A4_SHORT_LONG_RATIO,
) -> Optional[Quad]:
    """Return the best ordered page quadrilateral, or None if nothing qualifies."""
    h, w = image.shape[:2]
    image_area = float(h * w)
    edges = edge_map(image)
    contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    best: Optional[Quad] = None
    best_score = -1.0
    for c in contours:
        peri = cv2.arcLength(c, True)
        approx = cv2.approxPolyDP(c, tolerance * peri, True)
        if len(approx) != 4:
            continue

        pts = approx.reshape(4, 2).astype(np.float64)
        span_w, span_h = np.ptp(pts[:, 0]), np.ptp(pts[:, 1])
        area_ratio = float(span_w * span_h) / image_area
        if area_ratio < min_area_ratio:
            continue

        rect = order_points(approx.reshape(4, 2))
        if not is_simple_quad(rect):
            continue

        score = area_ratio * (1.0 - abs(edge_ratio(rect) - target_ratio))
        if score > best_score:
            best_score = score
            best = rect

    if best is None:
        logger.debug("No page quadrilateral among %d contours", len(contours))
    else:
        logger.debug("Page quadrilateral %s (score %.3f)", best.tolist(), best_score)
    return best
