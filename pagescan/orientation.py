"""
Upright page orientation without text recognition.

``auto_upright`` scores the four quarter turns with layout statistics: the
variance of row/column ink counts plus the total length of near-horizontal
line segments. That separates 0/180 from 90/270 well but not 0 from 180, so
``fix_upside_down`` follows it with a top/bottom ink density comparison.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import cv2
import numpy as np

from pagescan import settings
from pagescan.imaging import ink_mask, rotate, to_gray

logger = logging.getLogger(__name__)

ANGLES = (0, 90, 180, 270)


def projection_variance(mask: np.ndarray) -> float:
    """Larger of the row and column ink count variances."""
    ink = mask > 0
    rows = ink.sum(axis=1).astype(np.float64)
    cols = ink.sum(axis=0).astype(np.float64)
    return float(max(np.var(rows), np.var(cols)))


def horizontal_line_length(
    image: np.ndarray,
    min_length_ratio: float = settings.LINE_MIN_LENGTH_RATIO,
    max_gap: int = settings.LINE_MAX_GAP,
    tolerance_deg: float = settings.HORIZONTAL_TOLERANCE_DEG,
) -> float:
    """Summed length of Hough segments within the tolerance of horizontal."""
    gray = to_gray(image)
    edges = cv2.Canny(gray, settings.CANNY_LOW, settings.CANNY_HIGH)
    min_length = max(1, int(gray.shape[1] * min_length_ratio))
    lines = cv2.HoughLinesP(
        edges,
        1,
        np.pi / 180,
        threshold=settings.LINE_HOUGH_VOTES,
        minLineLength=min_length,
        maxLineGap=max_gap,
    )
    if lines is None:
        return 0.0

    total = 0.0
    for x1, y1, x2, y2 in lines.reshape(-1, 4):
        dx, dy = float(x2 - x1), float(y2 - y1)
        angle = abs(np.degrees(np.arctan2(dy, dx))) % 180.0
        if min(angle, 180.0 - angle) <= tolerance_deg:
            total += float(np.hypot(dx, dy))
    return total


def upright_score(image: np.ndarray, line_weight: float = settings.LINE_SCORE_WEIGHT) -> float:
    return projection_variance(ink_mask(image)) + line_weight * horizontal_line_length(image)


def force_portrait(image: np.ndarray) -> np.ndarray:
    h, w = image.shape[:2]
    if w > h:
        logger.debug("Landscape %dx%d, turning to portrait", w, h)
        return rotate(image, 90)
    return image


def score_rotations(image: np.ndarray) -> List[Tuple[int, float]]:
    """(angle, score) for each clockwise quarter turn."""
    return [(angle, upright_score(rotate(image, angle))) for angle in ANGLES]


def auto_upright(image: np.ndarray) -> Tuple[np.ndarray, int]:
    """Turn the page portrait, then apply the best scoring rotation."""
    portrait = force_portrait(image)
    best_angle, best_score = 0, -1.0
    for angle, score in score_rotations(portrait):
        if score > best_score:
            best_angle, best_score = angle, score
    logger.debug("Upright rotation %d deg (score %.1f)", best_angle, best_score)
    return rotate(portrait, best_angle), best_angle


def band_height(
    height: int,
    ratio: float = settings.BAND_HEIGHT_RATIO,
    minimum: int = settings.BAND_MIN_HEIGHT,
) -> int:
    return min(height, max(int(height * ratio), minimum))


def density_ratio(top_ink: int, bottom_ink: int) -> float:
    return top_ink / (bottom_ink + 1.0)


def is_upside_down(image: np.ndarray, threshold: float = settings.FLIP_DENSITY_RATIO) -> bool:
    """A page whose top band is denser than its bottom band is likely inverted."""
    mask = ink_mask(image)
    band = band_height(mask.shape[0])
    top_ink = int(np.count_nonzero(mask[:band]))
    bottom_ink = int(np.count_nonzero(mask[-band:]))
    ratio = density_ratio(top_ink, bottom_ink)
    logger.debug("Top/bottom ink %d/%d, ratio %.2f", top_ink, bottom_ink, ratio)
    return ratio > threshold


def fix_upside_down(image: np.ndarray) -> Tuple[np.ndarray, bool]:
    if is_upside_down(image):
        return rotate(image, 180), True
    return image, False
