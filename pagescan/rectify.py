"""Perspective correction of a detected page."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from pagescan import settings
from pagescan.errors import DegenerateQuadError
from pagescan.models import Quad

logger = logging.getLogger(__name__)


def target_size(rect: Quad) -> Tuple[int, int]:
    """Output (width, height): the longer edge of each opposite pair."""
    tl, tr, br, bl = rect
    width_a = np.linalg.norm(br - bl)
    width_b = np.linalg.norm(tr - tl)
    height_a = np.linalg.norm(tr - br)
    height_b = np.linalg.norm(tl - bl)
    return int(round(max(width_a, width_b))), int(round(max(height_a, height_b)))


def _has_collinear_corners(rect: Quad) -> bool:
    """True when any three of the four corners lie on one line."""
    for skip in range(4):
        a, b, c = (rect[i] for i in range(4) if i != skip)
        cross = (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
        if abs(cross) / 2.0 < settings.MIN_QUAD_POLYGON_AREA:
            return True
    return False


def correct_perspective(
    image: np.ndarray,
    rect: Optional[Quad],
    min_side: int = settings.MIN_RECTIFIED_SIDE,
) -> np.ndarray:
    """Warp the quadrilateral to a top-down rectangle; no quad means no change."""
    if rect is None:
        return image

    rect = np.asarray(rect, dtype="float32").reshape(4, 2)
    max_width, max_height = target_size(rect)
    if max_width < min_side or max_height < min_side:
        raise DegenerateQuadError(f"Page quad collapses to {max_width}x{max_height}")
    if abs(cv2.contourArea(rect)) < settings.MIN_QUAD_POLYGON_AREA or _has_collinear_corners(rect):
        raise DegenerateQuadError("Page quad corners are collinear")

    dst = np.array(
        [[0, 0], [max_width - 1, 0], [max_width - 1, max_height - 1], [0, max_height - 1]],
        dtype="float32",
    )

    matrix = cv2.getPerspectiveTransform(rect, dst)
    logger.debug("Rectifying page to %dx%d", max_width, max_height)
    return cv2.warpPerspective(
        image,
        matrix,
        (max_width, max_height),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_REPLICATE,
    )
