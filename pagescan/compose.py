"""Fit a page onto a fixed A4 canvas."""

from __future__ import annotations

import logging
from typing import Union

import cv2
import numpy as np

from pagescan.imaging import to_channels
from pagescan.models import OutputSizeProfile

logger = logging.getLogger(__name__)


def fit_to_page(
    image: np.ndarray,
    profile: Union[OutputSizeProfile, str] = OutputSizeProfile.STANDARD,
    channels: int = 3,
) -> np.ndarray:
    """Scale uniformly and center on a white canvas of exactly the profile's size."""
    target_w, target_h = OutputSizeProfile.parse(profile).size
    src_h, src_w = image.shape[:2]

    scale = min(target_w / float(src_w), target_h / float(src_h))
    new_w = int(np.clip(round(src_w * scale), 1, target_w))
    new_h = int(np.clip(round(src_h * scale), 1, target_h))
    interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
    resized = cv2.resize(image, (new_w, new_h), interpolation=interpolation)

    canvas = np.full((target_h, target_w, channels), 255, dtype=np.uint8)
    x0 = (target_w - new_w) // 2
    y0 = (target_h - new_h) // 2
    canvas[y0:y0 + new_h, x0:x0 + new_w] = to_channels(resized, channels)

    logger.debug("Placed %dx%d page at (%d, %d) on %dx%d canvas", new_w, new_h, x0, y0, target_w, target_h)
    return canvas
