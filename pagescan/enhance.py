"""
Legibility enhancement of a rectified page.

Every mode starts from the same shadow-compensated grayscale and its adaptive
threshold mask. ``binarize`` returns the mask, ``color`` returns a luminance
equalized copy of the original colors, and ``auto`` picks between the two
depending on how much contrast the page already has.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple, Union

import cv2
import numpy as np

from pagescan import settings
from pagescan.imaging import normalize_illumination, to_gray, to_rgb
from pagescan.models import EnhancementMode

logger = logging.getLogger(__name__)


def binarize(
    normalized: np.ndarray,
    block_size: int = settings.ADAPTIVE_BLOCK_SIZE,
    offset: int = settings.ADAPTIVE_OFFSET,
    opening_kernel: Tuple[int, int] = settings.OPENING_KERNEL,
) -> np.ndarray:
    """Adaptive threshold with speckle removal. Paper is 255, ink is 0."""
    ink = cv2.adaptiveThreshold(
        normalized,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY_INV,
        block_size,
        offset,
    )
    kernel = np.ones(opening_kernel, np.uint8)
    ink = cv2.morphologyEx(ink, cv2.MORPH_OPEN, kernel)
    return cv2.bitwise_not(ink)


def equalize_color(image: np.ndarray) -> np.ndarray:
    """Histogram-equalize luminance only, keeping chroma."""
    ycrcb = cv2.cvtColor(to_rgb(image), cv2.COLOR_RGB2YCrCb)
    y, cr, cb = cv2.split(ycrcb)
    y = cv2.equalizeHist(y)
    return cv2.cvtColor(cv2.merge([y, cr, cb]), cv2.COLOR_YCrCb2RGB)


def prefers_mask(
    normalized: np.ndarray, threshold: float = settings.AUTO_CONTRAST_STDDEV
) -> bool:
    """Auto mode: binarize only pages that already carry strong contrast."""
    return float(np.std(normalized)) > threshold


def _binarize_mode(image: np.ndarray, normalized: np.ndarray, mask: np.ndarray) -> np.ndarray:
    return mask


def _color_mode(image: np.ndarray, normalized: np.ndarray, mask: np.ndarray) -> np.ndarray:
    return equalize_color(image)


def _auto_mode(image: np.ndarray, normalized: np.ndarray, mask: np.ndarray) -> np.ndarray:
    if prefers_mask(normalized):
        logger.debug("Auto enhancement: binarizing (stddev %.1f)", float(np.std(normalized)))
        return mask
    logger.debug("Auto enhancement: keeping color (stddev %.1f)", float(np.std(normalized)))
    return equalize_color(image)


_HANDLERS: Dict[EnhancementMode, Callable[[np.ndarray, np.ndarray, np.ndarray], np.ndarray]] = {
    EnhancementMode.AUTO: _auto_mode,
    EnhancementMode.BINARIZE: _binarize_mode,
    EnhancementMode.COLOR: _color_mode,
}


def apply_mode(
    image: np.ndarray, normalized: np.ndarray, mode: Union[EnhancementMode, str]
) -> np.ndarray:
    """Run one enhancement mode given the page and its normalized grayscale."""
    handler = _HANDLERS.get(EnhancementMode.parse(mode), _auto_mode)
    return handler(image, normalized, binarize(normalized))


def enhance_document(
    image: np.ndarray, mode: Union[EnhancementMode, str] = EnhancementMode.AUTO
) -> np.ndarray:
    """Enhance a rectified page. Binary results are single channel, color results RGB."""
    return apply_mode(image, normalize_illumination(to_gray(image)), mode)
