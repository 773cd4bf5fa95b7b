"""Raster helpers shared by the pipeline stages. Color rasters are RGB or RGBA."""

from __future__ import annotations

import cv2
import numpy as np

from pagescan import settings
from pagescan.errors import InvalidImageError

_QUARTER_TURNS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def check_image(image: np.ndarray) -> np.ndarray:
    """Reject anything that is not a non-empty uint8 gray, RGB or RGBA array."""
    if image is None or not isinstance(image, np.ndarray) or image.size == 0:
        raise InvalidImageError("Image is empty")
    if image.dtype != np.uint8:
        raise InvalidImageError(f"Expected uint8 pixels, got {image.dtype}")
    if image.ndim == 3 and image.shape[2] in (3, 4):
        return image
    if image.ndim == 2:
        return image
    raise InvalidImageError(f"Unsupported image shape {image.shape}")


def channels(image: np.ndarray) -> int:
    return 1 if image.ndim == 2 else image.shape[2]


def to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)


def to_rgb(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image


def to_channels(image: np.ndarray, count: int) -> np.ndarray:
    """Convert to 3 (RGB) or 4 (RGBA, opaque) channels."""
    rgb = to_rgb(image)
    if count == 4:
        return cv2.cvtColor(rgb, cv2.COLOR_RGB2RGBA)
    return rgb


def normalize_illumination(
    gray: np.ndarray, sigma: float = settings.ILLUMINATION_BLUR_SIGMA
) -> np.ndarray:
    """Subtract a wide-blur background estimate and stretch to 0..255."""
    background = cv2.GaussianBlur(gray, (0, 0), sigmaX=sigma, sigmaY=sigma)
    flat = gray.astype(np.float32) - background.astype(np.float32)
    return cv2.normalize(flat, None, 0, 255, cv2.NORM_MINMAX, dtype=cv2.CV_8U)


def ink_mask(image: np.ndarray) -> np.ndarray:
    """Otsu-binarize so that dark ink is 255 and paper is 0."""
    gray = to_gray(image)
    _, mask = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU)
    return mask


def rotate(image: np.ndarray, angle: int) -> np.ndarray:
    """Rotate clockwise by a multiple of 90 degrees without resampling."""
    angle = int(angle) % 360
    if angle == 0:
        return image.copy()
    if angle not in _QUARTER_TURNS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {angle}")
    return cv2.rotate(image, _QUARTER_TURNS[angle])
