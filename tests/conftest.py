"""
Synthetic page photos for the pipeline tests.
"""

import cv2
import numpy as np
import pytest


def _text_lines(image, x0, y0, x1, y1, spacing=24, thickness=6, color=0):
    """Draw horizontal bars standing in for lines of text."""
    for y in range(y0, y1 - thickness, spacing):
        cv2.rectangle(image, (x0, y), (x1, y + thickness), color, thickness=cv2.FILLED)
    return image


@pytest.fixture
def text_page():
    """White portrait page (RGB) with dark horizontal text lines."""

    def build(width=400, height=600):
        page = np.full((height, width, 3), 255, dtype=np.uint8)
        margin = width // 8
        return _text_lines(page, margin, height // 10, width - margin, height - height // 10, color=(0, 0, 0))

    return build


@pytest.fixture
def page_photo():
    """A bright page quad with text on a dark desk, as an RGB photo."""

    def build(corners, width=800, height=600, background=35, paper=225):
        photo = np.full((height, width, 3), background, dtype=np.uint8)
        quad = np.array(corners, dtype=np.int32)
        cv2.fillPoly(photo, [quad], (paper, paper, paper))

        xs, ys = quad[:, 0], quad[:, 1]
        inner = (int(xs.min()) + 40, int(ys.min()) + 40, int(xs.max()) - 40, int(ys.max()) - 40)
        _text_lines(photo, *inner, color=(60, 60, 60))
        return photo

    return build


@pytest.fixture
def a4_corners():
    return [(220, 40), (560, 55), (575, 560), (205, 545)]
