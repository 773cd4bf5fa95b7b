"""
Tests for fitting pages onto the A4 canvas.
"""

import numpy as np
import pytest

from pagescan.compose import fit_to_page
from pagescan.models import OutputSizeProfile


def test_profile_sizes():
    assert OutputSizeProfile.DRAFT.size == (1600, 2263)
    assert OutputSizeProfile.STANDARD.size == (2400, 3394)
    assert OutputSizeProfile.HIGH.size == (3300, 4667)


@pytest.mark.parametrize("profile", list(OutputSizeProfile))
@pytest.mark.parametrize(
    "shape",
    [(100, 100, 3), (600, 800, 3), (800, 600, 3), (100, 3000, 3), (5000, 10, 3), (37, 53)],
)
def test_output_is_always_profile_size(profile, shape):
    image = np.zeros(shape, dtype=np.uint8)
    width, height = profile.size

    canvas = fit_to_page(image, profile)

    assert canvas.shape == (height, width, 3)


def test_padding_is_white_and_page_is_centered():
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    canvas = fit_to_page(image, "draft")

    # 1600 x 1600 page centered vertically in 1600 x 2263.
    top = (2263 - 1600) // 2
    assert canvas[:top].min() == 255
    assert canvas[top + 1600:].min() == 255
    assert canvas[top:top + 1600].max() == 0


def test_rgba_canvas_is_opaque():
    image = np.zeros((200, 100), dtype=np.uint8)
    canvas = fit_to_page(image, OutputSizeProfile.DRAFT, channels=4)
    assert canvas.shape == (2263, 1600, 4)
    assert canvas[:, :, 3].min() == 255


def test_unknown_profile_is_rejected():
    with pytest.raises(ValueError):
        fit_to_page(np.zeros((10, 10, 3), dtype=np.uint8), "poster")
