"""
The full scan transform: detect, rectify, enhance, orient, compose.

``process_page`` is the only entry point the capture session and the batch
driver use. It returns nothing until all six stages have finished.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from pagescan.compose import fit_to_page
from pagescan.detect import find_page_quad, order_points
from pagescan.enhance import enhance_document
from pagescan.imaging import channels, check_image
from pagescan.models import EnhancementMode, OutputSizeProfile, Quad
from pagescan.orientation import auto_upright, fix_upside_down
from pagescan.rectify import correct_perspective

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    image: np.ndarray
    quad: Optional[Quad]
    rotation: int
    flipped: bool


def scan(
    image: np.ndarray,
    mode: Union[EnhancementMode, str] = EnhancementMode.AUTO,
    profile: Union[OutputSizeProfile, str] = OutputSizeProfile.STANDARD,
    quad: Optional[Quad] = None,
) -> ScanResult:
    """Run all stages and report what was decided along the way."""
    image = check_image(image)
    out_channels = max(3, channels(image))

    if quad is None:
        quad = find_page_quad(image)
    else:
        quad = order_points(quad)

    page = correct_perspective(image, quad)
    page = enhance_document(page, mode)
    page, rotation = auto_upright(page)
    page, flipped = fix_upside_down(page)
    page = fit_to_page(page, profile, out_channels)

    logger.debug(
        "Scanned %dx%d -> %dx%d (quad=%s, rotation=%d, flipped=%s)",
        image.shape[1], image.shape[0], page.shape[1], page.shape[0],
        quad is not None, rotation, flipped,
    )
    return ScanResult(image=page, quad=quad, rotation=rotation, flipped=flipped)


def process_page(
    image: np.ndarray,
    mode: Union[EnhancementMode, str] = EnhancementMode.AUTO,
    profile: Union[OutputSizeProfile, str] = OutputSizeProfile.STANDARD,
    quad: Optional[Quad] = None,
) -> np.ndarray:
    """Turn a photographed page into an upright, enhanced A4 scan."""
    return scan(image, mode, profile, quad).image
