"""
Tunable constants for the scan pipeline.

Helper functions take keyword overrides that default to these names. The
top-level stage entry points (enhance_document, auto_upright,
fix_upside_down, process_page) always run with these defaults.
"""

from __future__ import annotations

import math

# Illumination normalization (shared by detection and enhancement).
ILLUMINATION_BLUR_SIGMA = 25.0

# Page boundary detection.
EDGE_BLUR_KERNEL = (5, 5)
CANNY_LOW = 50
CANNY_HIGH = 150
POLY_APPROX_TOLERANCE = 0.02  # fraction of the contour perimeter
MIN_QUAD_AREA_RATIO = 0.10
A4_SHORT_LONG_RATIO = 1.0 / math.sqrt(2.0)

# Perspective rectification.
MIN_RECTIFIED_SIDE = 2
MIN_QUAD_POLYGON_AREA = 1.0

# Enhancement.
ADAPTIVE_BLOCK_SIZE = 31
ADAPTIVE_OFFSET = 10
OPENING_KERNEL = (2, 2)
AUTO_CONTRAST_STDDEV = 30.0  # above this the page is binarized in auto mode

# Orientation scoring.
LINE_MIN_LENGTH_RATIO = 0.20  # of the rotated raster's width
LINE_MAX_GAP = 10
LINE_HOUGH_VOTES = 80
HORIZONTAL_TOLERANCE_DEG = 10.0
LINE_SCORE_WEIGHT = 0.8

# Upside-down resolution.
BAND_HEIGHT_RATIO = 0.12
BAND_MIN_HEIGHT = 40
FLIP_DENSITY_RATIO = 1.25

# Output canvas short edges in pixels.
PROFILE_SHORT_EDGES = {
    "draft": 1600,
    "standard": 2400,
    "high": 3300,
}

# Live capture.
STABLE_FRAME_COUNT = 3

# Batch driver.
IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}
PDF_RESOLUTION_DPI = 200
