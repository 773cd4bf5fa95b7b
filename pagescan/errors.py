"""Exceptions raised by the scan pipeline."""


class ScanError(Exception):
    """Base class for failures while processing a single image."""


class DegenerateQuadError(ScanError, ValueError):
    """The page quadrilateral collapses to a line or a point."""


class InvalidImageError(ScanError, ValueError):
    """The input raster is empty or has an unsupported layout."""
