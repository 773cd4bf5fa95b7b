"""
pagescan: turn photographed pages into upright, enhanced A4 scans.

The pipeline is purely geometric: page boundary detection, perspective
correction, contrast enhancement and orientation from ink statistics. No text
recognition is involved.
"""

__version__ = "0.1.0"

from pagescan.errors import DegenerateQuadError, InvalidImageError, ScanError
from pagescan.models import EnhancementMode, OutputSizeProfile
from pagescan.pipeline import ScanResult, process_page, scan
from pagescan.session import CaptureSession

__all__ = [
    "CaptureSession",
    "DegenerateQuadError",
    "EnhancementMode",
    "InvalidImageError",
    "OutputSizeProfile",
    "ScanError",
    "ScanResult",
    "process_page",
    "scan",
]
