"""Runtime choices for a scan and the quadrilateral type."""

from __future__ import annotations

from enum import Enum
from typing import Tuple, Union

import numpy as np

from pagescan import settings

# Four ordered corners, shape (4, 2) float32: tl, tr, br, bl.
Quad = np.ndarray


class EnhancementMode(str, Enum):
    AUTO = "auto"
    BINARIZE = "binarize"
    COLOR = "color"

    @classmethod
    def parse(cls, value: Union[str, "EnhancementMode", None]) -> "EnhancementMode":
        """Map a mode or its string value to a member; unknown values mean auto."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.AUTO


class OutputSizeProfile(str, Enum):
    DRAFT = "draft"
    STANDARD = "standard"
    HIGH = "high"

    @property
    def short_edge(self) -> int:
        return settings.PROFILE_SHORT_EDGES[self.value]

    @property
    def long_edge(self) -> int:
        return int(round(self.short_edge / settings.A4_SHORT_LONG_RATIO))

    @property
    def size(self) -> Tuple[int, int]:
        """Canvas (width, height), portrait."""
        return self.short_edge, self.long_edge

    @classmethod
    def parse(cls, value: Union[str, "OutputSizeProfile"]) -> "OutputSizeProfile":
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


__all__ = ["EnhancementMode", "OutputSizeProfile", "Quad"]
