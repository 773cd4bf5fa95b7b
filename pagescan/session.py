"""
Live capture state.

A ``CaptureSession`` is fed one frame per display refresh. It runs at most one
scan at a time, remembers the last page quadrilateral so an explicit capture
can skip detection, and holds the last finished scan for manual rotation.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Union

import numpy as np

from pagescan import settings
from pagescan.imaging import rotate
from pagescan.models import EnhancementMode, OutputSizeProfile, Quad
from pagescan.pipeline import ScanResult, scan

logger = logging.getLogger(__name__)


class CaptureSession:
    """Per-session scan state: in-flight guard, cached quad, stability counter, result."""

    def __init__(
        self,
        mode: Union[EnhancementMode, str] = EnhancementMode.AUTO,
        profile: Union[OutputSizeProfile, str] = OutputSizeProfile.STANDARD,
        stable_frames: int = settings.STABLE_FRAME_COUNT,
    ):
        self.mode = EnhancementMode.parse(mode)
        self.profile = OutputSizeProfile.parse(profile)
        self.stable_frames = stable_frames

        self.in_flight = False
        self.last_quad: Optional[Quad] = None
        self.stable_count = 0
        self.result: Optional[np.ndarray] = None

    @property
    def is_stable(self) -> bool:
        """True once a page has been found on enough consecutive ticks."""
        return self.stable_count >= self.stable_frames

    def _run_pass(self, frame: np.ndarray, quad: Optional[Quad]) -> ScanResult:
        self.in_flight = True
        try:
            outcome = scan(frame, self.mode, self.profile, quad)
        finally:
            self.in_flight = False
        self.result = outcome.image
        return outcome

    def tick(self, frame: np.ndarray) -> Optional[np.ndarray]:
        """One live analysis pass. Returns None if a pass is already running."""
        if self.in_flight:
            logger.debug("Pass still running, skipping tick")
            return None

        outcome = self._run_pass(frame, None)
        if outcome.quad is not None:
            self.last_quad = outcome.quad
            self.stable_count += 1
        else:
            self.stable_count = 0
        return outcome.image

    def capture(self, frame: np.ndarray) -> Optional[np.ndarray]:
        """Explicit capture, reusing the last detected quad when there is one."""
        if self.in_flight:
            logger.debug("Pass still running, ignoring capture")
            return None

        outcome = self._run_pass(frame, self.last_quad)
        if outcome.quad is not None:
            self.last_quad = outcome.quad
        return outcome.image

    def run(
        self,
        frames: Iterable[np.ndarray],
        on_result: Optional[Callable[[np.ndarray], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> int:
        """Tick over a stream of frames. Failed frames are reported, not fatal."""
        completed = 0
        for index, frame in enumerate(frames):
            try:
                image = self.tick(frame)
            except Exception as exc:
                logger.exception("Frame %d failed: %s", index, exc)
                if on_error is not None:
                    on_error(exc)
                continue

            if image is None:
                continue
            completed += 1
            if on_result is not None:
                on_result(image)
        return completed

    def rotate_left(self) -> Optional[np.ndarray]:
        return self._rotate_result(270)

    def rotate_right(self) -> Optional[np.ndarray]:
        return self._rotate_result(90)

    def rotate_180(self) -> Optional[np.ndarray]:
        return self._rotate_result(180)

    def _rotate_result(self, angle: int) -> Optional[np.ndarray]:
        if self.result is None:
            return None
        self.result = rotate(self.result, angle)
        return self.result
