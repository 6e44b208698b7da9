"""
Frame rate tracking for the display loop.
"""

import time
from collections import deque
from typing import Callable, Deque


class FrameRateMonitor:
    """
    Sliding-window FPS over the most recent frames.

    Example:
        >>> fps = FrameRateMonitor(window_size=30)
        >>> while running:
        ...     fps.tick()
        ...     print(fps.fps)
    """

    def __init__(self, window_size: int = 30, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._stamps: Deque[float] = deque(maxlen=window_size)
        self.total_frames = 0

    def tick(self) -> None:
        """Mark one displayed frame."""
        self._stamps.append(self._clock())
        self.total_frames += 1

    @property
    def fps(self) -> float:
        if len(self._stamps) < 2:
            return 0.0
        span = self._stamps[-1] - self._stamps[0]
        if span <= 0:
            return 0.0
        return (len(self._stamps) - 1) / span

    def reset(self) -> None:
        self._stamps.clear()
        self.total_frames = 0
