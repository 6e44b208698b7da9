"""
Hand Landmark Types
====================

Display-space landmark containers shared by the classifier, the skeleton
renderer and the frame loop. Nothing here depends on MediaPipe.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Tuple


NUM_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class Point(NamedTuple):
    """A 2D point in display space (pixels, y grows downward)."""
    x: float
    y: float

    def to_pixel(self) -> Tuple[int, int]:
        """Round to integer pixel coordinates for OpenCV drawing."""
        return (int(round(self.x)), int(round(self.y)))


@dataclass(frozen=True)
class HandLandmarkSet:
    """
    The 21 display-space landmarks of one tracked hand for one frame.

    Produced fresh every frame by the hand detector and only ever read
    afterwards.
    """
    points: Tuple[Point, ...]
    handedness: str = ""
    confidence: float = 0.0

    @classmethod
    def from_points(cls, points: List[Tuple[float, float]],
                    handedness: str = "", confidence: float = 0.0) -> "HandLandmarkSet":
        """Build a landmark set from any sequence of (x, y) pairs."""
        return cls(
            points=tuple(Point(float(x), float(y)) for x, y in points),
            handedness=handedness,
            confidence=confidence,
        )

    def get(self, index: LandmarkIndex) -> Point:
        """Get landmark by index."""
        return self.points[index]

    @property
    def is_complete(self) -> bool:
        """True when every anatomical landmark is present."""
        return len(self.points) >= NUM_LANDMARKS

    @property
    def thumb_tip(self) -> Point:
        return self.get(LandmarkIndex.THUMB_TIP)

    def __len__(self) -> int:
        return len(self.points)
