"""
Shared fixtures: synthetic hands in display space and a controllable clock.
"""

import pytest

from inertia_scanner.detection.landmarks import HandLandmarkSet

FINGERS = ("index", "middle", "ring", "pinky")


def create_mock_hand(
    thumb_up: bool = True,
    folded=FINGERS,
    origin=(640.0, 500.0),
    handedness: str = "Right",
    overrides=None,
) -> HandLandmarkSet:
    """
    Build a 21-point hand in pixel space (y grows downward).

    Args:
        thumb_up: Thumb tip above IP above MCP
        folded: Fingers whose tip sits below their PIP joint
        origin: Wrist position
        overrides: {index: (x, y)} applied last
    """
    wx, wy = origin
    points = [(wx, wy)]  # Wrist

    # Thumb CMC, MCP, IP, TIP
    if thumb_up:
        points += [(wx - 40, wy - 30), (wx - 60, wy - 60), (wx - 70, wy - 100), (wx - 75, wy - 140)]
    else:
        points += [(wx - 40, wy - 30), (wx - 60, wy - 60), (wx - 80, wy - 55), (wx - 100, wy - 50)]

    # Index, middle, ring, pinky: MCP, PIP, DIP, TIP
    for i, finger in enumerate(FINGERS):
        fx = wx - 20 + i * 25
        mcp, pip, dip = wy - 100, wy - 140, wy - 160
        tip = wy - 110 if finger in folded else wy - 180
        points += [(fx, mcp), (fx, pip), (fx, dip), (fx, tip)]

    for index, value in (overrides or {}).items():
        points[index] = value

    return HandLandmarkSet.from_points(points, handedness=handedness, confidence=0.95)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def thumbs_up_hand():
    return create_mock_hand()


@pytest.fixture
def clock():
    return FakeClock()
