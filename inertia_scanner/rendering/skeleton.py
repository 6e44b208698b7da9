"""
Skeleton Overlay
=================

Draws each hand's skeleton on the frame. Emphasis (stroke weight, colour,
glow, thumb-tip marker) depends only on whether the hand is showing a
thumbs-up in the current frame.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..detection.landmarks import HandLandmarkSet, LandmarkIndex

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Hand connection pairs for drawing skeleton
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),        # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),        # Index
    (0, 9), (9, 10), (10, 11), (11, 12),   # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),             # Palm base
]


@dataclass
class SkeletonStyle:
    """Stroke and marker styling (BGR colours)."""
    idle_color: Color = (238, 211, 34)        # Cyan
    idle_glow_color: Color = (212, 182, 6)
    active_color: Color = (255, 255, 255)
    active_glow_color: Color = (255, 255, 255)
    idle_thickness: int = 3
    active_thickness: int = 8
    idle_glow: float = 5.0                    # Gaussian sigma in pixels
    active_glow: float = 20.0
    marker_radius: int = 4
    active_tip_radius: int = 12

    @classmethod
    def from_dict(cls, config: dict) -> "SkeletonStyle":
        """Create style from dictionary."""
        colors = config.get("colors", {})
        return cls(
            idle_color=tuple(colors.get("idle", [238, 211, 34])),
            idle_glow_color=tuple(colors.get("idle_glow", [212, 182, 6])),
            active_color=tuple(colors.get("active", [255, 255, 255])),
            active_glow_color=tuple(colors.get("active_glow", [255, 255, 255])),
            idle_thickness=config.get("idle_thickness", 3),
            active_thickness=config.get("active_thickness", 8),
            idle_glow=config.get("idle_glow", 5.0),
            active_glow=config.get("active_glow", 20.0),
            marker_radius=config.get("marker_radius", 4),
            active_tip_radius=config.get("active_tip_radius", 12),
        )


class SkeletonRenderer:
    """
    Per-frame hand skeleton renderer.

    Holds no per-hand state; call `draw_hand` every frame with that frame's
    thumbs-up flag.
    """

    def __init__(self, style: Optional[SkeletonStyle] = None):
        self.style = style or SkeletonStyle()

    def draw_hands(
        self,
        image: np.ndarray,
        hands: Sequence[HandLandmarkSet],
        active: Sequence[bool],
    ) -> np.ndarray:
        """Draw every hand with its matching thumbs-up flag."""
        for hand, is_active in zip(hands, active):
            self.draw_hand(image, hand, is_active)
        return image

    def draw_hand(self, image: np.ndarray, hand: HandLandmarkSet, active: bool) -> np.ndarray:
        """
        Draw one hand skeleton.

        Args:
            image: BGR image to draw on (modified in place)
            hand: Display-space landmarks
            active: Thumbs-up flag for this hand in this frame

        Returns:
            The same image
        """
        if not hand.is_complete:
            return image

        s = self.style
        color = s.active_color if active else s.idle_color
        thickness = s.active_thickness if active else s.idle_thickness
        pixels = [p.to_pixel() for p in hand.points]
        segments = [(pixels[a], pixels[b]) for a, b in HAND_CONNECTIONS]

        self._draw_glow(
            image,
            segments,
            s.active_glow_color if active else s.idle_glow_color,
            thickness,
            s.active_glow if active else s.idle_glow,
        )

        for start, end in segments:
            cv2.line(image, start, end, color, thickness, cv2.LINE_AA)

        for i, pos in enumerate(pixels):
            if i == LandmarkIndex.THUMB_TIP and active:
                cv2.circle(image, pos, s.active_tip_radius, s.active_color, -1, cv2.LINE_AA)
            else:
                cv2.circle(image, pos, s.marker_radius, s.idle_color, -1, cv2.LINE_AA)

        return image

    @staticmethod
    def _draw_glow(
        image: np.ndarray,
        segments: List[Tuple[Tuple[int, int], Tuple[int, int]]],
        color: Color,
        thickness: int,
        sigma: float,
    ) -> None:
        """Blurred copy of the skeleton blended additively under the strokes."""
        if sigma <= 0:
            return

        height, width = image.shape[:2]
        pad = int(3 * sigma) + thickness
        xs = [x for seg in segments for x, _ in seg]
        ys = [y for seg in segments for _, y in seg]
        x0, y0 = max(0, min(xs) - pad), max(0, min(ys) - pad)
        x1, y1 = min(width, max(xs) + pad), min(height, max(ys) + pad)
        if x1 <= x0 or y1 <= y0:
            return

        roi = image[y0:y1, x0:x1]
        layer = np.zeros_like(roi)
        for (sx, sy), (ex, ey) in segments:
            cv2.line(layer, (sx - x0, sy - y0), (ex - x0, ey - y0), color, thickness, cv2.LINE_AA)

        layer = cv2.GaussianBlur(layer, (0, 0), sigmaX=sigma, sigmaY=sigma)
        cv2.add(roi, layer, dst=roi)
