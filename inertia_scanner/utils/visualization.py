"""
Visualization Module
=====================

Display layer: animates live quote bubbles, dims the scene while hands are
active, and draws the status HUD. Reads only the bubble snapshot and the
active-hand count.
"""

import math
import textwrap
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import cv2
import numpy as np

from ..effects.bubbles import Bubble

Color = Tuple[int, int, int]


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_hud: bool = True
    show_fps: bool = False

    # Bubble animation
    float_duration: float = 18.0   # Seconds to rise past the top edge
    fade_in: float = 2.0           # Seconds to reach full opacity
    pop_rate: float = 6.0          # Scale-in speed (1/s)
    panel_width: int = 420
    panel_padding: int = 18
    shadow_offset: int = 14

    # Colors (BGR format)
    accent_color: Color = (212, 182, 6)      # Cyan
    text_color: Color = (255, 255, 255)
    panel_color: Color = (10, 10, 10)

    # Font settings
    font_scale: float = 0.8
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            show_hud=config.get("show_hud", True),
            show_fps=config.get("show_fps", False),
            float_duration=config.get("float_duration", 18.0),
            fade_in=config.get("fade_in", 2.0),
            pop_rate=config.get("pop_rate", 6.0),
            panel_width=config.get("panel_width", 420),
            panel_padding=config.get("panel_padding", 18),
            shadow_offset=config.get("shadow_offset", 14),
            accent_color=tuple(colors.get("accent", [212, 182, 6])),
            text_color=tuple(colors.get("text", [255, 255, 255])),
            panel_color=tuple(colors.get("panel", [10, 10, 10])),
            font_scale=config.get("font_scale", 0.8),
            font_thickness=config.get("font_thickness", 2),
        )


def blend_patch(image: np.ndarray, patch: np.ndarray, alpha: np.ndarray, x: int, y: int) -> None:
    """Blend `patch` onto `image` at top-left (x, y) using a per-pixel alpha in [0, 1]."""
    h, w = patch.shape[:2]
    H, W = image.shape[:2]
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(W, x + w), min(H, y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0, sy0 = x0 - x, y0 - y
    sx1, sy1 = sx0 + (x1 - x0), sy0 + (y1 - y0)
    roi = image[y0:y1, x0:x1]
    src = patch[sy0:sy1, sx0:sx1].astype(np.float32)
    a = alpha[sy0:sy1, sx0:sx1, None]
    roi[:] = (src * a + roi.astype(np.float32) * (1.0 - a)).astype(np.uint8)


class Visualizer:
    """
    Renders the display layer on top of the processed frame.

    Example:
        >>> viz = Visualizer(VisualizerConfig())
        >>> viz.dim(canvas, loop.active_count)
        >>> viz.draw_bubbles(canvas, loop.live_bubbles(now), now)
        >>> viz.draw_status(canvas, loop.active_count)
    """

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX
        self._panels: Dict[str, Tuple[np.ndarray, np.ndarray]] = {}

    # -- Scene ---------------------------------------------------------------

    @staticmethod
    def dim_alpha(active_count: int) -> float:
        """Darkening applied to the scene: heavier with more active hands."""
        if active_count > 0:
            return min(0.9, 0.3 + active_count * 0.2)
        return 0.2

    def dim(self, image: np.ndarray, active_count: int) -> np.ndarray:
        """Darken the whole frame in place."""
        alpha = self.dim_alpha(active_count)
        cv2.convertScaleAbs(image, dst=image, alpha=1.0 - alpha)
        return image

    # -- Bubbles -------------------------------------------------------------

    def bubble_pose(self, bubble: Bubble, now: float, frame_height: int) -> Tuple[float, float, float, float]:
        """
        Animated placement of a bubble at `now`.

        Returns:
            (center_x, top_y, scale, opacity)
        """
        cfg = self.config
        age = max(0.0, bubble.age(now))
        travel = min(1.0, age / cfg.float_duration)

        target_y = -frame_height - 500.0
        top_y = bubble.anchor.y + (target_y - bubble.anchor.y) * travel
        center_x = bubble.anchor.x + bubble.drift_x * travel
        scale = 1.0 - math.exp(-cfg.pop_rate * age)
        opacity = min(1.0, age / cfg.fade_in) if cfg.fade_in > 0 else 1.0
        return center_x, top_y, scale, opacity

    def draw_bubbles(self, image: np.ndarray, bubbles: Iterable[Bubble], now: float) -> np.ndarray:
        """Draw every live bubble at its current animated position."""
        height = image.shape[0]
        live_ids = set()

        for bubble in bubbles:
            live_ids.add(bubble.id)
            center_x, top_y, scale, opacity = self.bubble_pose(bubble, now, height)
            if scale <= 0.01 or opacity <= 0.0:
                continue

            panel, mask = self._panel_for(bubble)
            patch, alpha = self._transform(panel, mask, scale, bubble.rotation)
            ph, pw = patch.shape[:2]
            blend_patch(image, patch, alpha * opacity,
                        int(center_x - pw / 2), int(top_y - (ph - panel.shape[0] * scale) / 2))

        # Forget panels of bubbles that are gone
        for stale in set(self._panels) - live_ids:
            del self._panels[stale]

        return image

    def _panel_for(self, bubble: Bubble) -> Tuple[np.ndarray, np.ndarray]:
        if bubble.id not in self._panels:
            self._panels[bubble.id] = self._render_panel(bubble.text)
        return self._panels[bubble.id]

    def _render_panel(self, text: str) -> Tuple[np.ndarray, np.ndarray]:
        """Boxed quote with a hard offset shadow, plus its opacity mask."""
        cfg = self.config
        pad = cfg.panel_padding
        inner_width = cfg.panel_width - 2 * pad

        (char_w, char_h), baseline = cv2.getTextSize("M", self._font, cfg.font_scale, cfg.font_thickness)
        lines = textwrap.wrap('"%s"' % text.upper(), width=max(1, inner_width // char_w)) or [""]
        line_h = char_h + baseline + 8

        box_w = cfg.panel_width
        box_h = 2 * pad + line_h * len(lines)
        off = cfg.shadow_offset
        panel = np.zeros((box_h + off, box_w + off, 3), dtype=np.uint8)
        mask = np.zeros(panel.shape[:2], dtype=np.float32)

        cv2.rectangle(panel, (off, off), (box_w + off - 1, box_h + off - 1), cfg.accent_color, -1)
        mask[off:, off:] = 1.0
        cv2.rectangle(panel, (0, 0), (box_w - 1, box_h - 1), cfg.panel_color, -1)
        cv2.rectangle(panel, (0, 0), (box_w - 1, box_h - 1), cfg.accent_color, 4)
        mask[:box_h, :box_w] = 1.0

        y = pad + char_h
        for line in lines:
            cv2.putText(panel, line, (pad, y), self._font, cfg.font_scale,
                        cfg.text_color, cfg.font_thickness, cv2.LINE_AA)
            y += line_h

        return panel, mask

    @staticmethod
    def _transform(panel: np.ndarray, mask: np.ndarray, scale: float,
                   rotation: float) -> Tuple[np.ndarray, np.ndarray]:
        """Scale and rotate a panel about its centre onto a canvas that fits it."""
        h, w = panel.shape[:2]
        rad = math.radians(rotation)
        out_w = int(math.ceil((abs(w * math.cos(rad)) + abs(h * math.sin(rad))) * scale)) + 2
        out_h = int(math.ceil((abs(h * math.cos(rad)) + abs(w * math.sin(rad))) * scale)) + 2

        # cv2 angles are counter-clockwise; bubble rotation is clockwise-positive
        m = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), -rotation, scale)
        m[0, 2] += out_w / 2.0 - w / 2.0
        m[1, 2] += out_h / 2.0 - h / 2.0

        patch = cv2.warpAffine(panel, m, (out_w, out_h), flags=cv2.INTER_LINEAR)
        alpha = cv2.warpAffine(mask, m, (out_w, out_h), flags=cv2.INTER_LINEAR)
        return patch, alpha

    # -- HUD -----------------------------------------------------------------

    def draw_status(self, image: np.ndarray, active_count: int) -> np.ndarray:
        """Status line and signal bar driven by the active-hand count."""
        if not self.config.show_hud:
            return image

        height, width = image.shape[:2]
        cfg = self.config
        locked = active_count > 0

        label = "DETECTED_%d_STREAMS" % active_count if locked else "WAITING_FOR_SIGNAL"
        marker_color = cfg.text_color if locked else cfg.accent_color
        cv2.rectangle(image, (30, 30), (48, 48), marker_color, -1)
        cv2.putText(image, label, (62, 47), self._font, 0.7, cfg.accent_color, 2, cv2.LINE_AA)

        # Signal bar: 5% idle, 50% one hand, 100% two or more
        bar_w, bar_h = 260, 10
        x0, y0 = width - bar_w - 30, height - bar_h - 30
        fill = 0.05 if not locked else (1.0 if active_count >= 2 else 0.5)
        cv2.rectangle(image, (x0, y0), (x0 + bar_w, y0 + bar_h), (90, 90, 90), 1)
        cv2.rectangle(image, (x0 + 2, y0 + 2), (x0 + 2 + int((bar_w - 4) * fill), y0 + bar_h - 2),
                      cfg.text_color if locked else cfg.accent_color, -1)
        return image

    def draw_performance(self, image: np.ndarray, fps: float) -> np.ndarray:
        """FPS readout in the bottom-left corner."""
        if not self.config.show_fps:
            return image
        height = image.shape[0]
        cv2.putText(image, "FPS: %.1f" % fps, (30, height - 30), self._font, 0.5,
                    self.config.accent_color, 1, cv2.LINE_AA)
        return image
