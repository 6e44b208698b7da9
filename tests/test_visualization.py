"""
Tests for the Display Layer
=============================
"""

import numpy as np
import pytest

from inertia_scanner.detection.landmarks import Point
from inertia_scanner.effects.bubbles import Bubble
from inertia_scanner.utils.performance import FrameRateMonitor
from inertia_scanner.utils.visualization import Visualizer, VisualizerConfig, blend_patch

from conftest import FakeClock


def make_bubble(bubble_id="b1", anchor=(640.0, 500.0), drift_x=50.0, rotation=3.0, created_at=0.0):
    return Bubble(
        id=bubble_id,
        text="Peak effort detected",
        anchor=Point(*anchor),
        drift_x=drift_x,
        rotation=rotation,
        created_at=created_at,
        expires_at=created_at + 8.0,
    )


@pytest.fixture
def canvas():
    return np.zeros((720, 1280, 3), dtype=np.uint8)


@pytest.fixture
def visualizer():
    return Visualizer(VisualizerConfig())


class TestDimming:
    """Test suite for scene dimming."""

    @pytest.mark.parametrize("count, expected", [(0, 0.2), (1, 0.5), (2, 0.7), (3, 0.9), (6, 0.9)])
    def test_dim_alpha(self, count, expected):
        assert Visualizer.dim_alpha(count) == pytest.approx(expected)

    def test_dim_in_place(self, visualizer):
        image = np.full((10, 10, 3), 100, dtype=np.uint8)
        result = visualizer.dim(image, 0)

        assert result is image
        assert image[0, 0].tolist() == [80, 80, 80]


class TestBubbleAnimation:
    """Test suite for bubble placement and drawing."""

    def test_pose_at_birth(self, visualizer):
        center_x, top_y, scale, opacity = visualizer.bubble_pose(make_bubble(), 0.0, 720)

        assert center_x == pytest.approx(640.0)
        assert top_y == pytest.approx(500.0)
        assert scale == pytest.approx(0.0)
        assert opacity == pytest.approx(0.0)

    def test_pose_rises_and_drifts(self, visualizer):
        bubble = make_bubble()
        _, early_y, _, _ = visualizer.bubble_pose(bubble, 1.0, 720)
        center_x, late_y, scale, opacity = visualizer.bubble_pose(bubble, 4.0, 720)

        assert late_y < early_y < 500.0
        assert 640.0 < center_x < 690.0
        assert scale == pytest.approx(1.0, abs=1e-6)
        assert opacity == 1.0

    def test_pose_after_float_duration(self, visualizer):
        center_x, top_y, _, _ = visualizer.bubble_pose(make_bubble(), 18.0, 720)

        assert center_x == pytest.approx(690.0)
        assert top_y == pytest.approx(-1220.0)

    def test_draw_bubble_changes_pixels(self, visualizer, canvas):
        bubble = make_bubble(anchor=(640.0, 650.0))
        visualizer.draw_bubbles(canvas, [bubble], now=2.5)
        assert canvas.any()

    def test_newborn_bubble_is_invisible(self, visualizer, canvas):
        visualizer.draw_bubbles(canvas, [make_bubble()], now=0.0)
        assert not canvas.any()

    def test_panel_cache_is_pruned(self, visualizer, canvas):
        bubble = make_bubble(anchor=(640.0, 650.0))
        visualizer.draw_bubbles(canvas, [bubble], now=2.5)
        assert bubble.id in visualizer._panels

        visualizer.draw_bubbles(canvas, [], now=9.0)
        assert visualizer._panels == {}

    def test_bubble_off_screen(self, visualizer, canvas):
        bubble = make_bubble(anchor=(640.0, -2000.0))
        visualizer.draw_bubbles(canvas, [bubble], now=3.0)
        assert not canvas.any()


class TestBlendPatch:
    """Test suite for blend_patch."""

    def test_opaque(self, canvas):
        patch = np.full((4, 4, 3), 200, dtype=np.uint8)
        blend_patch(canvas, patch, np.ones((4, 4), dtype=np.float32), 10, 10)

        assert canvas[10, 10].tolist() == [200, 200, 200]
        assert canvas[13, 13].tolist() == [200, 200, 200]
        assert not canvas[14, 14].any()

    def test_half_alpha(self, canvas):
        patch = np.full((4, 4, 3), 200, dtype=np.uint8)
        blend_patch(canvas, patch, np.full((4, 4), 0.5, dtype=np.float32), 0, 0)

        assert canvas[0, 0].tolist() == [100, 100, 100]

    def test_clipped_at_edges(self, canvas):
        patch = np.full((10, 10, 3), 255, dtype=np.uint8)
        blend_patch(canvas, patch, np.ones((10, 10), dtype=np.float32), -5, -5)

        assert canvas[4, 4].tolist() == [255, 255, 255]
        assert not canvas[5, 5].any()


class TestHud:
    """Test suite for status and FPS overlays."""

    def test_status_drawn(self, visualizer, canvas):
        visualizer.draw_status(canvas, 1)
        assert canvas.any()

    def test_status_hidden(self, canvas):
        visualizer = Visualizer(VisualizerConfig(show_hud=False))
        visualizer.draw_status(canvas, 2)
        assert not canvas.any()

    def test_fps_hidden_by_default(self, visualizer, canvas):
        visualizer.draw_performance(canvas, 30.0)
        assert not canvas.any()

    def test_fps_shown(self, canvas):
        visualizer = Visualizer(VisualizerConfig(show_fps=True))
        visualizer.draw_performance(canvas, 30.0)
        assert canvas.any()


class TestVisualizerConfig:
    """Test suite for VisualizerConfig."""

    def test_from_dict(self):
        config = VisualizerConfig.from_dict({"show_fps": True, "colors": {"accent": [1, 2, 3]}})

        assert config.show_fps is True
        assert config.accent_color == (1, 2, 3)
        assert config.float_duration == 18.0


class TestFrameRateMonitor:
    """Test suite for FrameRateMonitor."""

    def test_steady_rate(self):
        clock = FakeClock()
        monitor = FrameRateMonitor(window_size=30, clock=clock)

        for _ in range(10):
            monitor.tick()
            clock.advance(0.1)

        assert monitor.fps == pytest.approx(10.0)
        assert monitor.total_frames == 10

    def test_not_enough_samples(self):
        monitor = FrameRateMonitor(clock=FakeClock())
        assert monitor.fps == 0.0
        monitor.tick()
        assert monitor.fps == 0.0

    def test_reset(self):
        clock = FakeClock()
        monitor = FrameRateMonitor(clock=clock)
        for _ in range(3):
            monitor.tick()
            clock.advance(0.5)

        monitor.reset()

        assert monitor.fps == 0.0
        assert monitor.total_frames == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
