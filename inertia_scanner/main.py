"""
Inertia Scanner - Main Application
====================================

Entry point. Wires the camera, hand detector, frame loop and display
together and runs until the window is closed.
"""

import sys
import time
import signal
import logging
import argparse
from typing import List, Optional

import cv2
import numpy as np

from .capture.camera import Camera
from .core.frame_loop import FrameLoop, FrameResult
from .detection.hand_detector import HandDetector
from .effects.bubbles import BubbleManager, QuoteCycle, load_quotes
from .recognition.cooldown import CooldownGate
from .rendering.skeleton import SkeletonRenderer
from .utils.config import AppConfig, DEFAULT_CONFIG_PATH, load_config
from .utils.logger import setup_logging
from .utils.performance import FrameRateMonitor
from .utils.visualization import Visualizer

logger = logging.getLogger(__name__)

KEY_ESCAPE = 27


class InertiaScannerApp:
    """
    Main application class.

    Owns the collaborators and the OpenCV window; the frame loop does the
    per-frame gesture work and this class paints each result.

    Keyboard Controls:
        q/ESC  - Quit
        h      - Toggle status HUD
        c      - Clear all bubbles
    """

    def __init__(self, config: AppConfig, quotes: List[str]):
        self.config = config

        self.camera = Camera(config.camera)
        self.detector = HandDetector(config.mediapipe)
        self.visualizer = Visualizer(config.visualization)
        self.bubbles = BubbleManager(config.bubbles)
        self.loop = FrameLoop(
            source=self.camera,
            detector=self.detector,
            renderer=SkeletonRenderer(config.skeleton),
            gate=CooldownGate(config.recognition),
            bubbles=self.bubbles,
            quotes=QuoteCycle(quotes),
            slot_by_handedness=config.recognition.slot_by_handedness,
            prepare_canvas=self._prepare_canvas,
        )
        self.fps = FrameRateMonitor()

        self._last_canvas: Optional[np.ndarray] = None
        self._window_shown = False

    def start(self) -> None:
        """
        Start capture and inference.

        Raises:
            RuntimeError: if the camera or the hand landmarker is unavailable
        """
        logger.info("Starting Inertia Scanner...")

        if not self.camera.start():
            raise RuntimeError("Failed to start camera %d" % self.config.camera.device_id)

        if not self.detector.start():
            self.camera.stop()
            raise RuntimeError("Failed to start hand landmarker")

        cv2.namedWindow(self.config.window_title, cv2.WINDOW_NORMAL)
        logger.info("Inertia Scanner started")

    def stop(self) -> None:
        """Stop all components."""
        self.loop.stop()
        self.camera.stop()
        self.detector.stop()
        cv2.destroyAllWindows()
        logger.info("Inertia Scanner stopped")

    def run(self) -> None:
        """Start everything and block in the frame loop until quit."""
        self.start()

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self.loop.run(on_cycle=self._on_cycle)
        finally:
            self.stop()

    def _prepare_canvas(self, canvas: np.ndarray, active_count: int) -> np.ndarray:
        return self.visualizer.dim(canvas, active_count)

    def _on_cycle(self, result: Optional[FrameResult]) -> bool:
        """Paint the latest canvas with bubbles and HUD, then pump window events."""
        if result is not None:
            self._last_canvas = result.canvas

        if self._last_canvas is not None:
            now = time.monotonic()
            display = self._last_canvas.copy()
            self.visualizer.draw_bubbles(display, self.loop.live_bubbles(now), now)
            self.visualizer.draw_status(display, self.loop.active_count)

            self.fps.tick()
            self.visualizer.draw_performance(display, self.fps.fps)

            cv2.imshow(self.config.window_title, display)
            self._window_shown = True

        key = cv2.waitKey(1) & 0xFF
        if key in (ord('q'), KEY_ESCAPE):
            return False
        if key == ord('h'):
            self.visualizer.config.show_hud = not self.visualizer.config.show_hud
        elif key == ord('c'):
            self.bubbles.clear()

        if self._window_shown and cv2.getWindowProperty(self.config.window_title, cv2.WND_PROP_VISIBLE) < 1:
            return False
        return True

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self.loop.stop()


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Inertia Scanner - thumbs-up triggered quote bubbles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Controls:
  q/ESC     - Quit
  h         - Toggle status HUD
  c         - Clear bubbles

Examples:
  inertia-scanner
  inertia-scanner --config custom_config.yaml --quotes my_quotes.yaml
        """
    )
    parser.add_argument("--config", "-c", default=str(DEFAULT_CONFIG_PATH),
                        help="Path to configuration file")
    parser.add_argument("--quotes", "-q", default=None,
                        help="Path to quotes YAML (overrides quotes_path in config)")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--log-file", default=None,
                        help="Also write a rotating log file")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.debug else "INFO", log_file=args.log_file)

    config_dict = load_config(args.config)
    if args.quotes:
        config_dict["quotes_path"] = args.quotes
    app_config = AppConfig.from_dict(config_dict)

    try:
        quotes = load_quotes(app_config.quotes_path)
        app = InertiaScannerApp(app_config, quotes)
    except (OSError, ValueError) as e:
        logger.error("Cannot start: %s", e)
        sys.exit(1)

    try:
        app.run()
    except RuntimeError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
