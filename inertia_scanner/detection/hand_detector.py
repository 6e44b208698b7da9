"""
Hand Detection Module - MediaPipe Tasks API
=============================================

Wraps the MediaPipe HandLandmarker (VIDEO running mode) and converts its
normalized results into display-space HandLandmarkSets.
"""

import logging
import urllib.request
from pathlib import Path
from typing import List, Optional

import numpy as np
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .config import HandDetectorConfig
from .landmarks import HandLandmarkSet, Point

logger = logging.getLogger(__name__)

HAND_LANDMARKER_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"


def download_model(url: str, save_path: Path) -> bool:
    """Download the hand landmarker model if not present."""
    if save_path.exists():
        return True

    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading hand landmarker model to %s...", save_path)
        urllib.request.urlretrieve(url, save_path)
        logger.info("Model download complete")
        return True
    except OSError as e:
        logger.error("Failed to download model: %s", e)
        return False


def to_display_space(normalized, width: int, height: int, mirror: bool = False) -> List[Point]:
    """Scale normalized MediaPipe landmarks to pixel coordinates on the surface."""
    points = []
    for lm in normalized:
        x = (1.0 - lm.x) if mirror else lm.x
        points.append(Point(x * width, lm.y * height))
    return points


class HandDetector:
    """
    Hand landmark inference using MediaPipe's HandLandmarker.

    Hands are returned in the order MediaPipe reports them; that order is not
    guaranteed to be stable from one frame to the next.

    Example:
        >>> detector = HandDetector(HandDetectorConfig())
        >>> detector.start()
        >>> hands = detector.detect(rgb_image, timestamp_ms)
        >>> detector.stop()
    """

    def __init__(self, config: Optional[HandDetectorConfig] = None):
        self.config = config or HandDetectorConfig()
        self._landmarker: Optional[vision.HandLandmarker] = None
        self._last_timestamp_ms = -1

    def start(self) -> bool:
        """Initialize the hand landmarker. Returns False on failure."""
        model_path = Path(self.config.model_path or DEFAULT_MODEL_PATH)

        if not model_path.exists():
            if not download_model(HAND_LANDMARKER_MODEL_URL, model_path):
                logger.error("Could not obtain hand landmarker model")
                return False

        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=str(model_path)),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=self.config.max_num_hands,
            min_hand_detection_confidence=self.config.min_detection_confidence,
            min_hand_presence_confidence=self.config.min_presence_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )

        try:
            self._landmarker = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            logger.error("Failed to initialize HandLandmarker: %s", e)
            return False

        logger.info("HandLandmarker ready (model=%s, max hands=%d)",
                    model_path, self.config.max_num_hands)
        return True

    def stop(self) -> None:
        """Release resources."""
        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None
            logger.info("HandLandmarker stopped")

    @property
    def is_ready(self) -> bool:
        return self._landmarker is not None

    def detect(self, image: np.ndarray, timestamp_ms: int) -> List[HandLandmarkSet]:
        """
        Detect hands in an RGB image.

        Args:
            image: RGB image as numpy array (H, W, 3)
            timestamp_ms: Monotonic timestamp in milliseconds

        Returns:
            One HandLandmarkSet per detected hand, in display space
        """
        if self._landmarker is None:
            return []

        # VIDEO mode rejects non-increasing timestamps
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        height, width = image.shape[:2]
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)
        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)

        hands = []
        for i, hand_landmarks in enumerate(result.hand_landmarks):
            handedness, confidence = "", 0.0
            if result.handedness and len(result.handedness) > i:
                category = result.handedness[i][0]
                handedness, confidence = category.category_name, category.score

            hands.append(HandLandmarkSet(
                points=tuple(to_display_space(hand_landmarks, width, height, self.config.mirror)),
                handedness=handedness,
                confidence=confidence,
            ))

        return hands

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
