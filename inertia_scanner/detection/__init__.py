"""Hand landmark types. The MediaPipe detector lives in detection.hand_detector."""
from .landmarks import HandLandmarkSet, LandmarkIndex, Point, NUM_LANDMARKS

__all__ = ["HandLandmarkSet", "LandmarkIndex", "Point", "NUM_LANDMARKS"]
