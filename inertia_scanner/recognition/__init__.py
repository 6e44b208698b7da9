"""Gesture recognition module."""
from .gesture_classifier import is_thumbs_up, is_thumb_extended_up, is_finger_folded, finger_states
from .cooldown import CooldownGate, RecognitionConfig

__all__ = [
    "is_thumbs_up",
    "is_thumb_extended_up",
    "is_finger_folded",
    "finger_states",
    "CooldownGate",
    "RecognitionConfig",
]
