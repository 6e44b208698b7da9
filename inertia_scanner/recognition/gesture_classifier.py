"""
Thumbs-Up Classifier
=====================

Rule-based thumbs-up detection from display-space landmark geometry.
Stateless: every frame is judged on its own landmarks.
"""

import logging
from typing import Dict, Tuple

from ..detection.landmarks import HandLandmarkSet, LandmarkIndex

logger = logging.getLogger(__name__)

# Finger -> (tip, pip) landmark pair used for the fold test
FOLD_JOINTS: Dict[str, Tuple[LandmarkIndex, LandmarkIndex]] = {
    "index": (LandmarkIndex.INDEX_TIP, LandmarkIndex.INDEX_PIP),
    "middle": (LandmarkIndex.MIDDLE_TIP, LandmarkIndex.MIDDLE_PIP),
    "ring": (LandmarkIndex.RING_TIP, LandmarkIndex.RING_PIP),
    "pinky": (LandmarkIndex.PINKY_TIP, LandmarkIndex.PINKY_PIP),
}


def _require_complete(hand: HandLandmarkSet) -> None:
    if not hand.is_complete:
        raise ValueError("Expected 21 landmarks, got %d" % len(hand))


def is_thumb_extended_up(hand: HandLandmarkSet) -> bool:
    """
    Thumb points upward: tip above IP joint above MCP joint.

    y grows downward, so "above" means strictly smaller y.
    """
    _require_complete(hand)
    tip = hand.get(LandmarkIndex.THUMB_TIP)
    ip = hand.get(LandmarkIndex.THUMB_IP)
    base = hand.get(LandmarkIndex.THUMB_MCP)
    return tip.y < ip.y < base.y


def is_finger_folded(hand: HandLandmarkSet, finger: str) -> bool:
    """Fingertip sits strictly below its PIP joint."""
    _require_complete(hand)
    tip_idx, pip_idx = FOLD_JOINTS[finger]
    return hand.get(tip_idx).y > hand.get(pip_idx).y


def finger_states(hand: HandLandmarkSet) -> Dict[str, bool]:
    """Per-finger breakdown used for debug logging."""
    states = {"thumb_up": is_thumb_extended_up(hand)}
    for finger in FOLD_JOINTS:
        states[finger + "_folded"] = is_finger_folded(hand, finger)
    return states


def is_thumbs_up(hand: HandLandmarkSet) -> bool:
    """
    Classify one hand as thumbs-up.

    Active iff the thumb is extended upward and the index, middle, ring
    and pinky fingers are all folded. Exact ties count as not extended
    and not folded.

    Raises:
        ValueError: if the hand has fewer than 21 landmarks
    """
    if not is_thumb_extended_up(hand):
        return False
    return all(is_finger_folded(hand, finger) for finger in FOLD_JOINTS)
