"""
Per-Hand Cooldown Gate
=======================

Turns the continuous per-frame thumbs-up signal into spaced-out triggers.
Each hand slot remembers when it last fired; a slot may fire again once
strictly more than the cooldown has elapsed. Holding the gesture is enough
to re-fire, no release is required.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

NEVER = float("-inf")


@dataclass
class RecognitionConfig:
    """Trigger throttling configuration."""
    cooldown: float = 0.4           # Seconds between triggers on one slot
    num_slots: int = 2              # Concurrently trackable hands
    slot_by_handedness: bool = False  # Key slots on Left/Right instead of position

    @classmethod
    def from_dict(cls, config: dict) -> "RecognitionConfig":
        """Create config from dictionary."""
        return cls(
            cooldown=config.get("cooldown", 0.4),
            num_slots=config.get("num_slots", 2),
            slot_by_handedness=config.get("slot_by_handedness", False),
        )


class CooldownGate:
    """
    Timestamp debounce with one slot per trackable hand.

    Example:
        >>> gate = CooldownGate(RecognitionConfig(cooldown=0.4))
        >>> gate.try_trigger(0, True, now=0.0)
        True
        >>> gate.try_trigger(0, True, now=0.05)
        False
        >>> gate.try_trigger(0, True, now=0.45)
        True
    """

    def __init__(self, config: Optional[RecognitionConfig] = None):
        self.config = config or RecognitionConfig()
        if self.config.cooldown <= 0:
            raise ValueError("cooldown must be positive, got %r" % self.config.cooldown)
        if self.config.num_slots < 1:
            raise ValueError("num_slots must be at least 1, got %r" % self.config.num_slots)

        self._lock = threading.Lock()
        self._last_fired: List[float] = [NEVER] * self.config.num_slots

    @property
    def num_slots(self) -> int:
        return self.config.num_slots

    def try_trigger(self, slot: int, active: bool, now: float) -> bool:
        """
        Decide whether `slot` may fire at `now`, recording the fire if so.

        Args:
            slot: Hand slot index
            active: Whether the gesture is active for that hand this frame
            now: Current time in seconds

        Returns:
            True if a trigger fires
        """
        if not active:
            return False
        if not 0 <= slot < self.config.num_slots:
            logger.debug("Ignoring hand in slot %d (only %d slots)", slot, self.config.num_slots)
            return False

        with self._lock:
            if now - self._last_fired[slot] > self.config.cooldown:
                self._last_fired[slot] = now
                return True
        return False

    def remaining(self, slot: int, now: float) -> float:
        """Seconds until `slot` can fire again (0 if ready)."""
        with self._lock:
            elapsed = now - self._last_fired[slot]
        return max(0.0, self.config.cooldown - elapsed)

    def last_fired(self, slot: int) -> Optional[float]:
        with self._lock:
            value = self._last_fired[slot]
        return None if value == NEVER else value

    def reset(self) -> None:
        """Forget every slot's trigger history."""
        with self._lock:
            self._last_fired = [NEVER] * self.config.num_slots
