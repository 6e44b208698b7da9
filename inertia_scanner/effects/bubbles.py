"""
Bubble Lifecycle
=================

Owns the set of live quote bubbles. Bubbles are created on a trigger with
their animation parameters fixed at birth and disappear after a fixed
time-to-live. Expiry is checked against elapsed time, so a snapshot never
contains a bubble past its TTL even if the periodic sweep is late.
"""

import time
import uuid
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import yaml

from ..detection.landmarks import Point

logger = logging.getLogger(__name__)


@dataclass
class BubbleConfig:
    """Bubble spawning and lifetime settings."""
    ttl: float = 8.0              # Seconds a bubble stays live
    drift_range: float = 100.0    # Max horizontal drift (pixels, either side)
    rotation_range: float = 5.0   # Max tilt (degrees, either side)
    seed: Optional[int] = None    # Fixed seed for reproducible drift/rotation

    @classmethod
    def from_dict(cls, config: dict) -> "BubbleConfig":
        """Create config from dictionary."""
        return cls(
            ttl=config.get("ttl", 8.0),
            drift_range=config.get("drift_range", 100.0),
            rotation_range=config.get("rotation_range", 5.0),
            seed=config.get("seed"),
        )


@dataclass(frozen=True)
class Bubble:
    """A floating quote, immutable for its whole lifetime."""
    id: str
    text: str
    anchor: Point
    drift_x: float
    rotation: float
    created_at: float
    expires_at: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class QuoteCycle:
    """
    Round-robin over a fixed list of quotes.

    One shared cursor for all hands, advanced once per spawned bubble.
    """

    def __init__(self, quotes: Sequence[str]):
        if not quotes:
            raise ValueError("Quote list is empty")
        self._quotes: Tuple[str, ...] = tuple(quotes)
        self._index = 0

    def next(self) -> str:
        quote = self._quotes[self._index]
        self._index = (self._index + 1) % len(self._quotes)
        return quote

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._quotes)


def load_quotes(path) -> List[str]:
    """
    Read the `quotes` list from a YAML file.

    A missing or empty list yields []; any other non-list value raises
    ValueError.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    quotes = data.get("quotes") if isinstance(data, dict) else data
    if quotes is None:
        quotes = []
    if not isinstance(quotes, list):
        raise ValueError("Quotes in %s must be a list, got %s" % (path, type(quotes).__name__))

    quotes = [str(q).strip() for q in quotes if q is not None and str(q).strip()]
    logger.info("Loaded %d quotes from %s", len(quotes), path)
    return quotes


class BubbleManager:
    """
    Thread-safe store of live bubbles.

    Spawns come from the frame loop; removals come from `sweep()` (run once
    per frame cycle) or explicit `remove()`. Every operation holds the lock,
    so a reader sees a bubble either fully present or absent.

    Example:
        >>> manager = BubbleManager(BubbleConfig(ttl=8.0, seed=7))
        >>> bubble = manager.spawn(Point(320, 240), "Peak effort detected")
        >>> manager.live()
        (Bubble(id=..., text='Peak effort detected', ...),)
    """

    def __init__(
        self,
        config: Optional[BubbleConfig] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or BubbleConfig()
        if self.config.ttl <= 0:
            raise ValueError("Bubble ttl must be positive, got %r" % self.config.ttl)

        self._rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._clock = clock
        self._lock = threading.Lock()
        self._bubbles: Dict[str, Bubble] = {}

    def _new_id(self) -> str:
        while True:
            bubble_id = uuid.uuid4().hex[:9]
            if bubble_id not in self._bubbles:
                return bubble_id

    def spawn(self, anchor: Point, text: str, now: Optional[float] = None) -> Bubble:
        """Create a bubble at `anchor` and add it to the live set."""
        now = self._clock() if now is None else now
        drift = self.config.drift_range
        tilt = self.config.rotation_range

        with self._lock:
            bubble = Bubble(
                id=self._new_id(),
                text=text,
                anchor=anchor,
                drift_x=float(self._rng.uniform(-drift, drift)),
                rotation=float(self._rng.uniform(-tilt, tilt)),
                created_at=now,
                expires_at=now + self.config.ttl,
            )
            self._bubbles[bubble.id] = bubble

        logger.debug("Spawned bubble %s at (%.0f, %.0f)", bubble.id, anchor.x, anchor.y)
        return bubble

    def live(self, now: Optional[float] = None) -> Tuple[Bubble, ...]:
        """Snapshot of bubbles still within their TTL, oldest first."""
        now = self._clock() if now is None else now
        with self._lock:
            return tuple(b for b in self._bubbles.values() if not b.is_expired(now))

    def sweep(self, now: Optional[float] = None) -> int:
        """Drop every expired bubble. Returns how many were removed."""
        now = self._clock() if now is None else now
        with self._lock:
            expired = [bid for bid, b in self._bubbles.items() if b.is_expired(now)]
            for bid in expired:
                del self._bubbles[bid]

        if expired:
            logger.debug("Expired %d bubble(s)", len(expired))
        return len(expired)

    def remove(self, bubble_id: str) -> bool:
        """Remove one bubble. Unknown ids are ignored."""
        with self._lock:
            return self._bubbles.pop(bubble_id, None) is not None

    def clear(self) -> None:
        """Drop all bubbles, including ones not yet expired."""
        with self._lock:
            count = len(self._bubbles)
            self._bubbles.clear()
        if count:
            logger.info("Cleared %d pending bubble(s)", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bubbles)
