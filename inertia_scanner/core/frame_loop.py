"""
Frame loop orchestrator.

One cycle per display frame:

    sweep expired bubbles
    acquire  -> latest camera frame (skip the cycle if none is ready)
             -> hand landmarks from the detector
    process  -> per hand: classify, draw skeleton, consult cooldown gate,
                spawn a bubble at the thumb tip on a permitted trigger
    publish  -> active-hand count and the live bubble snapshot

The loop owns the cooldown gate and the quote cursor; nothing else writes
to them.
"""

import time
import logging
from collections import Counter
from itertools import count
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from ..capture.camera import Frame
from ..detection.landmarks import HandLandmarkSet
from ..effects.bubbles import Bubble, BubbleManager, QuoteCycle
from ..recognition.cooldown import CooldownGate
from ..recognition.gesture_classifier import is_thumbs_up
from ..rendering.skeleton import SkeletonRenderer

logger = logging.getLogger(__name__)

HANDEDNESS_SLOTS = {"Left": 0, "Right": 1}


class FrameSource(Protocol):
    def read(self) -> Optional[Frame]: ...


class LandmarkDetector(Protocol):
    def detect(self, image: np.ndarray, timestamp_ms: int) -> List[HandLandmarkSet]: ...


@dataclass
class FrameResult:
    """Everything the display layer needs from one processed cycle."""
    canvas: np.ndarray
    frame_number: int
    timestamp: float
    hands: List[HandLandmarkSet] = field(default_factory=list)
    active: List[bool] = field(default_factory=list)
    spawned: List[Bubble] = field(default_factory=list)

    @property
    def active_count(self) -> int:
        return sum(1 for a in self.active if a)


class FrameLoop:
    """
    Drives the acquire/process cycle.

    Example:
        >>> loop = FrameLoop(camera, detector, renderer, gate, bubbles, quotes)
        >>> loop.run(on_cycle=lambda result: display.show(result))
    """

    def __init__(
        self,
        source: FrameSource,
        detector: LandmarkDetector,
        renderer: SkeletonRenderer,
        gate: CooldownGate,
        bubbles: BubbleManager,
        quotes: QuoteCycle,
        slot_by_handedness: bool = False,
        prepare_canvas: Optional[Callable[[np.ndarray, int], np.ndarray]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.detector = detector
        self.renderer = renderer
        self.gate = gate
        self.bubbles = bubbles
        self.quotes = quotes
        self.slot_by_handedness = slot_by_handedness
        # Called with (frame copy, active-hand count) before skeletons are drawn
        self.prepare_canvas = prepare_canvas
        self._clock = clock

        self._running = False
        self._last_frame_number: Optional[int] = None
        self._active_count = 0
        self.cycles = 0
        self.skipped = 0

    @property
    def active_count(self) -> int:
        """Hands showing a thumbs-up in the most recent processed frame."""
        return self._active_count

    @property
    def is_running(self) -> bool:
        return self._running

    def live_bubbles(self, now: Optional[float] = None) -> Tuple[Bubble, ...]:
        return self.bubbles.live(self._clock() if now is None else now)

    def step(self) -> Optional[FrameResult]:
        """
        Run one cycle.

        Returns:
            The processed FrameResult, or None when no new frame was ready
        """
        now = self._clock()
        self.cycles += 1
        self.bubbles.sweep(now)

        frame = self.source.read()
        if frame is None or frame.frame_number == self._last_frame_number:
            self.skipped += 1
            return None
        self._last_frame_number = frame.frame_number

        hands = list(self.detector.detect(frame.rgb, int(now * 1000)))
        result = FrameResult(
            canvas=frame.image.copy(),
            frame_number=frame.frame_number,
            timestamp=now,
            hands=hands,
            active=[hand.is_complete and is_thumbs_up(hand) for hand in hands],
        )
        self._active_count = result.active_count

        # Classified first so the hook sees this frame's count
        if self.prepare_canvas is not None:
            result.canvas = self.prepare_canvas(result.canvas, result.active_count)

        slots = self.assign_slots(hands)
        for index, (hand, active, slot) in enumerate(zip(hands, result.active, slots)):
            if not hand.is_complete:
                logger.debug("Skipping hand %d: %d/21 landmarks", index, len(hand))
                continue

            self.renderer.draw_hand(result.canvas, hand, active)

            if self.gate.try_trigger(slot, active, now):
                bubble = self.bubbles.spawn(hand.thumb_tip, self.quotes.next(), now)
                result.spawned.append(bubble)
                logger.info("Thumbs-up on slot %d -> bubble %s \"%s\"", slot, bubble.id, bubble.text)

        return result

    def assign_slots(self, hands: Sequence[HandLandmarkSet]) -> List[int]:
        """
        Cooldown slot per hand for this frame, never shared between two hands.

        Positional by default. With handedness slots, each hand with a unique
        "Left"/"Right" label takes its fixed slot; unlabelled hands and hands
        sharing a label take the lowest slots still free, in list order.
        """
        if not self.slot_by_handedness:
            return list(range(len(hands)))

        sides = Counter(hand.handedness for hand in hands)
        slots: List[Optional[int]] = [
            HANDEDNESS_SLOTS[hand.handedness]
            if hand.handedness in HANDEDNESS_SLOTS and sides[hand.handedness] == 1 else None
            for hand in hands
        ]
        taken = {slot for slot in slots if slot is not None}
        free = (slot for slot in count() if slot not in taken)
        return [slot if slot is not None else next(free) for slot in slots]

    def run(self, on_cycle: Optional[Callable[[Optional[FrameResult]], bool]] = None) -> None:
        """
        Cycle until `stop()` is called or `on_cycle` returns False.

        `on_cycle` receives each cycle's result (None for skipped cycles)
        and is where the host pumps its display events.
        """
        self._running = True
        logger.info("Frame loop started")
        try:
            while self._running:
                result = self.step()
                if on_cycle is not None and on_cycle(result) is False:
                    break
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop cycling and discard pending bubbles."""
        was_running = self._running
        self._running = False
        self.bubbles.clear()
        self._active_count = 0
        if was_running:
            logger.info("Frame loop stopped after %d cycles (%d skipped)", self.cycles, self.skipped)
