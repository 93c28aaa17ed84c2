from __future__ import annotations
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List

from reaction.timing.clock import Clock

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Handle:
    due_ms: float
    callback: Callable[[], None] = field(repr=False)
    label: str = ""
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class TickScheduler:
    """
    Cooperative one-shot timers.

    Nothing runs on its own: the host loop calls run_due() once per frame and
    every callback whose deadline has passed fires there, in deadline order
    (ties keep scheduling order). Cancelling a handle that already fired or
    was already cancelled does nothing.
    """

    def __init__(self, clock: Clock):
        self.clock = clock
        self._heap: List[tuple[float, int, Handle]] = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: float, callback: Callable[[], None], label: str = "") -> Handle:
        due = self.clock.now_ms() + max(0.0, float(delay_ms))
        handle = Handle(due_ms=due, callback=callback, label=label)
        heapq.heappush(self._heap, (due, next(self._seq), handle))
        logger.debug(f"Scheduled {label or 'callback'} in {delay_ms:.0f}ms")
        return handle

    def cancel(self, handle: Handle | None) -> None:
        if handle is None or not handle.active:
            return
        handle.cancelled = True
        logger.debug(f"Cancelled {handle.label or 'callback'}")

    def cancel_all(self) -> None:
        for _, _, handle in self._heap:
            handle.cancelled = True
        self._heap.clear()

    def pending(self) -> List[Handle]:
        return [h for _, _, h in sorted(self._heap) if h.active]

    def run_due(self) -> int:
        """Fire every due callback; returns how many fired."""
        now = self.clock.now_ms()
        fired = 0
        # callbacks may cancel entries still in the heap; those are skipped below
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.active:
                continue
            handle.fired = True
            fired += 1
            handle.callback()
        return fired
