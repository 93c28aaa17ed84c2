from __future__ import annotations
import time


class Clock:
    """
    Source of timestamps in milliseconds.
    Only differences between two readings are meaningful.
    """

    def now_ms(self) -> float:
        raise NotImplementedError


class MonotonicClock(Clock):
    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0
