#!/usr/bin/env python3
"""
Time sources for the render loop.

A clock exposes elapsed_time(): monotonic seconds since the clock started. The loop
only ever reads it.
"""
import time
from typing import Callable, Optional


class MonotonicClock:
    """
    Wall clock backed by time.perf_counter.

    Starts on the first elapsed_time() call (or on start()), so the first frame of a
    freshly started loop sees a delta of roughly zero.
    """

    def __init__(self, timer: Callable[[], float] = time.perf_counter):
        self._timer = timer
        self._start: Optional[float] = None

    def start(self) -> None:
        self._start = self._timer()

    def elapsed_time(self) -> float:
        if self._start is None:
            self.start()
            return 0.0
        return self._timer() - self._start


class ManualClock:
    """Deterministic clock advanced by hand, for tests and headless runs."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("ManualClock cannot run backwards")
        self.now += seconds
        return self.now

    def elapsed_time(self) -> float:
        return self.now
