"""Time sources injected into the engines."""

import time
from typing import Protocol


class Clock(Protocol):
    """Anything that reports the current time in seconds."""

    def now(self) -> float:
        ...


class MonotonicClock:
    """Wall-clock time for interactive play."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """
    A clock that only moves when told to.

    Lets tests and scripted callers drive reveal sequences and the
    elapsed-time counter deterministically.
    """

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("Cannot move a clock backwards")
        self._now += seconds
        return self._now
