"""
Clock module for the crawler.

The only wall-clock dependency of the game is the arrow trajectory marker;
it reads the time through a clock object so tests can control it.
"""

import time


class Clock:
    """Monotonic clock, in seconds."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds
