"""Clock helpers for springs."""

from __future__ import annotations

import time


def monotonic_clock() -> float:
    """Default spring clock, in seconds."""
    return time.monotonic()


class ManualClock:
    """A clock that only moves when told to, for deterministic stepping."""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


__all__ = ["monotonic_clock", "ManualClock"]
