"""Test support utilities for generator tests."""

from __future__ import annotations

START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to.

    ``step`` is added after every read, so ``step=1`` makes each read land on a
    new millisecond.
    """

    def __init__(self, now: int = START_MS, *, step: int = 0) -> None:
        self.now = now
        self.step = step
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        current = self.now
        self.now += self.step
        return current

    def advance(self, millis: int = 1) -> None:
        self.now += millis
