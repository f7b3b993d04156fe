"""Clock abstraction used for every freshness decision."""

import time
from typing import Protocol


class Clock(Protocol):
    """Source of the current time in epoch milliseconds."""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock:
    """
    Manually driven clock for deterministic tests and replays.

    Time only moves when ``advance`` or ``set`` is called.
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms = start_ms

    def now_ms(self) -> int:
        return self._now_ms

    def advance(self, ms: int) -> None:
        """Move the clock forward by ``ms`` milliseconds."""
        self._now_ms += ms

    def set(self, now_ms: int) -> None:
        self._now_ms = now_ms
