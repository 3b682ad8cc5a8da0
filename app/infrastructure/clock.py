"""Clock helpers.

Time-dependent components take a ``Clock`` so tests can drive time
explicitly instead of sleeping.
"""

import time
from typing import Callable

# Returns the current time as epoch milliseconds
Clock = Callable[[], int]


def system_clock_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ManualClock:
    """Clock whose time only moves when told to.

    Example:
        clock = ManualClock(start_ms=60_000)
        clock.advance(30_000)
        assert clock() == 90_000
    """

    def __init__(self, start_ms: int = 0):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms

    def set(self, ms: int) -> None:
        self.now_ms = ms
