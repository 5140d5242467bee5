"""
Time sources used for permit deadline checks.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current Unix time in whole seconds."""
        ...


class SystemClock:
    """Wall-clock time from ``time.time()``."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """
    Manually driven clock for tests and simulations.

    Example::

        clock = FixedClock(1_700_000_000)
        clock.advance(3600)
    """

    def __init__(self, timestamp: int):
        self.timestamp = timestamp

    def now(self) -> int:
        return self.timestamp

    def set(self, timestamp: int) -> None:
        self.timestamp = timestamp

    def advance(self, seconds: int) -> int:
        self.timestamp += seconds
        return self.timestamp
