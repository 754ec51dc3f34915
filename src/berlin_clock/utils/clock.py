"""Time sources for reading the current wall-clock time.

``now()`` and ``GET /api/time`` take a clock so tests can pin the instant
being encoded.
"""

import time
from typing import Protocol


class ClockProtocol(Protocol):
    """Anything that reports the current Unix timestamp."""

    def time(self) -> float: ...


class SystemClock:
    """Reads the host's clock."""

    def time(self) -> float:
        return time.time()


class FakeClock:
    """Clock that stands still until advanced.

    Args:
        timestamp: Unix timestamp reported until ``advance`` is called
    """

    def __init__(self, timestamp: float) -> None:
        self._timestamp = timestamp

    def time(self) -> float:
        return self._timestamp

    def advance(self, seconds: float) -> None:
        """Move the clock forward, e.g. by one second to flip the seconds lamp."""
        self._timestamp += seconds
