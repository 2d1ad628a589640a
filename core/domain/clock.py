"""
Clock port.

Every temporal decision (validity windows, approval expiry, sweeps)
reads the current time through a Clock so it can be pinned in tests.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Wall-clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
