"""Millisecond clocks."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """A source of the current time in milliseconds since the epoch."""

    @abstractmethod
    def millis(self) -> int:
        """Return the current time in milliseconds."""


class SystemClockUTC(Clock):
    """The system's wall clock."""

    def millis(self) -> int:
        return time.time_ns() // 1_000_000


class FixedClock(Clock):
    """A clock that always reports the same instant."""

    def __init__(self, millis: int) -> None:
        self._millis = millis

    def millis(self) -> int:
        return self._millis