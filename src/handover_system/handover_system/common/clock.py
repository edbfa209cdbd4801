"""Clock abstractions.

Engine code never reads wall-clock time directly; services receive a Clock so
verdicts and statistics can be computed for any injected instant.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""
        ...


@dataclass(frozen=True)
class SystemClock:
    """Wall-clock time in the event's local timezone."""

    tz: tzinfo

    def now(self) -> datetime:
        return datetime.now(self.tz)


@dataclass
class FixedClock:
    """Clock that returns a fixed instant until moved (useful for tests and demos)."""

    fixed_time: datetime

    def now(self) -> datetime:
        return self.fixed_time

    def set(self, value: datetime) -> None:
        self.fixed_time = value
