from __future__ import annotations

from typing import Iterable, Optional

from ..common.bounded_log import BoundedLog
from ..core.constants import DEFAULT_STAMP_LOG_LIMIT
from .model import StampEvent


class StampLog:
    """Append-only, newest-first stamp history capped at ``limit`` entries."""

    def __init__(self, stamps: Iterable[StampEvent] = (), *, limit: int = DEFAULT_STAMP_LOG_LIMIT):
        self._log: BoundedLog[StampEvent] = BoundedLog(limit, stamps)

    def append(self, stamp: StampEvent) -> None:
        self._log.push(stamp)

    def history(self, limit: Optional[int] = None) -> tuple[StampEvent, ...]:
        return self._log.newest(limit)

    def __len__(self) -> int:
        return len(self._log)
