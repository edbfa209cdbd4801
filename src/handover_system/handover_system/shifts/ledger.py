from __future__ import annotations

import secrets
from datetime import datetime
from typing import Iterable, Optional

from ..common.bounded_log import BoundedLog
from ..core.constants import DEFAULT_SHIFT_LOG_LIMIT
from ..core.enums import ShiftKind
from .model import ShiftInterval


def new_entry_id(prefix: str, at: datetime) -> str:
    return f"{prefix}_{secrets.token_hex(6)}_{int(at.timestamp() * 1000)}"


class ShiftLedger:
    """Bounded, newest-first log of shift intervals with at most one open interval.

    Inputs are expected to be validated by the caller; the ledger never fails.
    """

    def __init__(self, intervals: Iterable[ShiftInterval] = (), *, limit: int = DEFAULT_SHIFT_LOG_LIMIT):
        self._log: BoundedLog[ShiftInterval] = BoundedLog(limit, intervals)

    def record_handover(self, operator_id: str, kind: ShiftKind, at: datetime) -> ShiftInterval:
        """Close the open interval at ``at`` and open a new one for ``operator_id``."""
        opened = ShiftInterval(
            interval_id=new_entry_id("shift", at),
            operator_id=operator_id,
            kind=kind,
            start=at,
            end=None,
        )
        log: BoundedLog[ShiftInterval] = BoundedLog(
            self._log.capacity,
            (interval.close(at) if interval.is_open else interval for interval in self._log),
        )
        log.push(opened)
        # single swap: readers see either the old or the new history
        self._log = log
        return opened

    def current_open_interval(self) -> Optional[ShiftInterval]:
        return next((interval for interval in self._log if interval.is_open), None)

    def history(self, limit: Optional[int] = None) -> tuple[ShiftInterval, ...]:
        return self._log.newest(limit)

    def __len__(self) -> int:
        return len(self._log)
