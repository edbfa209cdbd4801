from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ShiftKind
from ..shifts.model import ShiftInterval
from ..stamps.model import StampEvent


@dataclass(frozen=True)
class RotationState:
    """Who is on duty now, who is scheduled next, and when the handover is planned.

    ``planned_time_of_day`` is the raw ``HH:MM`` shown to users;
    ``planned_handover_at`` is the instant verdicts are scored against.
    """

    active_operator_id: str
    active_kind: ShiftKind
    next_operator_id: str
    next_kind: ShiftKind
    planned_time_of_day: str
    planned_handover_at: datetime


@dataclass(frozen=True)
class HandoverState:
    """Snapshot persisted and exchanged as one unit (shift log, stamps, rotation)."""

    rotation: RotationState
    shift_log: tuple[ShiftInterval, ...] = ()
    stamps: tuple[StampEvent, ...] = ()
    version: int = 0

    def open_interval(self) -> Optional[ShiftInterval]:
        return next((interval for interval in self.shift_log if interval.is_open), None)
