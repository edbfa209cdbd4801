from __future__ import annotations

from enum import Enum


class ShiftKind(str, Enum):
    """Kind of on-duty shift; toggles on every handover."""

    DAY = "DAY"
    NIGHT = "NIGHT"

    @property
    def label(self) -> str:
        return "Day shift" if self is ShiftKind.DAY else "Night shift"


class Verdict(str, Enum):
    """Punctuality of a check-in against the planned handover minute."""

    EARLY = "EARLY"
    ON_TIME = "ON_TIME"
    LATE = "LATE"


class AdminAction(str, Enum):
    """Write actions accepted at the admin boundary."""

    TAKEOVER = "takeover"
    STAMP = "stamp"
    SET_PLANNED_TIME = "setPlannedTime"
