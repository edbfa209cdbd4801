from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import ShiftKind, Verdict


@dataclass(frozen=True)
class VerdictResult:
    verdict: Verdict
    delta_minutes: int


@dataclass(frozen=True)
class StampEvent:
    """Domain entity: a scored check-in, immutable once created.

    ``delta_minutes`` is signed: negative = early, zero = on time, positive = late.
    """

    stamp_id: str
    operator_id: str
    stamped_at: datetime
    planned_at: datetime
    planned_operator_id: str
    planned_kind: ShiftKind
    verdict: Verdict
    delta_minutes: int

    @property
    def late_minutes(self) -> int:
        return self.delta_minutes if self.verdict == Verdict.LATE and self.delta_minutes > 0 else 0
