from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.enums import ShiftKind


@dataclass(frozen=True)
class ShiftInterval:
    """Domain entity: one on-duty interval of the shift log.

    ``end`` is None while the interval is open (the operator is still on duty).
    """

    interval_id: str
    operator_id: str
    kind: ShiftKind
    start: datetime
    end: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end is None

    def close(self, at: datetime) -> "ShiftInterval":
        # end never precedes start
        return replace(self, end=max(at, self.start))
