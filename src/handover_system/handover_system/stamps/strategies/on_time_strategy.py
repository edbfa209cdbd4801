from __future__ import annotations

from datetime import datetime

from ...core.enums import Verdict
from .base import StatusDecision, VerdictStrategy


class OnTimeStrategy(VerdictStrategy):
    """Checked in within the planned minute."""

    def decide(self, *, actual: datetime, planned: datetime) -> StatusDecision:
        return StatusDecision(verdict=Verdict.ON_TIME, delta_minutes=0)
