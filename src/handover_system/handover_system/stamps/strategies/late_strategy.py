from __future__ import annotations

from datetime import datetime

from ...core.enums import Verdict
from .base import StatusDecision, VerdictStrategy, whole_minutes_between


class LateStrategy(VerdictStrategy):
    """Checked in after the planned minute (positive delta)."""

    def decide(self, *, actual: datetime, planned: datetime) -> StatusDecision:
        return StatusDecision(verdict=Verdict.LATE, delta_minutes=whole_minutes_between(actual, planned))
