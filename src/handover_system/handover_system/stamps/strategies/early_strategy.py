from __future__ import annotations

from datetime import datetime

from ...core.enums import Verdict
from .base import StatusDecision, VerdictStrategy, whole_minutes_between


class EarlyStrategy(VerdictStrategy):
    """Checked in before the planned minute (negative delta)."""

    def decide(self, *, actual: datetime, planned: datetime) -> StatusDecision:
        return StatusDecision(verdict=Verdict.EARLY, delta_minutes=whole_minutes_between(actual, planned))
