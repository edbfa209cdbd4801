from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .strategies.base import VerdictStrategy
from .strategies.early_strategy import EarlyStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class VerdictStrategyFactory:
    """Factory Pattern: choose the verdict strategy for minute-truncated instants."""

    def for_stamp(self, *, actual: datetime, planned: datetime) -> VerdictStrategy:
        if actual < planned:
            return EarlyStrategy()
        if actual == planned:
            return OnTimeStrategy()
        return LateStrategy()
