from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...common.datetime_utils import to_utc
from ...core.enums import Verdict


@dataclass(frozen=True)
class StatusDecision:
    verdict: Verdict
    delta_minutes: int


class VerdictStrategy(ABC):
    """Strategy Pattern: encapsulate how a stamp's verdict and delta are decided.

    Both instants are already truncated to the minute when a strategy runs.
    """

    @abstractmethod
    def decide(self, *, actual: datetime, planned: datetime) -> StatusDecision:
        raise NotImplementedError


def whole_minutes_between(actual: datetime, planned: datetime) -> int:
    return round((to_utc(actual) - to_utc(planned)).total_seconds() / 60)
