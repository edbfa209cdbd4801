from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import truncate_to_minute
from .factory import VerdictStrategyFactory
from .model import VerdictResult

_factory = VerdictStrategyFactory()


def classify(actual: datetime, planned: datetime) -> VerdictResult:
    """Score a check-in against the planned handover instant.

    Seconds and sub-seconds of both instants are dropped before comparing, so
    the verdict depends only on the minute bucket each instant falls into.
    """
    actual_minute = truncate_to_minute(actual)
    planned_minute = truncate_to_minute(planned)

    strategy = _factory.for_stamp(actual=actual_minute, planned=planned_minute)
    decision = strategy.decide(actual=actual_minute, planned=planned_minute)
    return VerdictResult(verdict=decision.verdict, delta_minutes=decision.delta_minutes)
