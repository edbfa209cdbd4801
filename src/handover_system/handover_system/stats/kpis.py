from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import local_date
from ..core.enums import Verdict
from ..stamps.model import StampEvent


@dataclass(frozen=True)
class LateDay:
    day: date
    minutes: int


@dataclass(frozen=True)
class PunctualityKPIs:
    on_time_rate_percent: int = 0
    average_late_minutes: int = 0
    current_on_time_streak: int = 0
    worst_late_day: Optional[LateDay] = None
    cumulative_late_minutes_by_operator: dict[str, int] = field(default_factory=dict)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def punctuality_kpis(stamps: Iterable[StampEvent], tz: Optional[tzinfo] = None) -> PunctualityKPIs:
    """Punctuality figures over a set of stamps.

    Late minutes only count for LATE stamps with a positive delta. Days are
    local calendar days of the stamp instant (``tz`` or the stamp's own offset);
    on a tie for the worst day the most recent day wins.
    """
    items = sorted(stamps, key=lambda s: s.stamped_at, reverse=True)
    if not items:
        return PunctualityKPIs()

    on_time = sum(1 for s in items if s.verdict == Verdict.ON_TIME)
    late = [s for s in items if s.late_minutes > 0]

    streak = 0
    for s in items:
        if s.verdict != Verdict.ON_TIME:
            break
        streak += 1

    by_day: dict[date, int] = {}
    by_operator: dict[str, int] = {}
    for s in late:
        day = local_date(s.stamped_at, tz)
        by_day[day] = by_day.get(day, 0) + s.late_minutes
        by_operator[s.operator_id] = by_operator.get(s.operator_id, 0) + s.late_minutes

    worst = None
    if by_day:
        day, minutes = max(by_day.items(), key=lambda item: (item[1], item[0]))
        worst = LateDay(day=day, minutes=minutes)

    return PunctualityKPIs(
        on_time_rate_percent=_round_half_up(100 * on_time / len(items)),
        average_late_minutes=_round_half_up(sum(s.late_minutes for s in late) / len(late)) if late else 0,
        current_on_time_streak=streak,
        worst_late_day=worst,
        cumulative_late_minutes_by_operator=dict(sorted(by_operator.items(), key=lambda item: item[1], reverse=True)),
    )
