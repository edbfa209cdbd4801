"""On-duty time aggregation over the shift log.

Every function takes ``now`` explicitly: an open interval counts up to ``now``
and nothing reads the wall clock here.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import day_start, local_midnight, next_day_start, to_utc
from ..shifts.model import ShiftInterval


def duration_overlap(
    interval: ShiftInterval,
    window_start: Optional[datetime],
    window_end: Optional[datetime],
    now: datetime,
) -> timedelta:
    """Length of ``interval`` inside ``[window_start, window_end]``; ``None`` bounds are open."""
    start = interval.start
    end = interval.end if interval.end is not None else now
    if window_start is not None and window_start > start:
        start = window_start
    if window_end is not None and window_end < end:
        end = window_end
    if end <= start:
        return timedelta(0)
    return to_utc(end) - to_utc(start)


def totals_by_operator(
    intervals: Iterable[ShiftInterval],
    window_start: Optional[datetime],
    window_end: Optional[datetime],
    now: datetime,
) -> dict[str, timedelta]:
    """Summed overlap per operator, longest first. Operators without overlap are left out."""
    totals: dict[str, timedelta] = {}
    for interval in intervals:
        overlap = duration_overlap(interval, window_start, window_end, now)
        if overlap > timedelta(0):
            totals[interval.operator_id] = totals.get(interval.operator_id, timedelta(0)) + overlap
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def all_time_totals(intervals: Iterable[ShiftInterval], now: datetime) -> dict[str, timedelta]:
    return totals_by_operator(intervals, None, None, now)


def today_totals(
    intervals: Iterable[ShiftInterval],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> dict[str, timedelta]:
    local_now = now.astimezone(tz) if tz else now
    return totals_by_operator(intervals, local_midnight(local_now), now, now)


def day_totals(
    intervals: Iterable[ShiftInterval],
    day: date,
    tz: tzinfo,
    now: datetime,
) -> dict[str, timedelta]:
    """Totals for one local calendar day, ``[midnight, next midnight)``."""
    return totals_by_operator(intervals, day_start(day, tz), next_day_start(day, tz), now)
