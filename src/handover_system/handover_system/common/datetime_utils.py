from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant; a trailing 'Z' is read as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"Instant without UTC offset: {value!r}")
    return parsed


def to_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc)


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def local_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of an instant, seen from ``tz`` (or the instant's own offset)."""
    return value.astimezone(tz).date() if tz else value.date()


def day_start(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def local_midnight(value: datetime) -> datetime:
    """Start of the local calendar day containing ``value``."""
    return day_start(value.date(), value.tzinfo)


def next_day_start(day: date, tz: tzinfo) -> datetime:
    return day_start(day + timedelta(days=1), tz)


def next_occurrence(time_of_day: time, at: datetime) -> datetime:
    """First instant with the given wall-clock time strictly after ``at``.

    Applied to the same local day first; rolls forward one day when that is
    not strictly later than ``at``.
    """
    candidate = datetime.combine(at.date(), time_of_day.replace(second=0, microsecond=0), tzinfo=at.tzinfo)
    if candidate <= at:
        candidate = datetime.combine(at.date() + timedelta(days=1), candidate.timetz())
    return candidate


def iter_days(start: date, end: date) -> Iterator[date]:
    """Inclusive range of calendar days."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def day_key(day: date) -> str:
    return day.strftime("%Y-%m-%d")
