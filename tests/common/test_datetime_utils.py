from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.handover_system.handover_system.common.datetime_utils import (
    iter_days,
    local_date,
    local_midnight,
    next_day_start,
    next_occurrence,
    parse_instant,
)


def test_next_occurrence_same_day_when_strictly_later():
    at = datetime(2025, 11, 10, 13, 30, tzinfo=timezone.utc)

    assert next_occurrence(time(14, 0), at) == datetime(2025, 11, 10, 14, 0, tzinfo=timezone.utc)


def test_next_occurrence_rolls_to_tomorrow_when_equal_or_past():
    at = datetime(2025, 11, 10, 14, 0, tzinfo=timezone.utc)

    assert next_occurrence(time(14, 0), at) == datetime(2025, 11, 11, 14, 0, tzinfo=timezone.utc)
    assert next_occurrence(time(9, 15), at) == datetime(2025, 11, 11, 9, 15, tzinfo=timezone.utc)


def test_next_occurrence_keeps_local_wall_clock():
    berlin = ZoneInfo("Europe/Berlin")
    at = datetime(2025, 11, 10, 15, 0, tzinfo=berlin)

    result = next_occurrence(time(14, 0), at)

    assert result.tzinfo is berlin
    assert (result.date(), result.hour, result.minute) == (date(2025, 11, 11), 14, 0)


def test_parse_instant_reads_z_as_utc_and_rejects_naive():
    assert parse_instant("2025-11-10T13:30:00Z") == datetime(2025, 11, 10, 13, 30, tzinfo=timezone.utc)
    with pytest.raises(ValueError):
        parse_instant("2025-11-10T13:30:00")


def test_local_day_helpers():
    berlin = ZoneInfo("Europe/Berlin")
    late_utc = datetime(2025, 11, 10, 23, 30, tzinfo=timezone.utc)

    assert local_date(late_utc) == date(2025, 11, 10)
    assert local_date(late_utc, berlin) == date(2025, 11, 11)
    assert local_midnight(datetime(2025, 11, 10, 13, 30, tzinfo=timezone.utc)) == datetime(
        2025, 11, 10, tzinfo=timezone.utc
    )
    assert next_day_start(date(2025, 11, 10), timezone.utc) - local_midnight(late_utc) == timedelta(days=1)


def test_iter_days_is_inclusive():
    assert list(iter_days(date(2025, 11, 1), date(2025, 11, 3))) == [
        date(2025, 11, 1),
        date(2025, 11, 2),
        date(2025, 11, 3),
    ]
    assert list(iter_days(date(2025, 11, 3), date(2025, 11, 1))) == []
