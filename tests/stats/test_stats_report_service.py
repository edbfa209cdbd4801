from datetime import date, datetime, timedelta, timezone

import pytest

from src.handover_system.handover_system.core.enums import ShiftKind
from src.handover_system.handover_system.stats.service import StatsReportService, format_hms, format_hours_minutes

EVENT_START = datetime(2025, 11, 8, 11, 0, tzinfo=timezone.utc)


@pytest.fixture
def stats_service(handover_service, operators, clock, tz):
    return StatsReportService(handover_service, operators, clock=clock, tz=tz, event_start=EVENT_START)


def test_format_helpers():
    assert format_hms(timedelta(hours=26, minutes=3, seconds=9)) == "26:03:09"
    assert format_hms(timedelta(seconds=-5)) == "00:00:00"
    assert format_hours_minutes(timedelta(hours=7, minutes=5, seconds=59)) == "7h 05m"


def test_dashboard_event_progress(stats_service, fixed_now):
    report = stats_service.build_dashboard()

    # fixed_now is 2025-11-10 13:30, two full days after the start
    assert report.event["day_current"] == 3
    assert report.event["day_total"] == 30
    assert report.event["live_time"] == "50:30:00"
    assert report.day_keys == ["2025-11-10", "2025-11-09", "2025-11-08"]
    assert report.selected_day["day"] == "2025-11-10"


def test_dashboard_totals_and_switches(stats_service, handover_service, admin_token, fixed_now):
    handover_service.apply_takeover(
        credential=admin_token, operator_id="alex", kind=ShiftKind.DAY, at=fixed_now - timedelta(hours=3)
    )
    handover_service.apply_takeover(
        credential=admin_token, operator_id="sam", kind=ShiftKind.NIGHT, at=fixed_now - timedelta(hours=1)
    )

    report = stats_service.build_dashboard()

    assert [(row["operator"], row["duration"]) for row in report.today] == [("alex", "2h 00m"), ("sam", "1h 00m")]
    assert report.all_time[0]["name"] == "Alex"
    assert [s["operator"] for s in report.last_switches] == ["sam", "alex"]
    assert report.last_switches[0]["end"] is None
    assert report.current["running"] == "01:00:00"
    assert report.current["next_operator"] == "alex"


def test_dashboard_selected_day_and_stamps(stats_service, handover_service, admin_token, fixed_now):
    handover_service.apply_set_planned_time(credential=admin_token, hhmm="14:00", at=fixed_now - timedelta(days=1))
    handover_service.apply_stamp_and_takeover(credential=admin_token, at=datetime(2025, 11, 9, 14, 12, tzinfo=timezone.utc))

    report = stats_service.build_dashboard(day=date(2025, 11, 9))

    assert report.selected_day["day"] == "2025-11-09"
    assert report.selected_day["totals"][0]["operator"] == "sam"
    assert [(s["operator"], s["verdict"], s["delta_minutes"]) for s in report.day_stamps] == [("sam", "LATE", 12)]
    assert report.punctuality["worst_late_day"] == {"day": "2025-11-09", "minutes": 12}
    assert report.punctuality["late_minutes_by_operator"][0]["name"] == "Sam"


def test_unknown_day_falls_back_to_today(stats_service):
    report = stats_service.build_dashboard(day=date(2024, 1, 1))

    assert report.selected_day["day"] == "2025-11-10"
    assert report.day_stamps == []


def test_overlay_view(stats_service, handover_service, admin_token, fixed_now):
    handover_service.apply_takeover(
        credential=admin_token, operator_id="sam", kind=ShiftKind.NIGHT, at=fixed_now - timedelta(minutes=90)
    )

    overlay = stats_service.build_overlay()

    assert overlay["active"] == {"operator": "sam", "name": "Sam", "kind": "NIGHT"}
    assert overlay["next"]["operator"] == "alex"
    assert overlay["running"] == "01:30:00"
    assert overlay["planned_time_of_day"] == "14:00"
    assert overlay["status"].startswith("Sam on duty (Night shift)")
