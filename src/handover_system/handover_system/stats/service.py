from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..common.clock import Clock
from ..common.datetime_utils import day_key, iter_days, local_date, to_utc
from ..core.constants import DEFAULT_EVENT_DAY_TOTAL, LAST_SWITCHES_LIMIT
from ..handover.service import HandoverService
from ..operators.registry import OperatorRegistry
from ..shifts.model import ShiftInterval
from ..state.model import HandoverState
from .aggregation import all_time_totals, day_totals, today_totals
from .kpis import punctuality_kpis


def format_hms(value: timedelta) -> str:
    total = max(0, int(value.total_seconds()))
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"


def format_hours_minutes(value: timedelta) -> str:
    minutes = max(0, int(value.total_seconds()) // 60)
    return f"{minutes // 60}h {minutes % 60:02d}m"


@dataclass(frozen=True)
class DashboardReport:
    event: dict
    current: dict
    today: list[dict]
    all_time: list[dict]
    selected_day: dict
    punctuality: dict
    last_switches: list[dict]
    day_stamps: list[dict]
    day_keys: list[str]


class StatsReportService:
    """Read-only views built from the current snapshot: dashboard and overlay."""

    def __init__(
        self,
        handovers: HandoverService,
        operators: OperatorRegistry,
        *,
        clock: Clock,
        tz: tzinfo,
        event_start: Optional[datetime] = None,
        event_day_total: int = DEFAULT_EVENT_DAY_TOTAL,
    ):
        self._handovers = handovers
        self._operators = operators
        self._clock = clock
        self._tz = tz
        self._event_start = event_start
        self._event_day_total = int(event_day_total)

    @property
    def event_start(self) -> Optional[datetime]:
        return self._event_start

    def build_dashboard(self, *, day: Optional[date] = None, now: Optional[datetime] = None) -> DashboardReport:
        now = now or self._clock.now()
        state = self._handovers.read(now=now)
        event_start = self._resolve_event_start(state, now)

        today = local_date(now, self._tz)
        days = list(iter_days(local_date(event_start, self._tz), today)) or [today]
        selected = day if day in days else today

        live = to_utc(now) - to_utc(event_start)
        day_stamps = [s for s in state.stamps if local_date(s.stamped_at, self._tz) == selected]
        kpis = punctuality_kpis(state.stamps, self._tz)

        return DashboardReport(
            event={
                "start": event_start.isoformat(),
                "day_current": max(1, math.floor(live / timedelta(days=1)) + 1),
                "day_total": self._event_day_total,
                "live_time": format_hms(live),
            },
            current=self._current_view(state, now, event_start),
            today=self._totals_rows(today_totals(state.shift_log, now, self._tz)),
            all_time=self._totals_rows(all_time_totals(state.shift_log, now)),
            selected_day={
                "day": day_key(selected),
                "totals": self._totals_rows(day_totals(state.shift_log, selected, self._tz, now)),
            },
            punctuality={
                "on_time_rate_percent": kpis.on_time_rate_percent,
                "average_late_minutes": kpis.average_late_minutes,
                "current_on_time_streak": kpis.current_on_time_streak,
                "worst_late_day": (
                    {"day": day_key(kpis.worst_late_day.day), "minutes": kpis.worst_late_day.minutes}
                    if kpis.worst_late_day
                    else None
                ),
                "late_minutes_by_operator": [
                    {"operator": op_id, "name": self._operators.display_name(op_id), "minutes": minutes}
                    for op_id, minutes in kpis.cumulative_late_minutes_by_operator.items()
                ],
            },
            last_switches=[self._switch_row(i) for i in state.shift_log[:LAST_SWITCHES_LIMIT]],
            day_stamps=[
                {
                    "operator": s.operator_id,
                    "name": self._operators.display_name(s.operator_id),
                    "stamped_at": s.stamped_at.astimezone(self._tz).strftime("%H:%M"),
                    "planned_at": s.planned_at.astimezone(self._tz).strftime("%H:%M"),
                    "kind": s.planned_kind.value,
                    "verdict": s.verdict.value,
                    "delta_minutes": s.delta_minutes,
                }
                for s in day_stamps
            ],
            day_keys=[day_key(d) for d in reversed(days)],
        )

    def build_overlay(self, *, now: Optional[datetime] = None) -> dict:
        now = now or self._clock.now()
        state = self._handovers.read(now=now)
        rotation = state.rotation
        current = self._current_view(state, now, self._resolve_event_start(state, now))

        active_name = self._operators.display_name(rotation.active_operator_id)
        next_name = self._operators.display_name(rotation.next_operator_id)
        return {
            "active": {"operator": rotation.active_operator_id, "name": active_name, "kind": rotation.active_kind.value},
            "running": current["running"],
            "next": {"operator": rotation.next_operator_id, "name": next_name, "kind": rotation.next_kind.value},
            "planned_time_of_day": rotation.planned_time_of_day,
            "status": (
                f"{active_name} on duty ({rotation.active_kind.label}) for {current['running']}, "
                f"next: {next_name} at {rotation.planned_time_of_day}"
            ),
        }

    def _resolve_event_start(self, state: HandoverState, now: datetime) -> datetime:
        if self._event_start:
            return self._event_start
        if state.shift_log:
            return min(i.start for i in state.shift_log)
        return now

    def _current_view(self, state: HandoverState, now: datetime, event_start: datetime) -> dict:
        # running time of the open shift, else the newest one, else the event
        interval = state.open_interval() or (state.shift_log[0] if state.shift_log else None)
        since = interval.start if interval else event_start
        rotation = state.rotation
        return {
            "operator": rotation.active_operator_id,
            "name": self._operators.display_name(rotation.active_operator_id),
            "kind": rotation.active_kind.value,
            "since": since.isoformat(),
            "running": format_hms(to_utc(now) - to_utc(since)),
            "next_operator": rotation.next_operator_id,
            "next_name": self._operators.display_name(rotation.next_operator_id),
            "next_kind": rotation.next_kind.value,
            "planned_time_of_day": rotation.planned_time_of_day,
            "planned_handover_at": rotation.planned_handover_at.isoformat(),
        }

    def _totals_rows(self, totals: dict[str, timedelta]) -> list[dict]:
        return [
            {
                "operator": op_id,
                "name": self._operators.display_name(op_id),
                "seconds": int(duration.total_seconds()),
                "duration": format_hours_minutes(duration),
            }
            for op_id, duration in totals.items()
        ]

    def _switch_row(self, interval: ShiftInterval) -> dict:
        return {
            "operator": interval.operator_id,
            "name": self._operators.display_name(interval.operator_id),
            "kind": interval.kind.value,
            "start": interval.start.isoformat(),
            "end": interval.end.isoformat() if interval.end else None,
        }
