"""Demo shift history for a fresh event.

Shifts last 12 hours. The first starts at 11:00 on the event's first day; a day
shift hands over at 23:30 and a night shift at 11:00 (or right at the end of
the shift when that is later). Per-day lateness can be injected to make the
statistics interesting.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Mapping, Optional

from ..core.constants import DEMO_HISTORY_LIMIT
from ..core.enums import ShiftKind
from ..rotation.policy import RotationPolicy
from ..shifts.ledger import new_entry_id
from ..shifts.model import ShiftInterval
from ..state.model import HandoverState
from ..state.repository import StateRepository
from . import transitions

SHIFT_LENGTH = timedelta(hours=12)


def _handover_time(end: datetime, kind: ShiftKind) -> datetime:
    if kind == ShiftKind.DAY:
        planned = end.replace(hour=23, minute=30, second=0, microsecond=0)
    else:
        planned = end.replace(hour=11, minute=0, second=0, microsecond=0)
    return max(planned, end)


def generate_demo_history(
    event_start: datetime,
    now: datetime,
    policy: RotationPolicy,
    *,
    late_minutes: Optional[Mapping[tuple[date, str], int]] = None,
    limit: int = DEMO_HISTORY_LIMIT,
) -> tuple[ShiftInterval, ...]:
    """Newest-first intervals from the event start up to ``now``.

    ``late_minutes`` maps (local handover date, incoming operator id) to the
    minutes that operator arrives late. The newest interval is left open.
    """
    late_minutes = late_minutes or {}
    seed = policy.seed()
    operator_id, kind = seed.active_operator_id, seed.active_kind
    cursor = event_start.replace(hour=11, minute=0, second=0, microsecond=0)

    history: list[ShiftInterval] = []
    while cursor < now:
        start = cursor
        end = start + SHIFT_LENGTH
        next_operator_id, next_kind = policy.advance(operator_id, kind)

        next_start = _handover_time(end, kind)
        next_start += timedelta(minutes=late_minutes.get((next_start.date(), next_operator_id), 0))

        history.insert(
            0,
            ShiftInterval(
                interval_id=new_entry_id("shift", start),
                operator_id=operator_id,
                kind=kind,
                start=start,
                end=end,
            ),
        )
        operator_id, kind, cursor = next_operator_id, next_kind, next_start

    if history:
        history[0] = replace(history[0], end=None)
    return tuple(history[:limit])


def build_demo_state(
    event_start: datetime,
    now: datetime,
    policy: RotationPolicy,
    *,
    planned_time_of_day: str,
    late_minutes: Optional[Mapping[tuple[date, str], int]] = None,
) -> HandoverState:
    """Seed state whose rotation follows the newest demo interval."""
    state = transitions.seed_state(policy, planned_time_of_day, now)
    history = generate_demo_history(event_start, now, policy, late_minutes=late_minutes)
    if not history:
        return state

    newest = history[0]
    next_operator_id, next_kind = policy.advance(newest.operator_id, newest.kind)
    return replace(
        state,
        shift_log=history,
        rotation=replace(
            state.rotation,
            active_operator_id=newest.operator_id,
            active_kind=newest.kind,
            next_operator_id=next_operator_id,
            next_kind=next_kind,
        ),
    )


def ensure_demo_state(
    states: StateRepository,
    policy: RotationPolicy,
    *,
    event_start: datetime,
    now: datetime,
    planned_time_of_day: str,
    late_minutes: Optional[Mapping[tuple[date, str], int]] = None,
) -> Optional[HandoverState]:
    """Store a demo state unless one is stored already; returns what was saved."""
    if states.load() is not None:
        return None
    demo = build_demo_state(
        event_start,
        now,
        policy,
        planned_time_of_day=planned_time_of_day,
        late_minutes=late_minutes,
    )
    return states.save(demo)
