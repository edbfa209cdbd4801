"""Handover state machine.

Every transition takes the current snapshot and returns a new one; the input
is never mutated. All validation runs before any new value is built, so a
rejected call leaves nothing half-applied.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ..common.datetime_utils import next_occurrence
from ..common.validators import require_hhmm, require_shift_kind
from ..core.constants import DEFAULT_SHIFT_LOG_LIMIT, DEFAULT_STAMP_LOG_LIMIT
from ..core.enums import ShiftKind
from ..core.exceptions import ValidationError
from ..rotation.policy import RotationPolicy
from ..shifts.ledger import ShiftLedger, new_entry_id
from ..stamps.log import StampLog
from ..stamps.model import StampEvent
from ..stamps.verdict import classify
from ..state.model import HandoverState, RotationState


def seed_state(policy: RotationPolicy, planned_time_of_day: str, at: datetime) -> HandoverState:
    """Cold-start state: empty logs, seed rotation, plan at today's occurrence of the time.

    The plan is not rolled forward past ``at``, so a first stamp shortly after
    the planned minute on a fresh store is scored LATE against it.
    """
    planned_time = require_hhmm(planned_time_of_day)
    seed = policy.seed()
    return HandoverState(
        rotation=RotationState(
            active_operator_id=seed.active_operator_id,
            active_kind=seed.active_kind,
            next_operator_id=seed.next_operator_id,
            next_kind=seed.next_kind,
            planned_time_of_day=planned_time_of_day,
            planned_handover_at=datetime.combine(at.date(), planned_time, tzinfo=at.tzinfo),
        )
    )


def _require_not_before_newest(state: HandoverState, at: datetime) -> None:
    # the shift log stays newest-first
    if state.shift_log and at < state.shift_log[0].start:
        raise ValidationError(
            f"Handover at {at.isoformat()} precedes the current shift start {state.shift_log[0].start.isoformat()}",
            code="HANDOVER_OUT_OF_ORDER",
        )


def _hand_over(
    state: HandoverState,
    operator_id: str,
    kind: ShiftKind,
    at: datetime,
    *,
    policy: RotationPolicy,
    shift_log_limit: int,
) -> HandoverState:
    ledger = ShiftLedger(state.shift_log, limit=shift_log_limit)
    ledger.record_handover(operator_id, kind, at)
    next_operator_id, next_kind = policy.advance(operator_id, kind)

    return replace(
        state,
        shift_log=ledger.history(),
        rotation=replace(
            state.rotation,
            active_operator_id=operator_id,
            active_kind=kind,
            next_operator_id=next_operator_id,
            next_kind=next_kind,
        ),
    )


def takeover(
    state: HandoverState,
    operator_id: str,
    kind: ShiftKind | str,
    at: datetime,
    *,
    policy: RotationPolicy,
    shift_log_limit: int = DEFAULT_SHIFT_LOG_LIMIT,
) -> HandoverState:
    """Administrative override: put ``operator_id`` on duty with ``kind``, unscored.

    The next pointer is recomputed with the same counterpart/flip rule used
    after a stamp.
    """
    operator = policy.operators.require(operator_id, code="BAD_TAKEOVER")
    shift_kind = require_shift_kind(kind, code="BAD_TAKEOVER")
    _require_not_before_newest(state, at)

    return _hand_over(
        state,
        operator.operator_id,
        shift_kind,
        at,
        policy=policy,
        shift_log_limit=shift_log_limit,
    )


def stamp_and_takeover(
    state: HandoverState,
    at: datetime,
    *,
    policy: RotationPolicy,
    shift_log_limit: int = DEFAULT_SHIFT_LOG_LIMIT,
    stamp_log_limit: int = DEFAULT_STAMP_LOG_LIMIT,
) -> tuple[HandoverState, StampEvent]:
    """Check in the scheduled next operator, score it, and hand over to them."""
    rotation = state.rotation
    planned_time = require_hhmm(rotation.planned_time_of_day)
    policy.operators.require(rotation.next_operator_id)
    _require_not_before_newest(state, at)

    result = classify(at, rotation.planned_handover_at)
    stamp = StampEvent(
        stamp_id=new_entry_id("stamp", at),
        operator_id=rotation.next_operator_id,
        stamped_at=at,
        planned_at=rotation.planned_handover_at,
        planned_operator_id=rotation.next_operator_id,
        planned_kind=rotation.next_kind,
        verdict=result.verdict,
        delta_minutes=result.delta_minutes,
    )
    stamps = StampLog(state.stamps, limit=stamp_log_limit)
    stamps.append(stamp)

    handed_over = _hand_over(
        state,
        rotation.next_operator_id,
        rotation.next_kind,
        at,
        policy=policy,
        shift_log_limit=shift_log_limit,
    )
    new_state = replace(
        handed_over,
        stamps=stamps.history(),
        rotation=replace(handed_over.rotation, planned_handover_at=next_occurrence(planned_time, at)),
    )
    return new_state, stamp


def set_planned_time(state: HandoverState, hhmm: str, at: datetime) -> HandoverState:
    """Store a new planned time of day and rebase the planned instant after ``at``."""
    planned_time = require_hhmm(hhmm)
    return replace(
        state,
        rotation=replace(
            state.rotation,
            planned_time_of_day=hhmm,
            planned_handover_at=next_occurrence(planned_time, at),
        ),
    )
