from datetime import datetime, timedelta, timezone

import pytest

from src.handover_system.handover_system.core.enums import ShiftKind, Verdict
from src.handover_system.handover_system.core.exceptions import AuthorizationError, PersistenceError, ValidationError
from src.handover_system.handover_system.handover.auth import AdminGate
from src.handover_system.handover_system.handover.requests import SetPlannedTimeRequest, StampRequest, TakeoverRequest
from src.handover_system.handover_system.handover.service import HandoverService


def test_read_returns_seed_without_saving(handover_service, state_repo, fixed_now):
    state = handover_service.read()

    assert state.rotation.active_operator_id == "alex"
    assert state.rotation.planned_handover_at == fixed_now.replace(hour=14, minute=0)
    assert state_repo.saves == 0


def test_unauthorized_write_never_touches_store(handover_service, state_repo):
    with pytest.raises(AuthorizationError) as exc:
        handover_service.apply_stamp_and_takeover(credential="wrong")

    assert exc.value.code == "UNAUTHORIZED"
    assert isinstance(exc.value, ValidationError)
    assert state_repo.loads == 0


def test_missing_credential_is_unauthorized(handover_service):
    with pytest.raises(AuthorizationError):
        handover_service.apply_set_planned_time(credential=None, hhmm="10:00")


def test_empty_configured_token_disables_writes(state_repo, policy, clock):
    service = HandoverService(state_repo, policy, gate=AdminGate(""), clock=clock)

    with pytest.raises(AuthorizationError):
        service.apply_takeover(credential="", operator_id="alex", kind="DAY")


def test_takeover_is_persisted(handover_service, state_repo, fixed_now, admin_token):
    state = handover_service.apply_takeover(credential=admin_token, operator_id="sam", kind=ShiftKind.NIGHT)

    assert state.version == 1
    assert state_repo.state == state
    assert state.open_interval().start == fixed_now
    assert handover_service.read().rotation.active_operator_id == "sam"


def test_bad_takeover_leaves_store_untouched(handover_service, state_repo, admin_token):
    with pytest.raises(ValidationError) as exc:
        handover_service.apply_takeover(credential=admin_token, operator_id="ghost", kind="DAY")

    assert exc.value.code == "BAD_TAKEOVER"
    assert state_repo.saves == 0


def test_stamp_uses_clock_when_no_instant_given(handover_service, clock, fixed_now, admin_token):
    # store the 14:00 plan while it is still ahead, then stamp after it
    handover_service.apply_set_planned_time(credential=admin_token, hhmm="14:00")
    clock.set(fixed_now.replace(hour=14, minute=3))

    state, stamp = handover_service.apply_stamp_and_takeover(credential=admin_token)

    assert (stamp.verdict, stamp.delta_minutes) == (Verdict.LATE, 3)
    assert state.stamps[0] == stamp


def test_writes_build_on_stored_state(handover_service, admin_token):
    at = datetime(2025, 11, 10, 14, 0, tzinfo=timezone.utc)
    handover_service.apply_stamp_and_takeover(credential=admin_token, at=at)
    state, stamp = handover_service.apply_stamp_and_takeover(credential=admin_token, at=at + timedelta(days=1))

    assert stamp.operator_id == "alex"
    assert len(state.stamps) == 2
    assert state.version == 2


def test_set_planned_time_validates_before_loading(handover_service, state_repo, admin_token):
    with pytest.raises(ValidationError) as exc:
        handover_service.apply_set_planned_time(credential=admin_token, hhmm="7:30")

    assert exc.value.code == "BAD_TIME_FORMAT"
    assert state_repo.loads == 0


def test_save_failure_propagates(handover_service, state_repo, admin_token):
    state_repo.fail_save = True

    with pytest.raises(PersistenceError) as exc:
        handover_service.apply_set_planned_time(credential=admin_token, hhmm="07:30")

    assert exc.value.code == "STATE_WRITE_FAILED"
    assert state_repo.state is None


def test_apply_dispatches_parsed_requests(handover_service, admin_token):
    state, stamp = handover_service.apply(SetPlannedTimeRequest(hhmm="16:45"), credential=admin_token)
    assert stamp is None and state.rotation.planned_time_of_day == "16:45"

    state, stamp = handover_service.apply(TakeoverRequest(operator_id="sam", kind=ShiftKind.DAY), credential=admin_token)
    assert stamp is None and state.rotation.active_operator_id == "sam"

    state, stamp = handover_service.apply(StampRequest(), credential=admin_token)
    assert stamp.operator_id == "alex"


def test_cold_start_stamp_is_scored_against_todays_plan(handover_service, state_repo, clock, fixed_now, admin_token):
    clock.set(fixed_now.replace(hour=14, minute=5))

    state, stamp = handover_service.apply_stamp_and_takeover(credential=admin_token)

    assert (stamp.verdict, stamp.delta_minutes) == (Verdict.LATE, 5)
    assert stamp.planned_at == fixed_now.replace(hour=14, minute=0)
    assert state.rotation.planned_handover_at == fixed_now.replace(hour=14, minute=0) + timedelta(days=1)
    assert state_repo.saves == 1
