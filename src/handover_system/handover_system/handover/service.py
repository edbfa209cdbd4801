from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.clock import Clock
from ..common.validators import require_hhmm, require_shift_kind
from ..core.constants import DEFAULT_PLANNED_TIME, DEFAULT_SHIFT_LOG_LIMIT, DEFAULT_STAMP_LOG_LIMIT
from ..core.enums import ShiftKind
from ..core.exceptions import PersistenceError
from ..rotation.policy import RotationPolicy
from ..stamps.model import StampEvent
from ..state.model import HandoverState
from ..state.repository import StateRepository
from . import transitions
from .auth import AdminGate
from .requests import AdminRequest, SetPlannedTimeRequest, StampRequest, TakeoverRequest

logger = logging.getLogger(__name__)


class HandoverService:
    """Use case: read the handover state and apply admin writes.

    Writes are serialized per service instance: each one loads the stored
    snapshot, applies a pure transition and saves the result as a whole.
    The admin credential is checked before the store is touched.
    """

    def __init__(
        self,
        states: StateRepository,
        policy: RotationPolicy,
        *,
        gate: AdminGate,
        clock: Clock,
        default_planned_time: str = DEFAULT_PLANNED_TIME,
        shift_log_limit: int = DEFAULT_SHIFT_LOG_LIMIT,
        stamp_log_limit: int = DEFAULT_STAMP_LOG_LIMIT,
    ):
        require_hhmm(default_planned_time)
        self._states = states
        self._policy = policy
        self._gate = gate
        self._clock = clock
        self._default_planned_time = default_planned_time
        self._shift_log_limit = int(shift_log_limit)
        self._stamp_log_limit = int(stamp_log_limit)
        self._write_lock = threading.Lock()

    @property
    def policy(self) -> RotationPolicy:
        return self._policy

    @property
    def default_planned_time(self) -> str:
        return self._default_planned_time

    def read(self, *, now: Optional[datetime] = None) -> HandoverState:
        """Stored snapshot, or the seed state when nothing was stored yet (not saved)."""
        state = self._states.load()
        if state is None:
            return transitions.seed_state(self._policy, self._default_planned_time, now or self._clock.now())
        return state

    def apply_takeover(
        self,
        *,
        credential: Optional[str],
        operator_id: str,
        kind: ShiftKind | str,
        at: Optional[datetime] = None,
    ) -> HandoverState:
        self._gate.require(credential)
        operator = self._policy.operators.require(operator_id, code="BAD_TAKEOVER")
        shift_kind = require_shift_kind(kind, code="BAD_TAKEOVER")

        state = self._write(
            lambda current, now: transitions.takeover(
                current,
                operator.operator_id,
                shift_kind,
                now,
                policy=self._policy,
                shift_log_limit=self._shift_log_limit,
            ),
            at,
        )
        logger.info("takeover: %s on duty (%s)", operator.operator_id, shift_kind.value)
        return state

    def apply_stamp_and_takeover(
        self,
        *,
        credential: Optional[str],
        at: Optional[datetime] = None,
    ) -> tuple[HandoverState, StampEvent]:
        self._gate.require(credential)

        produced: list[StampEvent] = []

        def _apply(current: HandoverState, now: datetime) -> HandoverState:
            new_state, stamp = transitions.stamp_and_takeover(
                current,
                now,
                policy=self._policy,
                shift_log_limit=self._shift_log_limit,
                stamp_log_limit=self._stamp_log_limit,
            )
            produced.append(stamp)
            return new_state

        state = self._write(_apply, at)
        stamp = produced[0]
        logger.info(
            "stamp: %s checked in %s (%+d min), planned %s",
            stamp.operator_id,
            stamp.verdict.value,
            stamp.delta_minutes,
            stamp.planned_at.isoformat(),
        )
        return state, stamp

    def apply_set_planned_time(
        self,
        *,
        credential: Optional[str],
        hhmm: str,
        at: Optional[datetime] = None,
    ) -> HandoverState:
        self._gate.require(credential)
        require_hhmm(hhmm)

        state = self._write(lambda current, now: transitions.set_planned_time(current, hhmm, now), at)
        logger.info("planned handover set to %s (%s)", hhmm, state.rotation.planned_handover_at.isoformat())
        return state

    def apply(
        self,
        request: AdminRequest,
        *,
        credential: Optional[str],
        at: Optional[datetime] = None,
    ) -> tuple[HandoverState, Optional[StampEvent]]:
        """Dispatch a parsed admin request to the matching operation."""
        if isinstance(request, TakeoverRequest):
            return self.apply_takeover(credential=credential, operator_id=request.operator_id, kind=request.kind, at=at), None
        if isinstance(request, StampRequest):
            return self.apply_stamp_and_takeover(credential=credential, at=at)
        if isinstance(request, SetPlannedTimeRequest):
            return self.apply_set_planned_time(credential=credential, hhmm=request.hhmm, at=at), None
        raise TypeError(f"Unsupported admin request: {request!r}")

    def _write(self, apply: Callable[[HandoverState, datetime], HandoverState], at: Optional[datetime]) -> HandoverState:
        with self._write_lock:
            now = at or self._clock.now()
            current = self.read(now=now)
            new_state = apply(current, now)
            try:
                return self._states.save(new_state)
            except PersistenceError:
                logger.error("saving handover state failed (read version=%s)", current.version)
                raise
