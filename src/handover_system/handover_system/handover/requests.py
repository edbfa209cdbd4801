"""Typed admin requests, validated at the boundary before reaching the core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ..common.validators import require_hhmm, require_non_empty, require_shift_kind
from ..core.enums import AdminAction, ShiftKind
from ..core.exceptions import ValidationError
from ..operators.registry import OperatorRegistry


@dataclass(frozen=True)
class TakeoverRequest:
    operator_id: str
    kind: ShiftKind


@dataclass(frozen=True)
class StampRequest:
    pass


@dataclass(frozen=True)
class SetPlannedTimeRequest:
    hhmm: str


AdminRequest = Union[TakeoverRequest, StampRequest, SetPlannedTimeRequest]


def parse_admin_request(body: Any, operators: OperatorRegistry) -> AdminRequest:
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object", code="BAD_JSON")

    try:
        action = AdminAction(body.get("action"))
    except ValueError:
        raise ValidationError(f"Unknown action: {body.get('action')!r}", code="UNKNOWN_ACTION") from None

    if action == AdminAction.TAKEOVER:
        operator_id = require_non_empty(body.get("operator") or "", "operator", code="BAD_TAKEOVER")
        operator = operators.require(operator_id, code="BAD_TAKEOVER")
        kind = require_shift_kind(body.get("kind"), code="BAD_TAKEOVER")
        return TakeoverRequest(operator_id=operator.operator_id, kind=kind)

    if action == AdminAction.SET_PLANNED_TIME:
        hhmm = body.get("time")
        require_hhmm(hhmm)
        return SetPlannedTimeRequest(hhmm=hhmm)

    return StampRequest()
