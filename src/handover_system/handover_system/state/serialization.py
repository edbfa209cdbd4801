"""Snapshot <-> JSON-compatible dict conversion.

Instants are written as ISO-8601 strings with their UTC offset, so a snapshot
read back compares equal field-for-field to the one written.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_instant
from ..core.enums import ShiftKind, Verdict
from ..shifts.model import ShiftInterval
from ..stamps.model import StampEvent
from .model import HandoverState, RotationState


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def interval_to_dict(interval: ShiftInterval) -> dict[str, Any]:
    return {
        "id": interval.interval_id,
        "operator": interval.operator_id,
        "kind": interval.kind.value,
        "start": _iso(interval.start),
        "end": _iso(interval.end),
    }


def interval_from_dict(raw: Mapping[str, Any]) -> ShiftInterval:
    end = raw.get("end")
    return ShiftInterval(
        interval_id=str(raw["id"]),
        operator_id=str(raw["operator"]),
        kind=ShiftKind(raw["kind"]),
        start=parse_instant(raw["start"]),
        end=parse_instant(end) if end else None,
    )


def stamp_to_dict(stamp: StampEvent) -> dict[str, Any]:
    return {
        "id": stamp.stamp_id,
        "operator": stamp.operator_id,
        "stamped_at": _iso(stamp.stamped_at),
        "planned_at": _iso(stamp.planned_at),
        "planned_operator": stamp.planned_operator_id,
        "planned_kind": stamp.planned_kind.value,
        "verdict": stamp.verdict.value,
        "delta_minutes": stamp.delta_minutes,
    }


def stamp_from_dict(raw: Mapping[str, Any]) -> StampEvent:
    return StampEvent(
        stamp_id=str(raw["id"]),
        operator_id=str(raw["operator"]),
        stamped_at=parse_instant(raw["stamped_at"]),
        planned_at=parse_instant(raw["planned_at"]),
        planned_operator_id=str(raw["planned_operator"]),
        planned_kind=ShiftKind(raw["planned_kind"]),
        verdict=Verdict(raw["verdict"]),
        delta_minutes=int(raw["delta_minutes"]),
    )


def state_to_dict(state: HandoverState) -> dict[str, Any]:
    rotation = state.rotation
    return {
        "shift_log": [interval_to_dict(i) for i in state.shift_log],
        "stamps": [stamp_to_dict(s) for s in state.stamps],
        "active_operator": rotation.active_operator_id,
        "active_kind": rotation.active_kind.value,
        "next_operator": rotation.next_operator_id,
        "next_kind": rotation.next_kind.value,
        "planned_time_of_day": rotation.planned_time_of_day,
        "planned_handover_at": _iso(rotation.planned_handover_at),
        "version": state.version,
    }


def state_from_dict(raw: Mapping[str, Any]) -> HandoverState:
    """Rebuild a snapshot; raises KeyError/ValueError/TypeError on malformed input."""
    rotation = RotationState(
        active_operator_id=str(raw["active_operator"]),
        active_kind=ShiftKind(raw["active_kind"]),
        next_operator_id=str(raw["next_operator"]),
        next_kind=ShiftKind(raw["next_kind"]),
        planned_time_of_day=str(raw["planned_time_of_day"]),
        planned_handover_at=parse_instant(raw["planned_handover_at"]),
    )
    return HandoverState(
        rotation=rotation,
        shift_log=tuple(interval_from_dict(i) for i in raw.get("shift_log") or []),
        stamps=tuple(stamp_from_dict(s) for s in raw.get("stamps") or []),
        version=int(raw.get("version") or 0),
    )
