from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from .common.clock import Clock, SystemClock
from .common.datetime_utils import parse_instant
from .core.constants import DEFAULT_EVENT_DAY_TOTAL, DEFAULT_PLANNED_TIME, DEFAULT_SHIFT_LOG_LIMIT, DEFAULT_STAMP_LOG_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .handover.auth import AdminGate
from .handover.service import HandoverService
from .operators.registry import OperatorRegistry
from .rotation.policy import RotationPolicy
from .state.json_file_repository import JsonFileStateRepository
from .state.mysql_state_repository import MySQLStateRepository
from .state.repository import StateRepository
from .stats.service import StatsReportService


@dataclass(frozen=True)
class Container:
    clock: Clock
    tz: ZoneInfo
    operators: OperatorRegistry
    policy: RotationPolicy
    admin_gate: AdminGate

    state_repo: StateRepository

    handover_service: HandoverService
    stats_service: StatsReportService


def build_state_repository(settings: Any) -> StateRepository:
    backend = str(getattr(settings, "STATE_BACKEND", "json")).lower()
    if backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        return MySQLStateRepository(conn)
    if backend == "json":
        return JsonFileStateRepository(getattr(settings, "STATE_PATH"))
    raise ValueError(f"Unknown STATE_BACKEND: {backend!r}")


def build_container(
    settings: Any,
    *,
    clock: Optional[Clock] = None,
    state_repo: Optional[StateRepository] = None,
) -> Container:
    tz = ZoneInfo(getattr(settings, "TIMEZONE", "UTC"))
    clock = clock or SystemClock(tz)

    operators = OperatorRegistry.from_pairs(getattr(settings, "OPERATORS"))
    policy = RotationPolicy(operators)
    admin_gate = AdminGate(getattr(settings, "ADMIN_TOKEN", ""))
    state_repo = state_repo or build_state_repository(settings)

    event_start_raw = getattr(settings, "EVENT_START", None)
    event_start: Optional[datetime] = parse_instant(event_start_raw).astimezone(tz) if event_start_raw else None

    handover_service = HandoverService(
        state_repo,
        policy,
        gate=admin_gate,
        clock=clock,
        default_planned_time=getattr(settings, "DEFAULT_PLANNED_TIME", DEFAULT_PLANNED_TIME),
        shift_log_limit=getattr(settings, "SHIFT_LOG_LIMIT", DEFAULT_SHIFT_LOG_LIMIT),
        stamp_log_limit=getattr(settings, "STAMP_LOG_LIMIT", DEFAULT_STAMP_LOG_LIMIT),
    )
    stats_service = StatsReportService(
        handover_service,
        operators,
        clock=clock,
        tz=tz,
        event_start=event_start,
        event_day_total=getattr(settings, "EVENT_DAY_TOTAL", DEFAULT_EVENT_DAY_TOTAL),
    )

    return Container(
        clock=clock,
        tz=tz,
        operators=operators,
        policy=policy,
        admin_gate=admin_gate,
        state_repo=state_repo,
        handover_service=handover_service,
        stats_service=stats_service,
    )
