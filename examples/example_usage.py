"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the handover rules live in the services.
"""

import importlib
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from config import get_settings_module

from src.handover_system.handover_system.common.clock import FixedClock
from src.handover_system.handover_system.container import build_container
from src.handover_system.handover_system.state.json_file_repository import JsonFileStateRepository


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        settings,
        clock=FixedClock(fixed_time=datetime.now(ZoneInfo(settings.TIMEZONE))),
        state_repo=JsonFileStateRepository("data/example_state.json"),
    )
    token = settings.ADMIN_TOKEN
    service = container.handover_service

    state = service.read()
    print("on duty:", state.rotation.active_operator_id, state.rotation.active_kind.value)
    print("planned handover:", state.rotation.planned_handover_at.isoformat())

    container.clock.set(state.rotation.planned_handover_at + timedelta(minutes=3))
    state, stamp = service.apply_stamp_and_takeover(credential=token)
    print("stamp:", stamp.operator_id, stamp.verdict.value, stamp.delta_minutes)

    print(container.stats_service.build_overlay()["status"])


if __name__ == "__main__":
    main()
