"""Seed a demo shift history into the configured state store.

Usage: python scripts/seed_db.py [EVENT_START_ISO] [--late YYYY-MM-DD:operator:minutes ...]
Nothing is written when a state is already stored.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from datetime import timedelta
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.handover_system.handover_system.common.datetime_utils import parse_instant, parse_iso_date
from src.handover_system.handover_system.container import build_container
from src.handover_system.handover_system.handover.demo import ensure_demo_state


def _parse_late(items: list[str]) -> dict:
    late = {}
    for item in items:
        day, operator_id, minutes = item.split(":")
        late[(parse_iso_date(day), operator_id)] = int(minutes)
    return late


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("event_start", nargs="?", help="ISO-8601 start of the event (default: EVENT_START or 14 days ago)")
    parser.add_argument("--late", nargs="*", default=[], help="late arrivals as YYYY-MM-DD:operator:minutes")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    now = container.clock.now()

    if args.event_start:
        event_start = parse_instant(args.event_start).astimezone(container.tz)
    else:
        event_start = container.stats_service.event_start or now - timedelta(days=14)

    saved = ensure_demo_state(
        container.state_repo,
        container.policy,
        event_start=event_start,
        now=now,
        planned_time_of_day=container.handover_service.default_planned_time,
        late_minutes=_parse_late(args.late),
    )
    if saved is None:
        print("SKIP: a state is already stored")
        return
    print(f"OK: Seeded demo state ({len(saved.shift_log)} shifts, version={saved.version})")


if __name__ == "__main__":
    main()
