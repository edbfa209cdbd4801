from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .handover.controller import register as register_handover
from .handover.demo import ensure_demo_state
from .stats.controller import register as register_stats

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _seed_demo(container: Container) -> None:
    now = container.clock.now()
    event_start = container.stats_service.event_start or now
    saved = ensure_demo_state(
        container.state_repo,
        container.policy,
        event_start=event_start,
        now=now,
        planned_time_of_day=container.handover_service.default_planned_time,
    )
    if saved:
        logger.info("demo state seeded (%d shifts)", len(saved.shift_log))


def create_app(*, settings: Optional[ModuleType] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings_module = get_settings_module()
        settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = str(getattr(settings, "STATE_BACKEND", "json")).lower()
    logger.info("settings=%s backend=%s", settings.__name__, backend)

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        db_config = getattr(settings, "DB_CONFIG")
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = container or build_container(settings)

    if bool(getattr(settings, "AUTO_SEED_DEMO", False)):
        _seed_demo(container)

    register_handover(app, container)
    register_stats(app, container)

    return app
