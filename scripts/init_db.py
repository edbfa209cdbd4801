"""Create the handover database and table, then report what is stored.

Only needed for STATE_BACKEND=mysql; the JSON store needs no setup.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.handover_system.handover_system.database.bootstrap import apply_schema, list_tables
from src.handover_system.handover_system.database.connection import DatabaseConnection, DBConfig
from src.handover_system.handover_system.state.mysql_state_repository import MySQLStateRepository

SCHEMA_PATH = REPO_ROOT / "database" / "schema.sql"


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_mapping(settings.DB_CONFIG)
    target = f"{db_config.user}@{db_config.host}:{db_config.port}/{db_config.database}"

    apply_schema(settings.DB_CONFIG, schema_path=SCHEMA_PATH)
    tables = list_tables(settings.DB_CONFIG)
    if "handover_state" not in tables:
        sys.exit(f"FAIL: handover_state missing after applying {SCHEMA_PATH.name} -> {target}")

    state = MySQLStateRepository(DatabaseConnection(db_config)).load()
    stored = f"version={state.version}, shifts={len(state.shift_log)}" if state else "empty"
    print(f"OK: schema ready -> {target} (tables={len(tables)}, state {stored})")


if __name__ == "__main__":
    main()
