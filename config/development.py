import os

from config import DEFAULT_OPERATORS, parse_operators

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "dev-admin-token")

# "json" keeps the snapshot in STATE_PATH, "mysql" in the handover_state table
STATE_BACKEND = os.getenv("STATE_BACKEND", "json")
STATE_PATH = os.getenv("STATE_PATH", "data/state.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "handover_db"),
}

TIMEZONE = os.getenv("TIMEZONE", "Europe/Berlin")
OPERATORS = parse_operators(os.getenv("OPERATORS", DEFAULT_OPERATORS))
DEFAULT_PLANNED_TIME = os.getenv("DEFAULT_PLANNED_TIME", "14:00")

# ISO-8601 instant; empty means "first shift in the log"
EVENT_START = os.getenv("EVENT_START", "")
EVENT_DAY_TOTAL = int(os.getenv("EVENT_DAY_TOTAL", "30"))

SHIFT_LOG_LIMIT = int(os.getenv("SHIFT_LOG_LIMIT", "200"))
STAMP_LOG_LIMIT = int(os.getenv("STAMP_LOG_LIMIT", "240"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (mysql backend only, idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Seed demo shift history when no state is stored yet
AUTO_SEED_DEMO = bool(int(os.getenv("AUTO_SEED_DEMO", "0")))
