import os

from config import DEFAULT_OPERATORS, parse_operators

SECRET_KEY = "test-secret"
ADMIN_TOKEN = "test-admin-token"

STATE_BACKEND = "json"
STATE_PATH = os.getenv("STATE_PATH", "data/state.test.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "handover_test"),
}

TIMEZONE = "UTC"
OPERATORS = parse_operators(DEFAULT_OPERATORS)
DEFAULT_PLANNED_TIME = "14:00"

EVENT_START = ""
EVENT_DAY_TOTAL = 30

SHIFT_LOG_LIMIT = 200
STAMP_LOG_LIMIT = 240

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DEMO = False
