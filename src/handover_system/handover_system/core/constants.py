"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PLANNED_TIME = "14:00"
DEFAULT_SHIFT_LOG_LIMIT = 200
DEFAULT_STAMP_LOG_LIMIT = 240
DEFAULT_EVENT_DAY_TOTAL = 30
DEMO_HISTORY_LIMIT = 160
LAST_SWITCHES_LIMIT = 8
STATE_KEY = "default"
