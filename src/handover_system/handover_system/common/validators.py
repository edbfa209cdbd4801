from __future__ import annotations

import re
from datetime import time

from ..core.enums import ShiftKind
from ..core.exceptions import ValidationError

HHMM_PATTERN = re.compile(r"^\d{2}:\d{2}$")


def require_non_empty(value: str, field_name: str, *, code: str = ValidationError.code) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required", code=code)
    return str(value).strip()


def require_hhmm(value: str, *, code: str = "BAD_TIME_FORMAT") -> time:
    """Validate an ``HH:MM`` string and return it as a time of day.

    Hours are bounded to 00-23 and minutes to 00-59.
    """
    if not isinstance(value, str) or not HHMM_PATTERN.match(value):
        raise ValidationError(f"Planned time must look like HH:MM, got {value!r}", code=code)
    hours, minutes = int(value[:2]), int(value[3:])
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Planned time out of range: {value!r}", code=code)
    return time(hour=hours, minute=minutes)


def require_shift_kind(value: object, *, code: str = ValidationError.code) -> ShiftKind:
    if isinstance(value, ShiftKind):
        return value
    if not isinstance(value, str):
        raise ValidationError("Shift kind must be DAY or NIGHT", code=code)
    try:
        return ShiftKind(value.strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown shift kind: {value!r}", code=code) from None
