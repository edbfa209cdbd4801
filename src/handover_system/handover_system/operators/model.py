from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Operator:
    """Reference data: one of the two people who can be on duty."""

    operator_id: str
    display_name: str
