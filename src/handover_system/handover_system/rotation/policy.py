from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ShiftKind
from ..operators.registry import OperatorRegistry


@dataclass(frozen=True)
class RotationSeed:
    active_operator_id: str
    active_kind: ShiftKind
    next_operator_id: str
    next_kind: ShiftKind


class RotationPolicy:
    """Two-operator rotation: the counterpart takes over and the shift kind flips."""

    def __init__(self, operators: OperatorRegistry):
        self._operators = operators

    @property
    def operators(self) -> OperatorRegistry:
        return self._operators

    def other_operator(self, operator_id: str) -> str:
        first, second = self._operators.first.operator_id, self._operators.second.operator_id
        return second if operator_id == first else first

    @staticmethod
    def flip(kind: ShiftKind) -> ShiftKind:
        return ShiftKind.NIGHT if kind == ShiftKind.DAY else ShiftKind.DAY

    def advance(self, operator_id: str, kind: ShiftKind) -> tuple[str, ShiftKind]:
        """Next (operator, kind) after ``operator_id`` went on duty with ``kind``."""
        return self.other_operator(operator_id), self.flip(kind)

    def seed(self) -> RotationSeed:
        """Cold-start default: first operator on DAY, second scheduled for NIGHT."""
        return RotationSeed(
            active_operator_id=self._operators.first.operator_id,
            active_kind=ShiftKind.DAY,
            next_operator_id=self._operators.second.operator_id,
            next_kind=ShiftKind.NIGHT,
        )
