from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from ..core.exceptions import ValidationError
from .model import Operator


class OperatorRegistry:
    """The fixed pair of operators configured for an event."""

    def __init__(self, operators: Iterable[Operator]):
        items = tuple(operators)
        if len(items) != 2:
            raise ValueError("Exactly two operators must be configured")
        if items[0].operator_id == items[1].operator_id:
            raise ValueError("Operator ids must be distinct")
        self._operators = items
        self._by_id = {op.operator_id: op for op in items}

    @classmethod
    def from_pairs(cls, pairs: Sequence[Sequence[str]]) -> "OperatorRegistry":
        return cls(Operator(operator_id=str(op_id), display_name=str(name)) for op_id, name in pairs)

    @property
    def first(self) -> Operator:
        return self._operators[0]

    @property
    def second(self) -> Operator:
        return self._operators[1]

    def require(self, operator_id: object, *, code: str = ValidationError.code) -> Operator:
        op = self._by_id.get(operator_id) if isinstance(operator_id, str) else None
        if not op:
            raise ValidationError(f"Unknown operator: {operator_id!r}", code=code)
        return op

    def display_name(self, operator_id: str) -> str:
        op = self._by_id.get(operator_id)
        return op.display_name if op else operator_id

    def __contains__(self, operator_id: object) -> bool:
        return operator_id in self._by_id

    def __iter__(self) -> Iterator[Operator]:
        return iter(self._operators)
