import pytest

from src.handover_system.handover_system.core.enums import ShiftKind
from src.handover_system.handover_system.core.exceptions import ValidationError
from src.handover_system.handover_system.operators.model import Operator
from src.handover_system.handover_system.operators.registry import OperatorRegistry


def test_advance_hands_to_counterpart_and_flips_kind(policy):
    assert policy.advance("alex", ShiftKind.DAY) == ("sam", ShiftKind.NIGHT)
    assert policy.advance("sam", ShiftKind.NIGHT) == ("alex", ShiftKind.DAY)
    assert policy.advance("sam", ShiftKind.DAY) == ("alex", ShiftKind.NIGHT)


def test_seed_puts_first_operator_on_day(policy):
    seed = policy.seed()

    assert (seed.active_operator_id, seed.active_kind) == ("alex", ShiftKind.DAY)
    assert (seed.next_operator_id, seed.next_kind) == ("sam", ShiftKind.NIGHT)


def test_flip_is_an_involution(policy):
    for kind in ShiftKind:
        assert policy.flip(policy.flip(kind)) == kind


def test_registry_requires_two_distinct_operators():
    with pytest.raises(ValueError):
        OperatorRegistry([Operator("alex", "Alex")])
    with pytest.raises(ValueError):
        OperatorRegistry([Operator("alex", "Alex"), Operator("alex", "Alex again")])


def test_registry_lookup(operators):
    assert operators.require("sam").display_name == "Sam"
    assert operators.display_name("ghost") == "ghost"
    assert "alex" in operators
    with pytest.raises(ValidationError) as exc:
        operators.require("ghost", code="BAD_TAKEOVER")
    assert exc.value.code == "BAD_TAKEOVER"
