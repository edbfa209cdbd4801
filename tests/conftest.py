from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.handover_system.handover_system.common.clock import FixedClock
from src.handover_system.handover_system.core.exceptions import PersistenceError
from src.handover_system.handover_system.handover.auth import AdminGate
from src.handover_system.handover_system.handover.service import HandoverService
from src.handover_system.handover_system.operators.registry import OperatorRegistry
from src.handover_system.handover_system.rotation.policy import RotationPolicy
from src.handover_system.handover_system.state.model import HandoverState

ADMIN_TOKEN = "s3cret"


class InMemoryStateRepo:
    def __init__(self, state: Optional[HandoverState] = None):
        self.state = state
        self.saves = 0
        self.loads = 0
        self.fail_save = False
        self.fail_code = "STATE_WRITE_FAILED"

    def load(self) -> Optional[HandoverState]:
        self.loads += 1
        return self.state

    def save(self, state: HandoverState) -> HandoverState:
        if self.fail_save:
            raise PersistenceError("save failed", code=self.fail_code)
        current = self.state.version if self.state else 0
        if state.version != current:
            raise PersistenceError("stale", code="STATE_CONFLICT")
        self.saves += 1
        self.state = replace(state, version=state.version + 1)
        return self.state


@pytest.fixture
def tz():
    return timezone.utc


@pytest.fixture
def fixed_now(tz):
    return datetime(2025, 11, 10, 13, 30, tzinfo=tz)


@pytest.fixture
def operators():
    return OperatorRegistry.from_pairs([("alex", "Alex"), ("sam", "Sam")])


@pytest.fixture
def policy(operators):
    return RotationPolicy(operators)


@pytest.fixture
def clock(fixed_now):
    return FixedClock(fixed_time=fixed_now)


@pytest.fixture
def state_repo():
    return InMemoryStateRepo()


@pytest.fixture(scope="session")
def admin_gate():
    return AdminGate(ADMIN_TOKEN)


@pytest.fixture
def handover_service(state_repo, policy, admin_gate, clock):
    return HandoverService(state_repo, policy, gate=admin_gate, clock=clock)


@pytest.fixture
def admin_token():
    return ADMIN_TOKEN
