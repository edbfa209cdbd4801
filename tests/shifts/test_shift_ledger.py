from datetime import datetime, timedelta, timezone

from src.handover_system.handover_system.core.enums import ShiftKind
from src.handover_system.handover_system.shifts.ledger import ShiftLedger, new_entry_id
from src.handover_system.handover_system.shifts.model import ShiftInterval

T0 = datetime(2025, 11, 10, 11, 0, tzinfo=timezone.utc)


def test_first_handover_opens_single_interval():
    ledger = ShiftLedger()

    opened = ledger.record_handover("alex", ShiftKind.DAY, T0)

    assert ledger.history() == (opened,)
    assert ledger.current_open_interval() == opened
    assert opened.start == T0 and opened.end is None


def test_handover_closes_previous_interval_at_same_instant():
    ledger = ShiftLedger()
    ledger.record_handover("alex", ShiftKind.DAY, T0)
    t1 = T0 + timedelta(hours=12)

    ledger.record_handover("sam", ShiftKind.NIGHT, t1)

    newest, previous = ledger.history()
    assert newest.operator_id == "sam" and newest.is_open
    assert previous.operator_id == "alex" and previous.end == t1
    assert sum(1 for i in ledger.history() if i.is_open) == 1


def test_cap_evicts_oldest_entries():
    ledger = ShiftLedger(limit=3)
    for n in range(5):
        ledger.record_handover("alex" if n % 2 == 0 else "sam", ShiftKind.DAY, T0 + timedelta(hours=n))

    history = ledger.history()
    assert len(history) == 3
    assert [i.start for i in history] == [T0 + timedelta(hours=n) for n in (4, 3, 2)]
    assert ledger.current_open_interval().start == T0 + timedelta(hours=4)


def test_input_intervals_are_not_mutated():
    original = ShiftInterval(interval_id="shift_a", operator_id="alex", kind=ShiftKind.DAY, start=T0)
    ledger = ShiftLedger([original])

    ledger.record_handover("sam", ShiftKind.NIGHT, T0 + timedelta(hours=1))

    assert original.is_open
    assert ledger.history(1)[0].operator_id == "sam"


def test_close_never_ends_before_start():
    interval = ShiftInterval(interval_id="shift_a", operator_id="alex", kind=ShiftKind.DAY, start=T0)

    assert interval.close(T0 - timedelta(minutes=5)).end == T0


def test_entry_ids_carry_prefix_and_millis():
    entry_id = new_entry_id("shift", T0)

    prefix, token, millis = entry_id.split("_")
    assert prefix == "shift"
    assert len(token) == 12
    assert int(millis) == int(T0.timestamp() * 1000)
    assert new_entry_id("shift", T0) != entry_id
