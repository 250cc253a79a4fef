import pytest

from hivemind.simulation.suspension import SuspensionLedger


def test_entry_expires_at_resume_tick():
    ledger = SuspensionLedger({})
    ledger.suspend_for("colony>miner", 100, 5)

    assert all(ledger.is_suspended("colony>miner", tick) for tick in range(100, 105))
    assert not ledger.is_suspended("colony>miner", 105)


def test_expired_entry_is_deleted_once_on_read():
    store = {"task": 10}
    ledger = SuspensionLedger(store)

    assert ledger.is_suspended("task", 9)
    assert "task" in store
    assert not ledger.is_suspended("task", 12)
    assert store == {}
    assert not ledger.is_suspended("task", 13)


def test_unknown_task_is_not_suspended():
    assert not SuspensionLedger({}).is_suspended("nobody", 0)


def test_suspend_until_overwrites_previous_entry():
    store = {}
    ledger = SuspensionLedger(store)
    ledger.suspend_for("task", 0, 50)
    ledger.suspend_until_tick("task", 7)

    assert store == {"task": 7}


def test_zero_duration_never_suspends():
    ledger = SuspensionLedger({})
    ledger.suspend_for("task", 4, 0)

    assert not ledger.is_suspended("task", 4)


def test_negative_duration_is_rejected():
    with pytest.raises(ValueError):
        SuspensionLedger({}).suspend_for("task", 4, -1)
