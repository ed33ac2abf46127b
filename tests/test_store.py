"""Mini README: Tests for the ledger store lifecycle, listings and reminders."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from khata.errors import DuplicateCustomer, NotFound, StorageError
from khata.ledger import (
    CustomerType,
    LedgerStore,
    ReminderStatus,
    new_customer,
    new_reminder,
)


def test_new_customer_starts_with_zero_balance(store) -> None:
    store.create_customer(new_customer("c1", "Rahim Traders", "01700000000", "customer"))

    [customer] = store.list_customers()
    assert customer.customer_id == "c1"
    assert customer.balance == Decimal("0")
    assert customer.customer_type is CustomerType.CUSTOMER
    assert customer.last_transaction_date is None
    assert customer.as_dict()["lastTransactionDate"] is None


def test_duplicate_customer_id_is_rejected(store, add_customer) -> None:
    add_customer("c1")
    with pytest.raises(DuplicateCustomer):
        add_customer("c1")


def test_customers_are_listed_by_name_and_searchable(store) -> None:
    store.create_customer(new_customer("1", "Zaman Store", "0188"))
    store.create_customer(new_customer("2", "Alam Bhai", "0199"))
    store.create_customer(new_customer("3", "Mita Supplies", "0177", "SUPPLIER"))

    assert [customer.name for customer in store.list_customers()] == [
        "Alam Bhai",
        "Mita Supplies",
        "Zaman Store",
    ]
    assert [customer.customer_id for customer in store.list_customers(search="mita")] == ["3"]
    assert [customer.customer_id for customer in store.list_customers(search="0188")] == ["1"]


def test_recent_transactions_are_newest_first(engine, store, add_customer) -> None:
    add_customer("rahim")
    engine.record("old", "GIVE_CREDIT", 1, "2024-01-01", customer_id="rahim")
    engine.record("new", "EXPENSE", 2, "2024-03-01")
    engine.record("mid", "GIVE_CREDIT", 3, "2024-02-01", customer_id="rahim")
    engine.record("new-later", "EXPENSE", 4, "2024-03-01")

    recent = store.list_transactions(limit=3)
    assert [tx.transaction_id for tx in recent] == ["new-later", "new", "mid"]
    for_customer = store.list_transactions(customer_id="rahim")
    assert [tx.transaction_id for tx in for_customer] == ["mid", "old"]


def test_reminders_are_listed_by_date_and_can_be_completed(store, add_customer) -> None:
    add_customer("rahim")
    store.create_reminder(new_reminder("r2", "Collect dues", "2024-06-10", "COLLECTION", 500, "rahim"))
    store.create_reminder(new_reminder("r1", "Pay rent", "2024-06-01", "PAYMENT"))

    reminders = store.list_reminders()
    assert [reminder.reminder_id for reminder in reminders] == ["r1", "r2"]
    assert reminders[1].amount == Decimal("500")
    assert all(reminder.status is ReminderStatus.UPCOMING for reminder in reminders)

    completed = store.complete_reminder("r1")
    assert completed.status is ReminderStatus.COMPLETED
    with pytest.raises(NotFound):
        store.complete_reminder("missing")


def test_reminder_for_unknown_customer_is_rejected(store) -> None:
    with pytest.raises(NotFound):
        store.create_reminder(new_reminder("r1", "Collect", date(2024, 6, 1), "COLLECTION", customer_id="ghost"))
    assert store.list_reminders() == []


def test_closed_store_refuses_work(tmp_path) -> None:
    ledger_store = LedgerStore(f"sqlite:///{tmp_path / 'closed.db'}")
    with pytest.raises(StorageError):
        ledger_store.list_customers()

    with ledger_store as opened:
        assert opened.is_open
    assert not ledger_store.is_open


def test_in_memory_store_keeps_state_between_calls() -> None:
    with LedgerStore("sqlite://") as ledger_store:
        ledger_store.create_customer(new_customer("c1", "Memory"))
        assert [customer.customer_id for customer in ledger_store.list_customers()] == ["c1"]


def test_non_sqlite_url_is_refused_on_open() -> None:
    ledger_store = LedgerStore("postgresql://ledger@localhost/khata")
    with pytest.raises(StorageError):
        ledger_store.open()
    assert not ledger_store.is_open
