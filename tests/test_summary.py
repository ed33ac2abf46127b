"""Mini README: Tests for the aggregate summary queries."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from khata.ledger import ledger_summary, today_expense, total_payable, total_receivable


def test_empty_ledger_reports_zero(store) -> None:
    summary = ledger_summary(store)

    assert summary.today_expense == Decimal("0")
    assert total_receivable(store) == Decimal("0")
    assert total_payable(store) == Decimal("0")
    assert summary.as_dict() == {"todayExpense": 0.0, "totalReceivable": 0.0, "totalPayable": 0.0}


def test_today_expense_counts_only_todays_expenses(engine, store, add_customer) -> None:
    today = date(2024, 7, 4)
    add_customer("rahim")
    engine.record("e1", "EXPENSE", 50, today)
    engine.record("e2", "EXPENSE", "12.50", today)
    engine.record("e3", "EXPENSE", 99, today - timedelta(days=1))
    engine.record("c1", "GIVE_CREDIT", 500, today, customer_id="rahim")

    assert today_expense(store, today) == Decimal("62.50")


def test_today_expense_defaults_to_local_date(engine, store) -> None:
    before = today_expense(store)
    engine.record("e1", "EXPENSE", 50, date.today())

    assert today_expense(store) - before == Decimal("50")


def test_receivable_and_payable_split_balances(engine, store, add_customer) -> None:
    add_customer("a")
    add_customer("b")
    add_customer("s", customer_type="SUPPLIER")
    add_customer("settled")
    engine.record("t1", "GIVE_CREDIT", 100, "2024-05-01", customer_id="a")
    engine.record("t2", "GIVE_CREDIT", "40.75", "2024-05-01", customer_id="b")
    engine.record("t3", "TAKE_CREDIT", 300, "2024-05-01", customer_id="s")
    engine.record("t4", "GIVE_CREDIT", 10, "2024-05-01", customer_id="settled")
    engine.record("t5", "PAYMENT_RECEIVED", 10, "2024-05-02", customer_id="settled")

    summary = ledger_summary(store, today=date(2024, 5, 1))

    assert summary.total_receivable == Decimal("140.75")
    assert summary.total_payable == Decimal("300")
    balances = sum((customer.balance for customer in store.list_customers()), Decimal("0"))
    assert summary.net_position == balances
