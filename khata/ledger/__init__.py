"""Mini README: The khata ledger core.

This package owns the balance-accounting rules and the queries derived from
them. ``LedgerStore`` is the persistence boundary, ``BalanceEngine`` records
transactions and moves balances, ``summary`` computes dashboard figures and
``reminders`` derives reminder status. The request layer and CLI depend on
this package; nothing here imports them.
"""

from .engine import BALANCE_SIGNS, BalanceEngine, balance_delta
from .models import (
    Customer,
    CustomerType,
    Reminder,
    ReminderStatus,
    ReminderType,
    Transaction,
    TransactionType,
    new_customer,
    new_reminder,
    new_transaction,
)
from .reminders import classify, pending_reminders, with_current_status
from .store import LedgerStore
from .summary import LedgerSummary, ledger_summary, today_expense, total_payable, total_receivable

__all__ = [
    "BALANCE_SIGNS",
    "BalanceEngine",
    "Customer",
    "CustomerType",
    "LedgerStore",
    "LedgerSummary",
    "Reminder",
    "ReminderStatus",
    "ReminderType",
    "Transaction",
    "TransactionType",
    "balance_delta",
    "classify",
    "ledger_summary",
    "new_customer",
    "new_reminder",
    "new_transaction",
    "pending_reminders",
    "today_expense",
    "total_payable",
    "total_receivable",
    "with_current_status",
]
