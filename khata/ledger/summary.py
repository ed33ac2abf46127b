"""Mini README: Aggregate views over the ledger.

Structure:
    * today_expense - expenses recorded for the current calendar day.
    * total_receivable - what counterparties owe the owner (positive balances).
    * total_payable - what the owner owes counterparties (negative balances).
    * LedgerSummary / ledger_summary - the three figures together.

Every call queries the store afresh; nothing here is cached. Empty
aggregates come back as ``Decimal("0")``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from ..logging_utils import get_logger
from .store import LedgerStore

LOGGER = get_logger(__name__)


def today_expense(store: LedgerStore, today: Optional[date] = None) -> Decimal:
    """Sum today's ``EXPENSE`` transactions using the server's local date."""

    return store.sum_expenses_on(today or date.today())


def total_receivable(store: LedgerStore) -> Decimal:
    return store.sum_positive_balances()


def total_payable(store: LedgerStore) -> Decimal:
    return store.sum_negative_balances()


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Snapshot of the dashboard figures."""

    today_expense: Decimal
    total_receivable: Decimal
    total_payable: Decimal

    @property
    def net_position(self) -> Decimal:
        """Receivable minus payable, equal to the sum of all balances."""

        return self.total_receivable - self.total_payable

    def as_dict(self) -> Dict[str, float]:
        return {
            "todayExpense": float(self.today_expense),
            "totalReceivable": float(self.total_receivable),
            "totalPayable": float(self.total_payable),
        }


def ledger_summary(store: LedgerStore, today: Optional[date] = None) -> LedgerSummary:
    summary = LedgerSummary(
        today_expense=today_expense(store, today),
        total_receivable=total_receivable(store),
        total_payable=total_payable(store),
    )
    LOGGER.debug(
        "Summary -> expense: %s receivable: %s payable: %s",
        summary.today_expense,
        summary.total_receivable,
        summary.total_payable,
    )
    return summary
