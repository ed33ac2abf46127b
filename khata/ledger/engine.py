"""Mini README: Balance accounting engine for the khata ledger.

Structure:
    * BALANCE_SIGNS - how each transaction type moves a customer's balance.
    * balance_delta - pure mapping from (type, amount) to a signed delta.
    * BalanceEngine - records a transaction and applies its delta atomically.

Sign convention: a positive balance means the counterparty owes the ledger
owner. Extending credit or paying a supplier raises the balance; taking
credit or receiving a payment lowers it. Expenses never touch a balance.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from ..errors import DuplicateTransaction, NotFound
from ..logging_utils import get_logger
from .models import Transaction, TransactionType, new_transaction
from .store import LedgerStore

LOGGER = get_logger(__name__)

BALANCE_SIGNS: Dict[TransactionType, int] = {
    TransactionType.GIVE_CREDIT: 1,
    TransactionType.TAKE_CREDIT: -1,
    TransactionType.PAYMENT_RECEIVED: -1,
    TransactionType.PAYMENT_MADE: 1,
    TransactionType.EXPENSE: 0,
}


def balance_delta(transaction_type: TransactionType, amount: Decimal) -> Decimal:
    """Return the signed change ``amount`` of ``transaction_type`` applies to a balance.

    Types without an entry in ``BALANCE_SIGNS`` leave the balance untouched.
    """

    sign = BALANCE_SIGNS.get(transaction_type, 0)
    if sign == 0:
        return Decimal("0")
    return amount if sign > 0 else -amount


class BalanceEngine:
    """Append transactions to the ledger and keep customer balances in step."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    def apply_transaction(self, transaction: Transaction) -> Transaction:
        """Persist ``transaction`` and adjust the linked customer's balance.

        Both writes happen in one store transaction: an unknown customer
        (``NotFound``), a reused id (``DuplicateTransaction``) or a storage
        failure (``StorageError``) leaves the ledger exactly as it was.
        """

        delta = balance_delta(transaction.transaction_type, transaction.amount)
        with self.store.transaction() as connection:
            if self.store.transaction_exists(connection, transaction.transaction_id):
                LOGGER.warning("Rejected replay of transaction %s", transaction.transaction_id)
                raise DuplicateTransaction(transaction.transaction_id)
            if transaction.customer_id and not self.store.customer_exists(
                connection, transaction.customer_id
            ):
                LOGGER.warning(
                    "Transaction %s references unknown customer %s",
                    transaction.transaction_id,
                    transaction.customer_id,
                )
                raise NotFound("Customer", transaction.customer_id)

            self.store.insert_transaction(connection, transaction)
            if transaction.customer_id:
                updated = self.store.adjust_balance(
                    connection, transaction.customer_id, delta, transaction.occurred_on
                )
                if updated != 1:
                    raise NotFound("Customer", transaction.customer_id)

        LOGGER.info(
            "Recorded %s %s of %s (customer=%s delta=%s)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.amount,
            transaction.customer_id,
            delta,
        )
        return transaction

    def record(
        self,
        transaction_id: object,
        transaction_type: object,
        amount: object,
        occurred_on: object,
        note: object = None,
        customer_id: Optional[object] = None,
    ) -> Transaction:
        """Validate loosely typed input and apply it. Raises ``ValidationError`` on bad input."""

        transaction = new_transaction(
            transaction_id, transaction_type, amount, occurred_on, note, customer_id
        )
        return self.apply_transaction(transaction)
