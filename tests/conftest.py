"""Mini README: Shared pytest fixtures for the khata ledger tests.

Structure:
    * store - a LedgerStore backed by a fresh SQLite file per test.
    * engine - BalanceEngine bound to that store.
    * add_customer - helper creating customers with sensible defaults.
"""

from __future__ import annotations

from typing import Callable, Iterator

import pytest

from khata.ledger import BalanceEngine, Customer, LedgerStore, new_customer


@pytest.fixture()
def store(tmp_path) -> Iterator[LedgerStore]:
    ledger_store = LedgerStore(f"sqlite:///{tmp_path / 'khata.db'}")
    ledger_store.open()
    yield ledger_store
    ledger_store.close()


@pytest.fixture()
def engine(store: LedgerStore) -> BalanceEngine:
    return BalanceEngine(store)


@pytest.fixture()
def add_customer(store: LedgerStore) -> Callable[..., Customer]:
    def _add(customer_id: str, name: str = "", customer_type: str = "CUSTOMER") -> Customer:
        return store.create_customer(
            new_customer(customer_id, name or customer_id.title(), None, customer_type)
        )

    return _add
