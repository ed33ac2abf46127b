"""Mini README: SQLAlchemy-backed persistence boundary for the ledger.

Structure:
    * customers / transactions / reminders - SQLAlchemy Core table definitions.
    * create_ledger_engine - SQLite engine factory with foreign keys enabled.
    * LedgerStore - explicitly opened store handle owning all persisted state.

The store is constructed with a database URL, opened once per process (or
per test) and closed on shutdown. Write paths run inside ``transaction()``,
which holds a process-wide writer lock and a single database transaction so
a caller either commits every statement or none. Read helpers open short
lived connections and never cache results between calls.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator, List, Optional

import sqlalchemy as sa
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ..errors import DuplicateCustomer, DuplicateReminder, NotFound, StorageError
from ..logging_utils import get_logger
from .models import (
    Customer,
    CustomerType,
    Reminder,
    ReminderStatus,
    ReminderType,
    Transaction,
    TransactionType,
)

LOGGER = get_logger(__name__)

ZERO = Decimal("0")

metadata = sa.MetaData()

customers = sa.Table(
    "customers",
    metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("name", sa.String, nullable=False),
    sa.Column("phone", sa.String, nullable=True),
    sa.Column("balance", sa.Numeric(12, 2), nullable=False, default=ZERO, server_default="0"),
    sa.Column("type", sa.String, nullable=False, default=CustomerType.CUSTOMER.value),
    sa.Column("lastTransactionDate", sa.String, nullable=True),
)

transactions = sa.Table(
    "transactions",
    metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("type", sa.String, nullable=False),
    sa.Column("amount", sa.Numeric(12, 2), nullable=False),
    sa.Column("date", sa.String, nullable=False, index=True),
    sa.Column("note", sa.String, nullable=True),
    sa.Column("customerId", sa.String, sa.ForeignKey("customers.id"), nullable=True, index=True),
)

reminders = sa.Table(
    "reminders",
    metadata,
    sa.Column("id", sa.String, primary_key=True),
    sa.Column("title", sa.String, nullable=False),
    sa.Column("date", sa.String, nullable=False),
    sa.Column("amount", sa.Numeric(12, 2), nullable=True),
    sa.Column("type", sa.String, nullable=False),
    sa.Column("status", sa.String, nullable=False, default=ReminderStatus.UPCOMING.value),
    sa.Column("customerId", sa.String, sa.ForeignKey("customers.id"), nullable=True),
)


def create_ledger_engine(database_url: str) -> Engine:
    """Create an engine, enabling foreign keys and thread sharing for SQLite.

    Only SQLite URLs are accepted: recent-transaction ordering relies on the
    SQLite ``rowid`` to break ties between same-day entries.
    """

    if not database_url.startswith("sqlite"):
        raise StorageError(f"Unsupported ledger database URL {database_url!r}; expected sqlite")

    options = {"connect_args": {"check_same_thread": False}}
    if database_url in {"sqlite://", "sqlite:///:memory:"}:
        # In-memory databases live and die with a single connection.
        options["poolclass"] = StaticPool
    engine = sa.create_engine(database_url, **options)

    @sa.event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _to_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _customer_from_row(row: sa.Row) -> Customer:
    mapping = row._mapping
    return Customer(
        customer_id=mapping["id"],
        name=mapping["name"],
        phone=mapping["phone"],
        balance=mapping["balance"] if mapping["balance"] is not None else ZERO,
        customer_type=CustomerType.from_str(mapping["type"]),
        last_transaction_date=_to_date(mapping["lastTransactionDate"]),
    )


def _transaction_from_row(row: sa.Row) -> Transaction:
    mapping = row._mapping
    return Transaction(
        transaction_id=mapping["id"],
        transaction_type=TransactionType.from_str(mapping["type"]),
        amount=mapping["amount"],
        occurred_on=date.fromisoformat(mapping["date"]),
        note=mapping["note"],
        customer_id=mapping["customerId"],
    )


def _reminder_from_row(row: sa.Row) -> Reminder:
    mapping = row._mapping
    return Reminder(
        reminder_id=mapping["id"],
        title=mapping["title"],
        due_on=date.fromisoformat(mapping["date"]),
        reminder_type=ReminderType.from_str(mapping["type"]),
        status=ReminderStatus.from_str(mapping["status"]),
        amount=mapping["amount"],
        customer_id=mapping["customerId"],
    )


class LedgerStore:
    """Own the ledger database and expose the operations the core needs."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self._engine: Optional[Engine] = None
        self._write_lock = threading.RLock()

    def open(self) -> "LedgerStore":
        """Create the engine and schema. Calling twice is harmless."""

        if self._engine is not None:
            return self
        engine = create_ledger_engine(self.database_url)
        try:
            metadata.create_all(engine)
        except SQLAlchemyError as error:
            engine.dispose()
            LOGGER.error("Unable to initialise ledger schema at %s", self.database_url, exc_info=True)
            raise StorageError(f"Unable to open ledger database: {error}") from error
        self._engine = engine
        LOGGER.info("Ledger store opened at %s", self.database_url)
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        LOGGER.info("Ledger store closed")

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def __enter__(self) -> "LedgerStore":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("Ledger store is not open")
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Yield a connection inside one write transaction.

        Writers are serialised by a process-wide lock; the database commits on
        a clean exit and rolls back on any exception.
        """

        engine = self._require_engine()
        with self._write_lock:
            try:
                with engine.begin() as connection:
                    yield connection
            except SQLAlchemyError as error:
                LOGGER.error("Ledger write failed", exc_info=True)
                raise StorageError(f"Ledger write failed: {error}") from error

    @contextmanager
    def _reading(self) -> Iterator[Connection]:
        engine = self._require_engine()
        try:
            with engine.connect() as connection:
                yield connection
        except SQLAlchemyError as error:
            LOGGER.error("Ledger read failed", exc_info=True)
            raise StorageError(f"Ledger read failed: {error}") from error

    def create_customer(self, customer: Customer) -> Customer:
        """Persist a new customer. Balance always starts at zero."""

        with self.transaction() as connection:
            if self.customer_exists(connection, customer.customer_id):
                raise DuplicateCustomer(customer.customer_id)
            connection.execute(
                customers.insert().values(
                    id=customer.customer_id,
                    name=customer.name,
                    phone=customer.phone,
                    balance=ZERO,
                    type=customer.customer_type.value,
                    lastTransactionDate=None,
                )
            )
        LOGGER.info("Created %s %s", customer.customer_type.value.lower(), customer.customer_id)
        return Customer(
            customer_id=customer.customer_id,
            name=customer.name,
            phone=customer.phone,
            customer_type=customer.customer_type,
        )

    @staticmethod
    def customer_exists(connection: Connection, customer_id: str) -> bool:
        query = sa.select(customers.c.id).where(customers.c.id == customer_id)
        return connection.execute(query).first() is not None

    def get_customer(self, customer_id: str) -> Customer:
        with self._reading() as connection:
            row = connection.execute(
                sa.select(customers).where(customers.c.id == customer_id)
            ).first()
        if row is None:
            raise NotFound("Customer", customer_id)
        return _customer_from_row(row)

    def list_customers(self, search: Optional[str] = None) -> List[Customer]:
        """Return customers ordered by name, optionally filtered by name or phone."""

        query = sa.select(customers).order_by(customers.c.name.asc(), customers.c.id.asc())
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.where(
                sa.or_(customers.c.name.ilike(pattern), customers.c.phone.like(pattern))
            )
        with self._reading() as connection:
            rows = connection.execute(query).all()
        LOGGER.debug("Listed %s customers (search=%r)", len(rows), search)
        return [_customer_from_row(row) for row in rows]

    def adjust_balance(
        self, connection: Connection, customer_id: str, delta: Decimal, on_date: date
    ) -> int:
        """Add ``delta`` to a balance in one UPDATE and return the affected row count."""

        result = connection.execute(
            customers.update()
            .where(customers.c.id == customer_id)
            .values(
                balance=customers.c.balance + delta,
                lastTransactionDate=on_date.isoformat(),
            )
        )
        return result.rowcount

    @staticmethod
    def transaction_exists(connection: Connection, transaction_id: str) -> bool:
        query = sa.select(transactions.c.id).where(transactions.c.id == transaction_id)
        return connection.execute(query).first() is not None

    @staticmethod
    def insert_transaction(connection: Connection, transaction: Transaction) -> None:
        connection.execute(
            transactions.insert().values(
                id=transaction.transaction_id,
                type=transaction.transaction_type.value,
                amount=transaction.amount,
                date=transaction.occurred_on.isoformat(),
                note=transaction.note,
                customerId=transaction.customer_id,
            )
        )

    def list_transactions(
        self, limit: int = 50, customer_id: Optional[str] = None
    ) -> List[Transaction]:
        """Return the most recent transactions, newest date first."""

        query = (
            sa.select(transactions)
            # rowid breaks ties between same-day entries by insertion order.
            .order_by(transactions.c.date.desc(), sa.literal_column("transactions.rowid").desc())
            .limit(max(int(limit), 0))
        )
        if customer_id:
            query = query.where(transactions.c.customerId == customer_id)
        with self._reading() as connection:
            rows = connection.execute(query).all()
        return [_transaction_from_row(row) for row in rows]

    def all_transactions(self) -> List[Transaction]:
        """Return the whole log in insertion order."""

        query = sa.select(transactions).order_by(sa.literal_column("transactions.rowid").asc())
        with self._reading() as connection:
            rows = connection.execute(query).all()
        return [_transaction_from_row(row) for row in rows]

    def create_reminder(self, reminder: Reminder) -> Reminder:
        with self.transaction() as connection:
            if connection.execute(
                sa.select(reminders.c.id).where(reminders.c.id == reminder.reminder_id)
            ).first():
                raise DuplicateReminder(reminder.reminder_id)
            if reminder.customer_id and not self.customer_exists(connection, reminder.customer_id):
                raise NotFound("Customer", reminder.customer_id)
            connection.execute(
                reminders.insert().values(
                    id=reminder.reminder_id,
                    title=reminder.title,
                    date=reminder.due_on.isoformat(),
                    amount=reminder.amount,
                    type=reminder.reminder_type.value,
                    status=ReminderStatus.UPCOMING.value,
                    customerId=reminder.customer_id,
                )
            )
        LOGGER.info("Created reminder %s due %s", reminder.reminder_id, reminder.due_on)
        reminder.status = ReminderStatus.UPCOMING
        return reminder

    def get_reminder(self, reminder_id: str) -> Reminder:
        with self._reading() as connection:
            row = connection.execute(
                sa.select(reminders).where(reminders.c.id == reminder_id)
            ).first()
        if row is None:
            raise NotFound("Reminder", reminder_id)
        return _reminder_from_row(row)

    def list_reminders(self) -> List[Reminder]:
        """Return reminders ordered by due date ascending."""

        query = sa.select(reminders).order_by(reminders.c.date.asc(), reminders.c.id.asc())
        with self._reading() as connection:
            rows = connection.execute(query).all()
        return [_reminder_from_row(row) for row in rows]

    def complete_reminder(self, reminder_id: str) -> Reminder:
        with self.transaction() as connection:
            result = connection.execute(
                reminders.update()
                .where(reminders.c.id == reminder_id)
                .values(status=ReminderStatus.COMPLETED.value)
            )
            if result.rowcount == 0:
                raise NotFound("Reminder", reminder_id)
        LOGGER.info("Reminder %s completed", reminder_id)
        return self.get_reminder(reminder_id)

    def _scalar_sum(self, query: sa.Select) -> Decimal:
        with self._reading() as connection:
            value = connection.execute(query).scalar()
        if value is None:
            return ZERO
        return value if isinstance(value, Decimal) else Decimal(str(value))

    def sum_expenses_on(self, day: date) -> Decimal:
        query = sa.select(sa.func.coalesce(sa.func.sum(transactions.c.amount), ZERO)).where(
            transactions.c.type == TransactionType.EXPENSE.value,
            transactions.c.date == day.isoformat(),
        )
        return self._scalar_sum(query)

    def sum_positive_balances(self) -> Decimal:
        query = sa.select(sa.func.coalesce(sa.func.sum(customers.c.balance), ZERO)).where(
            customers.c.balance > 0
        )
        return self._scalar_sum(query)

    def sum_negative_balances(self) -> Decimal:
        """Return the magnitude of all negative balances."""

        query = sa.select(sa.func.coalesce(sa.func.sum(-customers.c.balance), ZERO)).where(
            customers.c.balance < 0
        )
        return self._scalar_sum(query)
