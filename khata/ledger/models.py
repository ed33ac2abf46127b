"""Mini README: Records and input coercion for the khata ledger.

Structure:
    * TransactionType / CustomerType / ReminderType / ReminderStatus - enums
      mirroring the stored string values.
    * Customer, Transaction, Reminder - dataclasses handed out by the store.
    * new_customer / new_transaction / new_reminder - build validated records
      from loosely typed caller input (JSON bodies, CLI arguments).

Amounts are ``Decimal`` throughout. Dates are ``datetime.date`` in memory and
ISO ``YYYY-MM-DD`` strings on the wire and in the database. ``as_dict``
exports the camelCase field names the HTTP clients expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Optional, Type, TypeVar

from ..errors import ValidationError

_EnumT = TypeVar("_EnumT", bound="_LedgerEnum")

# Amounts are stored with two decimal places.
CENT = Decimal("0.01")
# Numeric(12, 2) columns hold at most ten integer digits.
MAX_AMOUNT = Decimal(10) ** 10


class _LedgerEnum(str, Enum):
    """String enum that accepts arbitrary casing from callers."""

    @classmethod
    def from_str(cls: Type[_EnumT], value: object) -> _EnumT:
        """Coerce ``value`` into a member, raising ``ValidationError`` otherwise."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().upper()
            return cls(normalised)
        except ValueError as error:
            raise ValidationError(f"Unsupported {cls.__name__}: {value!r}") from error


class TransactionType(_LedgerEnum):
    """Enumerate the ledger's transaction kinds."""

    GIVE_CREDIT = "GIVE_CREDIT"
    TAKE_CREDIT = "TAKE_CREDIT"
    EXPENSE = "EXPENSE"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    PAYMENT_MADE = "PAYMENT_MADE"


class CustomerType(_LedgerEnum):
    """Informational classification of a counterparty."""

    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"


class ReminderType(_LedgerEnum):
    COLLECTION = "COLLECTION"
    PAYMENT = "PAYMENT"
    PERSONAL = "PERSONAL"


class ReminderStatus(_LedgerEnum):
    UPCOMING = "UPCOMING"
    OVERDUE = "OVERDUE"
    COMPLETED = "COMPLETED"


@dataclass(slots=True)
class Customer:
    """A counterparty with a running balance.

    A positive balance means the counterparty owes the ledger owner; a
    negative balance means the owner owes them.
    """

    customer_id: str
    name: str
    phone: Optional[str] = None
    balance: Decimal = Decimal("0")
    customer_type: CustomerType = CustomerType.CUSTOMER
    last_transaction_date: Optional[date] = None

    def as_dict(self) -> Dict[str, object]:
        """Export the customer with serialisable values."""

        return {
            "id": self.customer_id,
            "name": self.name,
            "phone": self.phone,
            "balance": float(self.balance),
            "type": self.customer_type.value,
            "lastTransactionDate": (
                self.last_transaction_date.isoformat() if self.last_transaction_date else None
            ),
        }


@dataclass(frozen=True, slots=True)
class Transaction:
    """An immutable ledger entry."""

    transaction_id: str
    transaction_type: TransactionType
    amount: Decimal
    occurred_on: date
    note: Optional[str] = None
    customer_id: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.transaction_id,
            "type": self.transaction_type.value,
            "amount": float(self.amount),
            "date": self.occurred_on.isoformat(),
            "note": self.note,
            "customerId": self.customer_id,
        }


@dataclass(slots=True)
class Reminder:
    """A dated reminder, optionally linked to a customer."""

    reminder_id: str
    title: str
    due_on: date
    reminder_type: ReminderType
    status: ReminderStatus = ReminderStatus.UPCOMING
    amount: Optional[Decimal] = None
    customer_id: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.reminder_id,
            "title": self.title,
            "date": self.due_on.isoformat(),
            "amount": float(self.amount) if self.amount is not None else None,
            "type": self.reminder_type.value,
            "status": self.status.value,
            "customerId": self.customer_id,
        }


def parse_date(value: object, *, field: str = "date") -> date:
    """Parse ISO formatted strings or date objects safely."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            # Clients sometimes send full ISO timestamps; only the calendar day matters.
            return datetime.fromisoformat(text).date()
        except ValueError as error:
            raise ValidationError(f"{field} must be an ISO date, got {value!r}") from error
    raise ValidationError(f"{field} is required and must be an ISO date")


def parse_amount(value: object, *, field: str = "amount") -> Decimal:
    """Coerce ``value`` into a finite, non-negative ``Decimal``."""

    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required and must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValidationError(f"{field} must be a number, got {value!r}") from error
    if not amount.is_finite():
        raise ValidationError(f"{field} must be finite")
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    if amount >= MAX_AMOUNT:
        raise ValidationError(f"{field} must be below {MAX_AMOUNT:,}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as error:
        raise ValidationError(f"{field} cannot be rounded to cents, got {value!r}") from error


def _require_text(value: object, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def _optional_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def new_customer(
    customer_id: object,
    name: object,
    phone: object = None,
    customer_type: object = CustomerType.CUSTOMER,
) -> Customer:
    """Build a fresh customer with a zero balance."""

    return Customer(
        customer_id=_require_text(customer_id, "id"),
        name=_require_text(name, "name"),
        phone=_optional_text(phone),
        customer_type=CustomerType.from_str(customer_type or CustomerType.CUSTOMER),
    )


def new_transaction(
    transaction_id: object,
    transaction_type: object,
    amount: object,
    occurred_on: object,
    note: object = None,
    customer_id: object = None,
) -> Transaction:
    """Validate caller input and return the transaction to be recorded."""

    if transaction_type is None:
        raise ValidationError("type is required")
    return Transaction(
        transaction_id=_require_text(transaction_id, "id"),
        transaction_type=TransactionType.from_str(transaction_type),
        amount=parse_amount(amount),
        occurred_on=parse_date(occurred_on),
        note=_optional_text(note),
        customer_id=_optional_text(customer_id),
    )


def new_reminder(
    reminder_id: object,
    title: object,
    due_on: object,
    reminder_type: object,
    amount: object = None,
    customer_id: object = None,
) -> Reminder:
    """Validate caller input and return an upcoming reminder."""

    if reminder_type is None:
        raise ValidationError("type is required")
    return Reminder(
        reminder_id=_require_text(reminder_id, "id"),
        title=_require_text(title, "title"),
        due_on=parse_date(due_on),
        reminder_type=ReminderType.from_str(reminder_type),
        amount=parse_amount(amount) if amount is not None else None,
        customer_id=_optional_text(customer_id),
    )
