"""Mini README: Error taxonomy shared by the ledger core and its callers.

Structure:
    * LedgerError - base class for every failure raised by the core.
    * ValidationError - malformed or missing input.
    * NotFound - a referenced customer or reminder does not exist.
    * DuplicateTransaction / DuplicateCustomer - an identifier was reused.
    * StorageError - the durable write or read could not complete.

The request layer maps these onto HTTP status codes; nothing in the core
knows about HTTP.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError, ValueError):
    """Raised when caller input is missing or malformed."""


class NotFound(LedgerError, LookupError):
    """Raised when a referenced record does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class DuplicateRecord(LedgerError):
    """Raised when a caller-assigned identifier is already taken."""

    kind = "Record"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"{self.kind} {identifier} already exists")
        self.identifier = identifier


class DuplicateTransaction(DuplicateRecord):
    kind = "Transaction"


class DuplicateCustomer(DuplicateRecord):
    kind = "Customer"


class DuplicateReminder(DuplicateRecord):
    kind = "Reminder"


class StorageError(LedgerError):
    """Raised when the ledger store cannot complete an operation."""
