"""Mini README: FastAPI request layer for the khata ledger.

Structure:
    * CustomerPayload / TransactionPayload / ReminderPayload - JSON bodies.
    * create_application - application factory wiring the store, the balance
      engine and the routes.

The layer is deliberately thin: it parses requests, calls the ledger core
and translates ledger errors into HTTP status codes. The store is opened in
the application lifespan and closed on shutdown when the factory created it.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..configuration import KhataSettings, get_settings
from ..errors import DuplicateRecord, LedgerError, NotFound, StorageError, ValidationError
from ..ledger import (
    BalanceEngine,
    LedgerStore,
    ledger_summary,
    new_customer,
    new_reminder,
    pending_reminders,
    with_current_status,
)
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class CustomerPayload(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    type: Optional[str] = None


class TransactionPayload(BaseModel):
    id: str
    type: Optional[str] = None
    amount: Any = None
    date: Optional[str] = None
    note: Optional[str] = None
    customerId: Optional[str] = None


class ReminderPayload(BaseModel):
    id: str
    title: Optional[str] = None
    date: Optional[str] = None
    amount: Any = None
    type: Optional[str] = None
    customerId: Optional[str] = None


def _http_error(error: LedgerError) -> HTTPException:
    """Translate a ledger error into the matching HTTP response."""

    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, NotFound):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, DuplicateRecord):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, StorageError):
        return HTTPException(status_code=500, detail="The ledger could not be updated.")
    return HTTPException(status_code=500, detail=str(error))


def create_application(
    store: Optional[LedgerStore] = None, settings: Optional[KhataSettings] = None
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    owns_store = store is None
    ledger_store = store or LedgerStore(settings.database_url)
    engine = BalanceEngine(ledger_store)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        ledger_store.open()
        try:
            yield
        finally:
            if owns_store:
                ledger_store.close()

    app = FastAPI(title="Khata Ledger", version="0.1.0", lifespan=lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        LOGGER.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    @app.get("/api/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok", "env": settings.environment})

    @app.get("/api/customers")
    def list_customers(search: Optional[str] = Query(None)) -> JSONResponse:
        """Return customers ordered by name."""

        try:
            customers = ledger_store.list_customers(search=search)
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse([customer.as_dict() for customer in customers])

    @app.post("/api/customers")
    def create_customer(payload: CustomerPayload) -> JSONResponse:
        """Create a customer with a zero opening balance."""

        try:
            customer = ledger_store.create_customer(
                new_customer(payload.id, payload.name, payload.phone, payload.type)
            )
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse(customer.as_dict(), status_code=201)

    @app.get("/api/transactions")
    def list_transactions(
        limit: Optional[int] = Query(None, ge=1, le=1000),
        customer_id: Optional[str] = Query(None, alias="customerId"),
    ) -> JSONResponse:
        """Return the most recent transactions, newest first."""

        try:
            transactions = ledger_store.list_transactions(
                limit=limit or settings.recent_transactions_limit,
                customer_id=customer_id,
            )
        except LedgerError as error:
            raise _http_error(error) from error
        LOGGER.debug("Returning %s transactions", len(transactions))
        return JSONResponse([transaction.as_dict() for transaction in transactions])

    @app.post("/api/transactions")
    def create_transaction(payload: TransactionPayload) -> JSONResponse:
        """Record a transaction and move the linked customer's balance."""

        try:
            transaction = engine.record(
                payload.id,
                payload.type,
                payload.amount,
                payload.date,
                note=payload.note,
                customer_id=payload.customerId,
            )
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse(
            {"success": True, "transaction": transaction.as_dict()}, status_code=201
        )

    @app.get("/api/reminders")
    def list_reminders() -> JSONResponse:
        """Return reminders by due date with overdue status derived for now."""

        now = datetime.now()
        try:
            reminders = [with_current_status(reminder, now) for reminder in ledger_store.list_reminders()]
        except LedgerError as error:
            raise _http_error(error) from error
        LOGGER.debug(
            "Returning %s reminders (%s pending)", len(reminders), len(pending_reminders(reminders))
        )
        return JSONResponse([reminder.as_dict() for reminder in reminders])

    @app.post("/api/reminders")
    def create_reminder(payload: ReminderPayload) -> JSONResponse:
        try:
            reminder = ledger_store.create_reminder(
                new_reminder(
                    payload.id,
                    payload.title,
                    payload.date,
                    payload.type,
                    amount=payload.amount,
                    customer_id=payload.customerId,
                )
            )
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse({"success": True, "reminder": reminder.as_dict()}, status_code=201)

    @app.post("/api/reminders/{reminder_id}/complete")
    def complete_reminder(reminder_id: str) -> JSONResponse:
        try:
            reminder = ledger_store.complete_reminder(reminder_id)
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse(reminder.as_dict())

    @app.get("/api/summary")
    def summary() -> JSONResponse:
        """Return today's expense, total receivable and total payable."""

        try:
            figures = ledger_summary(ledger_store)
        except LedgerError as error:
            raise _http_error(error) from error
        return JSONResponse(figures.as_dict())

    return app
