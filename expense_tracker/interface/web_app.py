"""Mini README: FastAPI-powered dashboard for the expense tracker.

Structure:
    * create_application - application factory wiring routes and templates.
    * _transaction_payload / _summary_payload - JSON shapes used by the page.

The dashboard renders the entry form, filters, transaction list, summary
cards and expense chart. Every mutation goes through the ``LedgerStore``,
which persists immediately, and the page script re-fetches list, summary and
chart data afterwards so the view always reflects the stored ledger.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import get_settings
from ..ledger import (
    EXPORT_FILENAME,
    ImportFormatError,
    JsonFileSlotStorage,
    LedgerStore,
    Transaction,
    TransactionValidationError,
    format_currency,
    format_signed_amount,
    validate_entry_form,
)
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CHART_COLOURS = [
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#eab308",
    "#84cc16",
    "#10b981",
    "#06b6d4",
    "#60a5fa",
]


def _transaction_payload(transaction: Transaction, symbol: str) -> Dict[str, object]:
    payload = transaction.as_dict()
    payload["formatted_amount"] = format_signed_amount(transaction, symbol)
    return payload


def _summary_payload(store: LedgerStore, symbol: str) -> Dict[str, object]:
    summary = store.summarize()
    return {
        **summary.as_dict(),
        "formatted": {
            "total_income": format_currency(summary.total_income, symbol),
            "total_expense": format_currency(summary.total_expense, symbol),
            "net": format_currency(summary.net, symbol),
        },
    }


def _chart_payload(store: LedgerStore) -> Dict[str, List[object]]:
    breakdown = store.category_breakdown()
    labels = list(breakdown)
    return {
        "labels": labels,
        "data": [breakdown[label] for label in labels],
        "colours": [CHART_COLOURS[index % len(CHART_COLOURS)] for index in range(len(labels))],
    }


def create_application(store: Optional[LedgerStore] = None) -> FastAPI:
    """Create the FastAPI application around ``store`` (loaded from settings when omitted)."""

    settings = get_settings()
    if store is None:
        store = LedgerStore.load(
            JsonFileSlotStorage(settings.storage_path), storage_key=settings.storage_key
        )
    symbol = settings.currency_symbol

    app = FastAPI(title="Expense Tracker", version="1.0.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    app.state.store = store

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request) -> HTMLResponse:
        """Render the dashboard with the current ledger."""

        LOGGER.debug("Rendering dashboard with %s transactions", len(store))
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "transactions": [_transaction_payload(t, symbol) for t in store.transactions],
                "categories": store.categories(),
                "summary": _summary_payload(store, symbol),
                "chart": _chart_payload(store),
            },
        )

    @app.get("/transactions")
    async def list_transactions(
        search: str = "",
        category: str = "all",
        type: str = "all",
    ) -> JSONResponse:
        """Return transactions matching the list view filters."""

        filtered = store.filter(search=search, category=category, transaction_type=type)
        return JSONResponse(
            {"transactions": [_transaction_payload(t, symbol) for t in filtered]}
        )

    @app.post("/transactions")
    async def add_transaction(
        type: str = Form("expense"),
        description: str = Form(""),
        category: str = Form(""),
        amount: str = Form(""),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Validate the entry form and record a new transaction."""

        try:
            record = validate_entry_form(type, description, category, amount, date)
            transaction = store.add(record)
        except TransactionValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse(
            {"transaction": _transaction_payload(transaction, symbol)}, status_code=201
        )

    @app.post("/transactions/{transaction_id}")
    async def update_transaction(
        transaction_id: str,
        type: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
        category: Optional[str] = Form(None),
        amount: Optional[str] = Form(None),
        date: Optional[str] = Form(None),
    ) -> JSONResponse:
        """Apply edits to a transaction; omitted fields keep their values."""

        fields = {
            "type": type,
            "description": description,
            "category": category,
            "amount": amount,
            "date": date,
        }
        try:
            updated = store.update(transaction_id, {k: v for k, v in fields.items() if v is not None})
        except TransactionValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        if updated is None:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse({"transaction": _transaction_payload(updated, symbol)})

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Remove a single transaction."""

        if not store.remove(transaction_id):
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse({"deleted": transaction_id})

    @app.post("/clear")
    async def clear_transactions() -> JSONResponse:
        """Delete every transaction."""

        store.clear()
        return JSONResponse({"cleared": True})

    @app.get("/summary")
    async def summary() -> JSONResponse:
        """Return income, expense and net totals."""

        return JSONResponse(_summary_payload(store, symbol))

    @app.get("/chart-data")
    async def chart_data() -> JSONResponse:
        """Return the expense-by-category series for the pie chart."""

        return JSONResponse(_chart_payload(store))

    @app.get("/categories")
    async def categories() -> JSONResponse:
        """Return category filter options."""

        return JSONResponse({"categories": store.categories()})

    @app.get("/export")
    async def export_transactions() -> Response:
        """Download the ledger as ``transactions.json``."""

        LOGGER.info("Exporting %s transactions for download", len(store))
        return Response(
            content=store.export_json(),
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
        )

    @app.post("/import")
    async def import_transactions(file: UploadFile = File(...)) -> JSONResponse:
        """Merge an uploaded JSON export into the ledger."""

        data = await file.read()
        LOGGER.info("Received import upload %s (%s bytes)", file.filename, len(data))
        try:
            imported = store.import_json(data)
        except ImportFormatError as error:
            raise HTTPException(status_code=400, detail=f"Import failed: {error}") from error
        return JSONResponse({"imported": len(imported), "total": len(store)})

    return app
