"""Mini README: Entry point CLI for the expense tracker.

This script exposes a Typer CLI that starts the FastAPI dashboard and offers
terminal equivalents of its actions: adding entries, listing and filtering
them, printing totals, and exporting, importing or clearing the ledger. All
commands operate on the ledger file configured through ``EXPENSE_TRACKER_*``
environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from expense_tracker.configuration import get_settings
from expense_tracker.ledger import (
    JsonFileSlotStorage,
    LedgerError,
    LedgerStore,
    format_currency,
    format_signed_amount,
    validate_entry_form,
)
from expense_tracker.logging_utils import configure_root_logger

cli = typer.Typer(help="Record income and expenses and launch the expense tracker dashboard.")


def _open_store() -> LedgerStore:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return LedgerStore.load(JsonFileSlotStorage(settings.storage_path), storage_key=settings.storage_key)


def _fail(error: object) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Expense Tracker on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "expense_tracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(
    description: str = typer.Argument(..., help="What the entry is for."),
    amount: str = typer.Argument(..., help="Positive amount, rounded to two decimals."),
    category: str = typer.Option("", help="Grouping label used by filters and the chart."),
    entry_type: str = typer.Option("expense", "--type", help="income or expense."),
    entry_date: Optional[str] = typer.Option(None, "--date", help="YYYY-MM-DD, defaults to today."),
) -> None:
    """Record a new transaction."""

    store = _open_store()
    try:
        record = validate_entry_form(entry_type, description, category, amount, entry_date)
        transaction = store.add(record)
    except LedgerError as error:
        _fail(error)
    signed = format_signed_amount(transaction, get_settings().currency_symbol)
    typer.echo(f"Added {transaction.transaction_id}: {transaction.description} {signed}")


@cli.command("list")
def list_transactions(
    search: str = typer.Option("", help="Case-insensitive description search."),
    category: str = typer.Option("all", help="Exact category or 'all'."),
    entry_type: str = typer.Option("all", "--type", help="income, expense or 'all'."),
) -> None:
    """Print transactions matching the filters."""

    store = _open_store()
    symbol = get_settings().currency_symbol
    filtered = store.filter(search=search, category=category, transaction_type=entry_type)
    if not filtered:
        typer.echo("No transactions found.")
        return
    for transaction in filtered:
        typer.echo(
            f"{transaction.transaction_id}  {transaction.occurred_on.isoformat()}  "
            f"{transaction.transaction_type.value:<7}  {transaction.category:<12}  "
            f"{transaction.description}  {format_signed_amount(transaction, symbol)}"
        )


@cli.command()
def summary() -> None:
    """Print income, expense and net totals plus the expense breakdown."""

    store = _open_store()
    symbol = get_settings().currency_symbol
    totals = store.summarize()
    typer.echo(f"Income:  {format_currency(totals.total_income, symbol)}")
    typer.echo(f"Expense: {format_currency(totals.total_expense, symbol)}")
    typer.echo(f"Net:     {format_currency(totals.net, symbol)}")
    for category, total in store.category_breakdown().items():
        typer.echo(f"  {category}: {format_currency(total, symbol)}")


@cli.command()
def export(
    destination: Path = typer.Argument(Path("."), help="Directory or file to write the export to."),
) -> None:
    """Write the ledger to a pretty-printed JSON file."""

    store = _open_store()
    try:
        written = store.export_to_file(destination)
    except OSError as error:
        _fail(error)
    typer.echo(f"Exported {len(store)} transactions to {written}")


@cli.command("import")
def import_file(
    source: Path = typer.Argument(..., help="JSON export to merge into the ledger."),
) -> None:
    """Merge transactions from a JSON export."""

    store = _open_store()
    try:
        imported = store.import_from_file(source)
    except LedgerError as error:
        _fail(f"Import failed: {error}")
    typer.echo(f"Imported {len(imported)} transactions; ledger now holds {len(store)}.")


@cli.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete every transaction."""

    store = _open_store()
    if not yes and not typer.confirm("Delete ALL transactions? This cannot be undone."):
        typer.echo("Aborted.")
        raise typer.Exit(code=1)
    store.clear()
    typer.echo("Ledger cleared.")


if __name__ == "__main__":
    cli()
