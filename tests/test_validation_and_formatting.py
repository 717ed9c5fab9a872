"""Mini README: Tests for the input-form checks and currency formatting."""

from __future__ import annotations

import pytest

from expense_tracker.ledger import (
    EntryValidationError,
    Transaction,
    format_currency,
    format_signed_amount,
    validate_entry_form,
)
from expense_tracker.ledger.validation import AMOUNT_INVALID, DESCRIPTION_REQUIRED


def test_validate_entry_form_returns_record() -> None:
    record = validate_entry_form("Income", "  Salary ", " Work ", "2500.50", "2024-05-01")

    assert record == {
        "type": "income",
        "description": "Salary",
        "category": "Work",
        "amount": 2500.5,
        "date": "2024-05-01",
    }


def test_validate_entry_form_leaves_blank_date_for_default() -> None:
    assert validate_entry_form("expense", "Tea", "Food", 2, "")["date"] is None


@pytest.mark.parametrize("description", ["", "   ", None])
def test_validate_entry_form_requires_description(description) -> None:
    with pytest.raises(EntryValidationError, match=DESCRIPTION_REQUIRED):
        validate_entry_form("expense", description, "Food", "10")


@pytest.mark.parametrize("amount", ["", "abc", "0", "-1", None, "nan"])
def test_validate_entry_form_requires_positive_amount(amount) -> None:
    with pytest.raises(EntryValidationError) as excinfo:
        validate_entry_form("expense", "Tea", "Food", amount)
    assert str(excinfo.value) == AMOUNT_INVALID


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (0, "₹0.00"),
        (None, "₹0.00"),
        (999.5, "₹999.50"),
        (1000, "₹1,000.00"),
        (123456.78, "₹1,23,456.78"),
        (12345678.9, "₹1,23,45,678.90"),
        (-600, "-₹600.00"),
    ],
)
def test_format_currency_uses_indian_grouping(amount, expected: str) -> None:
    assert format_currency(amount) == expected


def test_format_currency_accepts_custom_symbol() -> None:
    assert format_currency(1500.256, symbol="$") == "$1,500.26"


def test_format_signed_amount_prefixes_by_type() -> None:
    income = Transaction.from_record({"type": "income", "description": "Pay", "amount": 1000})
    expense = Transaction.from_record({"type": "expense", "description": "Rent", "amount": 400})

    assert format_signed_amount(income) == "+₹1,000.00"
    assert format_signed_amount(expense) == "-₹400.00"
