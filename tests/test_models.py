"""Mini README: Tests for transaction coercion helpers.

These confirm that form, edit and import records share one set of rules:
type coercion, half-up rounding, default dates and categories, and stable
wire-format field names.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from expense_tracker.ledger import (
    Transaction,
    TransactionType,
    TransactionValidationError,
    generate_transaction_id,
)
from expense_tracker.ledger.models import DEFAULT_CATEGORY, round_amount


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("income", TransactionType.INCOME),
        (" INCOME ", TransactionType.INCOME),
        ("expense", TransactionType.EXPENSE),
        ("refund", TransactionType.EXPENSE),
        (None, TransactionType.EXPENSE),
        (TransactionType.INCOME, TransactionType.INCOME),
    ],
)
def test_transaction_type_coercion(raw: object, expected: TransactionType) -> None:
    assert TransactionType.from_str(raw) is expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(50000.005, 50000.01), ("12.345", 12.35), (7, 7.0), (" 0.005 ", 0.01)],
)
def test_round_amount_half_up(raw: object, expected: float) -> None:
    assert round_amount(raw) == expected


@pytest.mark.parametrize("raw", [0, -5, 0.004, "abc", "", None, True, float("nan"), float("inf")])
def test_round_amount_rejects_non_positive_or_non_numeric(raw: object) -> None:
    with pytest.raises(TransactionValidationError):
        round_amount(raw)


def test_from_record_applies_defaults() -> None:
    transaction = Transaction.from_record({"description": "  Lunch ", "amount": "9.5"})

    assert transaction.transaction_id
    assert transaction.description == "Lunch"
    assert transaction.category == DEFAULT_CATEGORY
    assert transaction.transaction_type is TransactionType.EXPENSE
    assert transaction.occurred_on == date.today()


def test_from_record_accepts_datetime_and_keeps_id() -> None:
    transaction = Transaction.from_record(
        {
            "id": "abc123",
            "type": "income",
            "description": "Bonus",
            "category": "Work",
            "amount": 100,
            "date": datetime(2024, 4, 1, 9, 30),
        }
    )

    assert transaction.as_dict() == {
        "id": "abc123",
        "type": "income",
        "description": "Bonus",
        "category": "Work",
        "amount": 100.0,
        "date": "2024-04-01",
    }


@pytest.mark.parametrize(
    "record",
    [
        {"description": "", "amount": 1},
        {"description": "   ", "amount": 1},
        {"amount": 1},
        {"description": "Bad date", "amount": 1, "date": "01/02/2024"},
        ["not", "a", "mapping"],
    ],
)
def test_from_record_rejects_invalid_records(record: object) -> None:
    with pytest.raises(TransactionValidationError):
        Transaction.from_record(record)  # type: ignore[arg-type]


def test_with_changes_keeps_values_for_blank_optional_fields() -> None:
    original = Transaction.from_record(
        {"description": "Taxi", "category": "Travel", "amount": 12, "date": "2024-01-01"}
    )

    changed = original.with_changes({"category": " ", "date": "", "type": "", "description": "Cab"})

    assert changed.description == "Cab"
    assert changed.category == "Travel"
    assert changed.occurred_on == date(2024, 1, 1)
    assert changed.transaction_type is TransactionType.EXPENSE
    assert original.description == "Taxi"


def test_with_changes_rejects_unknown_fields() -> None:
    original = Transaction.from_record({"description": "Taxi", "amount": 12})

    with pytest.raises(TransactionValidationError):
        original.with_changes({"notes": "late night"})
    with pytest.raises(TransactionValidationError):
        original.with_changes({"description": ""})


def test_generated_ids_are_unique() -> None:
    identifiers = {generate_transaction_id() for _ in range(200)}

    assert len(identifiers) == 200
    assert all(identifier.isalnum() and identifier.islower() for identifier in identifiers)


def test_validated_returns_coerced_copy() -> None:
    raw = Transaction("abc", TransactionType.INCOME, "  Pay ", " ", 99.999, date(2024, 6, 1))

    copy = raw.validated()

    assert copy is not raw
    assert copy.transaction_id == "abc"
    assert copy.description == "Pay"
    assert copy.category == DEFAULT_CATEGORY
    assert copy.amount == 100.0
    assert raw.description == "  Pay "
