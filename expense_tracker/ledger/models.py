"""Mini README: Transaction records and the coercion rules applied to them.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - dataclass storing a single ledger entry.
    * generate_transaction_id - opaque, time-ordered identifier factory.
    * round_amount / parse_entry_date - scalar coercion helpers.

Records reach the ledger from three places: the input form, the edit
controls, and imported JSON files. All of them pass through
``Transaction.from_record`` or ``Transaction.with_changes`` so the same
invariants hold whichever path created the entry: a positive amount rounded
to two decimals, a non-empty description, and a type that is exactly
``income`` or ``expense``.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping

from .errors import TransactionValidationError

DEFAULT_CATEGORY = "Other"
EDITABLE_FIELDS = frozenset({"type", "description", "category", "amount", "date"})

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_CENT = Decimal("0.01")
_KEEP_WHEN_BLANK = frozenset({"type", "category", "date"})


class TransactionType(str, Enum):
    """Enumerate the supported transaction types."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary input into a type, falling back to expense."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.INCOME.value:
            return cls.INCOME
        return cls.EXPENSE


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_transaction_id() -> str:
    """Return a millisecond timestamp in base 36 followed by five random characters."""

    timestamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=5))
    return f"{timestamp}{suffix}"


def round_amount(value: object) -> float:
    """Round an amount half-up to two decimals, rejecting non-positive values."""

    if isinstance(value, bool) or value is None:
        raise TransactionValidationError(f"Amount must be a number, got {value!r}")
    try:
        raw = Decimal(value.strip()) if isinstance(value, str) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as error:
        raise TransactionValidationError(f"Amount must be a number, got {value!r}") from error
    if not raw.is_finite():
        raise TransactionValidationError(f"Amount must be finite, got {value!r}")
    rounded = raw.quantize(_CENT, rounding=ROUND_HALF_UP)
    if rounded <= 0:
        raise TransactionValidationError(f"Amount must be greater than zero, got {value!r}")
    return float(rounded)


def parse_entry_date(value: object) -> date:
    """Parse ISO strings or date objects; missing values default to today."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise TransactionValidationError(f"Dates must use YYYY-MM-DD, got {value!r}") from error
    raise TransactionValidationError("Dates must be provided as ISO strings or date/datetime instances.")


def _clean_description(value: object) -> str:
    description = "" if value is None else str(value).strip()
    if not description:
        raise TransactionValidationError("Description must not be empty.")
    return description


def _clean_category(value: object) -> str:
    category = "" if value is None else str(value).strip()
    return category or DEFAULT_CATEGORY


@dataclass(slots=True)
class Transaction:
    """Represent a single income or expense entry."""

    transaction_id: str
    transaction_type: TransactionType
    description: str
    category: str
    amount: float
    occurred_on: date

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Transaction":
        """Build a transaction from a wire-format mapping, assigning an id if absent."""

        if not isinstance(record, Mapping):
            raise TransactionValidationError(
                f"Transactions must be objects, got {type(record).__name__}"
            )
        raw_id = record.get("id")
        transaction_id = str(raw_id).strip() if raw_id is not None else ""
        return cls(
            transaction_id=transaction_id or generate_transaction_id(),
            transaction_type=TransactionType.from_str(record.get("type")),
            description=_clean_description(record.get("description")),
            category=_clean_category(record.get("category")),
            amount=round_amount(record.get("amount")),
            occurred_on=parse_entry_date(record.get("date")),
        )

    def validated(self) -> "Transaction":
        """Return a fresh copy that has passed the same coercion as wire records."""

        return Transaction.from_record(
            {
                "id": self.transaction_id,
                "type": self.transaction_type,
                "description": self.description,
                "category": self.category,
                "amount": self.amount,
                "date": self.occurred_on,
            }
        )

    def with_changes(self, fields: Mapping[str, Any]) -> "Transaction":
        """Return a copy with the provided wire-format fields replaced."""

        return replace(self, **_coerce_changes(fields))

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction in the persisted JSON shape."""

        return {
            "id": self.transaction_id,
            "type": self.transaction_type.value,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "date": self.occurred_on.isoformat(),
        }


def _coerce_changes(fields: Mapping[str, Any]) -> Dict[str, object]:
    """Validate and coerce the field changes of an edit."""

    coerced: Dict[str, object] = {}
    for key, value in fields.items():
        if key == "id":
            raise TransactionValidationError("Transaction ids cannot be changed.")
        if key not in EDITABLE_FIELDS:
            raise TransactionValidationError(f"Field '{key}' is not editable.")
        if value is None or (key in _KEEP_WHEN_BLANK and isinstance(value, str) and not value.strip()):
            continue
        if key == "type":
            coerced["transaction_type"] = TransactionType.from_str(value)
        elif key == "description":
            coerced["description"] = _clean_description(value)
        elif key == "category":
            coerced["category"] = _clean_category(value)
        elif key == "amount":
            coerced["amount"] = round_amount(value)
        elif key == "date":
            coerced["occurred_on"] = parse_entry_date(value)
    return coerced

