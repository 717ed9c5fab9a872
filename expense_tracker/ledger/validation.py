"""Mini README: Input-form checks performed before entries reach the ledger.

``validate_entry_form`` mirrors what the dashboard form enforces: a
description and a positive amount. It returns a record mapping that
``LedgerStore.add`` accepts, or raises ``EntryValidationError`` with the
message shown to the user.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Dict, Optional, Union

from .errors import EntryValidationError
from .models import TransactionType

DESCRIPTION_REQUIRED = "Please enter description"
AMOUNT_INVALID = "Please enter a valid amount > 0"


def _parse_amount(amount: Union[str, float, int, None]) -> float:
    if amount is None or isinstance(amount, bool):
        raise EntryValidationError(AMOUNT_INVALID)
    try:
        parsed = float(amount.strip()) if isinstance(amount, str) else float(amount)
    except (TypeError, ValueError) as error:
        raise EntryValidationError(AMOUNT_INVALID) from error
    if not math.isfinite(parsed) or parsed <= 0:
        raise EntryValidationError(AMOUNT_INVALID)
    return parsed


def validate_entry_form(
    transaction_type: Union[str, TransactionType],
    description: Optional[str],
    category: Optional[str],
    amount: Union[str, float, int, None],
    entry_date: Union[str, date, None] = None,
) -> Dict[str, object]:
    """Check the form fields and return the record to add."""

    cleaned_description = (description or "").strip()
    if not cleaned_description:
        raise EntryValidationError(DESCRIPTION_REQUIRED)
    return {
        "type": TransactionType.from_str(transaction_type).value,
        "description": cleaned_description,
        "category": (category or "").strip(),
        "amount": _parse_amount(amount),
        "date": entry_date or None,
    }
