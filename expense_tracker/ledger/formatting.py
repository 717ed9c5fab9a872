"""Mini README: Currency formatting for list rows, summary cards and the CLI.

Amounts are shown with two decimals and Indian digit grouping, where the
last three integer digits form one group and earlier digits are grouped in
pairs (``1,23,45,678.90``).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .models import Transaction, TransactionType

DEFAULT_SYMBOL = "₹"


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: float | int | Decimal | None, symbol: str = DEFAULT_SYMBOL) -> str:
    """Render ``amount`` like ``₹1,23,456.78``; ``None`` renders as zero."""

    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer_part, fraction = f"{abs(value):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(integer_part)}.{fraction}"


def format_signed_amount(transaction: Transaction, symbol: str = DEFAULT_SYMBOL) -> str:
    """Prefix income with ``+`` and expenses with ``-`` as the list view shows them."""

    prefix = "+" if transaction.transaction_type is TransactionType.INCOME else "-"
    return prefix + format_currency(transaction.amount, symbol)
