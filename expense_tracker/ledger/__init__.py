"""Mini README: Ledger domain package for the expense tracker.

Groups the transaction model, the persisted ``LedgerStore``, its storage
slots, form validation, and currency formatting. Interfaces import from
here rather than from the individual modules.
"""

from .errors import (
    EntryValidationError,
    ImportFormatError,
    LedgerError,
    TransactionValidationError,
)
from .formatting import format_currency, format_signed_amount
from .models import Transaction, TransactionType, generate_transaction_id
from .storage import JsonFileSlotStorage, MemorySlotStorage, SlotStorage
from .store import EXPORT_FILENAME, LedgerStore, LedgerSummary
from .validation import validate_entry_form

__all__ = [
    "EXPORT_FILENAME",
    "EntryValidationError",
    "ImportFormatError",
    "JsonFileSlotStorage",
    "LedgerError",
    "LedgerStore",
    "LedgerSummary",
    "MemorySlotStorage",
    "SlotStorage",
    "Transaction",
    "TransactionType",
    "TransactionValidationError",
    "format_currency",
    "format_signed_amount",
    "generate_transaction_id",
    "validate_entry_form",
]
