"""Mini README: Core package initializer for the expense tracker.

The package records income and expense entries in a persisted ledger,
summarises totals, and charts expenses by category. Re-exports here give
scripts a short import path to the store without knowing the module layout.
"""

from .ledger import LedgerStore, Transaction, TransactionType
from .logging_utils import get_logger

__all__ = ["LedgerStore", "Transaction", "TransactionType", "get_logger"]
