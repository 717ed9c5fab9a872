"""Mini README: Exception hierarchy shared by the ledger modules.

Every error derives from ``LedgerError``; the validation and import errors
also derive from ``ValueError`` so interface layers can map them to HTTP 400
responses the same way they map other bad input.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for errors raised by the ledger package."""


class TransactionValidationError(LedgerError, ValueError):
    """Raised when record data violates the transaction invariants."""


class EntryValidationError(TransactionValidationError):
    """Raised by the input form checks with a user-facing message."""


class ImportFormatError(LedgerError, ValueError):
    """Raised when import input is not a JSON array of records."""
