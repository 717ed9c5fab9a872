"""Mini README: The ledger store owning every recorded transaction.

Structure:
    * LedgerSummary - income, expense and net totals.
    * LedgerStore - ordered collection with persistence, filtering,
      aggregation, and JSON export/import.

The store keeps transactions in insertion order and rewrites the complete
collection into its storage slot after every mutation. Loading treats a
missing or corrupt slot as an empty ledger so a damaged file never prevents
the dashboard from starting. Imports are validated in full before anything is
appended, which keeps a failed import from leaving half a file behind.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from ..logging_utils import get_logger
from .errors import ImportFormatError, TransactionValidationError
from .models import Transaction, TransactionType, generate_transaction_id
from .storage import MemorySlotStorage, SlotStorage

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "transactions"
EXPORT_FILENAME = "transactions.json"
ALL = "all"

_CENT = Decimal("0.01")


def _total(amounts: Iterable[float]) -> Decimal:
    return sum((Decimal(str(amount)) for amount in amounts), Decimal("0"))


def _as_float(value: Decimal) -> float:
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))


@dataclass(slots=True)
class LedgerSummary:
    """Totals across the full, unfiltered ledger."""

    total_income: float
    total_expense: float
    net: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_income": self.total_income,
            "total_expense": self.total_expense,
            "net": self.net,
        }


class LedgerStore:
    """Manage the transaction collection and keep its storage slot in sync."""

    def __init__(
        self,
        storage: Optional[SlotStorage] = None,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        transactions: Optional[Iterable[Transaction]] = None,
    ) -> None:
        self._storage = storage if storage is not None else MemorySlotStorage()
        self._storage_key = storage_key
        self._transactions: List[Transaction] = []
        if transactions:
            self._transactions.extend(
                self._with_unique_ids((t.validated() for t in transactions), set())
            )
        LOGGER.debug(
            "Ledger store initialised with %s transactions (storage=%s)",
            len(self._transactions),
            self._storage.describe(),
        )

    @classmethod
    def load(cls, storage: SlotStorage, *, storage_key: str = DEFAULT_STORAGE_KEY) -> "LedgerStore":
        """Restore a store from ``storage``; absent or corrupt data yields an empty ledger."""

        raw = storage.read(storage_key)
        if raw is None:
            LOGGER.info("No persisted ledger under '%s'; starting empty", storage_key)
            return cls(storage, storage_key=storage_key)
        try:
            payload = json.loads(raw)
            transactions = cls._coerce_records(payload)
        except (json.JSONDecodeError, RecursionError, ImportFormatError) as error:
            LOGGER.warning("Persisted ledger under '%s' is corrupt, starting empty: %s", storage_key, error)
            return cls(storage, storage_key=storage_key)
        store = cls(storage, storage_key=storage_key, transactions=transactions)
        LOGGER.info("Loaded %s transactions from %s", len(store), storage.describe())
        return store

    # ------------------------------------------------------------------ helpers
    @staticmethod
    def _coerce_records(payload: Any) -> List[Transaction]:
        """Validate an entire batch, raising ``ImportFormatError`` on the first bad record."""

        if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Sequence):
            raise ImportFormatError("Invalid file format: expected a JSON array of transactions")
        transactions: List[Transaction] = []
        for index, record in enumerate(payload):
            try:
                transactions.append(Transaction.from_record(record))
            except TransactionValidationError as error:
                raise ImportFormatError(f"Record {index + 1} is invalid: {error}") from error
        return transactions

    @staticmethod
    def _with_unique_ids(transactions: Iterable[Transaction], taken: Set[str]) -> List[Transaction]:
        """Replace ids already present in ``taken`` so identifiers stay unique."""

        unique: List[Transaction] = []
        for transaction in transactions:
            if transaction.transaction_id in taken:
                replacement = generate_transaction_id()
                while replacement in taken:
                    replacement = generate_transaction_id()
                LOGGER.debug("Reassigning duplicate id %s -> %s", transaction.transaction_id, replacement)
                transaction = replace(transaction, transaction_id=replacement)
            taken.add(transaction.transaction_id)
            unique.append(transaction)
        return unique

    def _existing_ids(self) -> Set[str]:
        return {transaction.transaction_id for transaction in self._transactions}

    def _index_of(self, transaction_id: str) -> Optional[int]:
        for index, transaction in enumerate(self._transactions):
            if transaction.transaction_id == transaction_id:
                return index
        return None

    def persist(self) -> None:
        """Serialise the complete collection into the storage slot."""

        self._storage.write(self._storage_key, json.dumps(self.export_records(), ensure_ascii=False))

    # ------------------------------------------------------------------ queries
    def __len__(self) -> int:
        return len(self._transactions)

    @property
    def transactions(self) -> List[Transaction]:
        """Return a copy of the collection in insertion order."""

        return list(self._transactions)

    def find(self, transaction_id: str) -> Optional[Transaction]:
        """Return the transaction with ``transaction_id`` or ``None``."""

        index = self._index_of(transaction_id)
        return None if index is None else self._transactions[index]

    def categories(self) -> List[str]:
        """Unique categories in the order they first appear."""

        return list(dict.fromkeys(transaction.category for transaction in self._transactions))

    def filter(
        self,
        search: str = "",
        category: str = ALL,
        transaction_type: Union[str, TransactionType] = ALL,
    ) -> List[Transaction]:
        """Return transactions matching the search text, category and type selections."""

        search_text = (search or "").strip().lower()
        selected_type = (
            transaction_type.value if isinstance(transaction_type, TransactionType) else transaction_type
        )
        filtered = self._transactions
        if search_text:
            filtered = [t for t in filtered if search_text in t.description.lower()]
        if category and category != ALL:
            filtered = [t for t in filtered if t.category == category]
        if selected_type and selected_type != ALL:
            filtered = [t for t in filtered if t.transaction_type.value == selected_type]
        LOGGER.debug(
            "Filter search=%r category=%s type=%s matched %s of %s",
            search_text,
            category,
            selected_type,
            len(filtered),
            len(self._transactions),
        )
        return list(filtered)

    def summarize(self) -> LedgerSummary:
        """Total income, total expense and net over the whole ledger."""

        income = _total(
            t.amount for t in self._transactions if t.transaction_type is TransactionType.INCOME
        )
        expense = _total(
            t.amount for t in self._transactions if t.transaction_type is TransactionType.EXPENSE
        )
        return LedgerSummary(
            total_income=_as_float(income),
            total_expense=_as_float(expense),
            net=_as_float(income - expense),
        )

    def category_breakdown(self) -> Dict[str, float]:
        """Summed expense amounts per category, rounded to two decimals."""

        totals: Dict[str, Decimal] = {}
        for transaction in self._transactions:
            if transaction.transaction_type is not TransactionType.EXPENSE:
                continue
            totals[transaction.category] = totals.get(transaction.category, Decimal("0")) + Decimal(
                str(transaction.amount)
            )
        return {category: _as_float(total) for category, total in totals.items()}

    # ---------------------------------------------------------------- mutations
    def add(self, record: Union[Mapping[str, Any], Transaction]) -> Transaction:
        """Append a transaction, assigning a fresh id when missing, and persist."""

        transaction = record.validated() if isinstance(record, Transaction) else Transaction.from_record(record)
        (transaction,) = self._with_unique_ids([transaction], self._existing_ids())
        self._transactions.append(transaction)
        self.persist()
        LOGGER.info(
            "Added %s transaction %s (%s, %.2f)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.category,
            transaction.amount,
        )
        return transaction

    def update(self, transaction_id: str, fields: Mapping[str, Any]) -> Optional[Transaction]:
        """Overwrite the provided fields of a transaction; unknown ids are ignored."""

        index = self._index_of(transaction_id)
        if index is None:
            LOGGER.debug("Update ignored, transaction %s not found", transaction_id)
            return None
        updated = self._transactions[index].with_changes(fields)
        self._transactions[index] = updated
        self.persist()
        LOGGER.info("Updated transaction %s fields=%s", transaction_id, sorted(fields))
        return updated

    def remove(self, transaction_id: str) -> bool:
        """Remove the first transaction with ``transaction_id``; unknown ids are ignored."""

        index = self._index_of(transaction_id)
        if index is not None:
            del self._transactions[index]
            LOGGER.info("Removed transaction %s", transaction_id)
        else:
            LOGGER.debug("Remove ignored, transaction %s not found", transaction_id)
        self.persist()
        return index is not None

    def clear(self) -> None:
        """Delete every transaction and persist the empty ledger."""

        count = len(self._transactions)
        self._transactions = []
        self.persist()
        LOGGER.info("Cleared %s transactions", count)

    def import_merge(self, records: Any) -> List[Transaction]:
        """Validate then append a batch of records; nothing is merged if any record is bad."""

        incoming = self._with_unique_ids(self._coerce_records(records), self._existing_ids())
        self._transactions.extend(incoming)
        self.persist()
        LOGGER.info("Imported %s transactions (ledger now holds %s)", len(incoming), len(self))
        return incoming

    # ----------------------------------------------------------- export/import
    def export_records(self) -> List[Dict[str, object]]:
        return [transaction.as_dict() for transaction in self._transactions]

    def export_json(self) -> str:
        """Return the ledger as a pretty-printed JSON array."""

        return json.dumps(self.export_records(), indent=2, ensure_ascii=False)

    def export_to_file(self, destination: Path) -> Path:
        """Write the export to ``destination``; directories receive ``transactions.json``."""

        destination = Path(destination)
        if destination.is_dir():
            destination = destination / EXPORT_FILENAME
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(self.export_json(), encoding="utf-8")
        LOGGER.info("Exported %s transactions to %s", len(self), destination)
        return destination

    def import_json(self, text: Union[str, bytes]) -> List[Transaction]:
        """Parse a JSON document and merge its records."""

        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, RecursionError, UnicodeDecodeError) as error:
            raise ImportFormatError(f"File is not valid JSON: {error}") from error
        return self.import_merge(payload)

    def import_from_file(self, path: Path) -> List[Transaction]:
        """Read ``path`` and merge the records it contains."""

        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise ImportFormatError(f"Could not read {path}: {error}") from error
        return self.import_json(text)
