"""Mini README: Key-value persistence slots backing the ledger.

Structure:
    * SlotStorage - abstract interface for named string slots.
    * JsonFileSlotStorage - keeps every slot inside one JSON object on disk.
    * MemorySlotStorage - dictionary-backed slots for tests and throwaway sessions.

The ledger serialises its whole collection into a single slot on every
mutation, so storage implementations only need whole-value reads and writes.
Unreadable backing files are reported as empty storage; deciding what an
empty or corrupt slot means is left to the ledger.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class SlotStorage(ABC):
    """Base interface for named persistence slots."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored value for ``key`` or ``None`` when absent."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    def describe(self) -> str:
        """Return a short label for log messages and CLI output."""

        return type(self).__name__


class MemorySlotStorage(SlotStorage):
    """Keep slots in memory for the lifetime of the object."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class JsonFileSlotStorage(SlotStorage):
    """Persist slots as string values of a JSON object stored in one file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    def _load_slots(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            LOGGER.warning("Ignoring unreadable storage file %s: %s", self.path, error)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Ignoring storage file %s: top level is not an object", self.path)
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _dump_slots(self, slots: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temporary = self.path.with_suffix(self.path.suffix + ".tmp")
        temporary.write_text(json.dumps(slots, indent=2, ensure_ascii=False), encoding="utf-8")
        temporary.replace(self.path)

    def read(self, key: str) -> Optional[str]:
        return self._load_slots().get(key)

    def write(self, key: str, value: str) -> None:
        slots = self._load_slots()
        slots[key] = value
        self._dump_slots(slots)
        LOGGER.debug("Wrote slot '%s' (%s characters) to %s", key, len(value), self.path)

    def delete(self, key: str) -> None:
        slots = self._load_slots()
        if slots.pop(key, None) is not None:
            self._dump_slots(slots)
