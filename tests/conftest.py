"""Mini README: Shared pytest fixtures.

Settings are cached per process and create their data directory on first
use, so every test points ``EXPENSE_TRACKER_DATA_DIRECTORY`` at its own
temporary directory and clears the cache before and after running.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from expense_tracker.configuration import get_settings
from expense_tracker.ledger import LedgerStore, MemorySlotStorage


@pytest.fixture(autouse=True)
def _isolate_data_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep ledger files written by the app inside the test's temp directory."""

    monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIRECTORY", os.fspath(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> LedgerStore:
    """An empty ledger backed by in-memory slots."""

    return LedgerStore(MemorySlotStorage())
