"""Mini README: Centralised configuration for the expense tracker.

Structure:
    * ExpenseTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to locate the ledger storage file, choose the
    currency symbol shown in the dashboard, and pick the port the web
    interface binds to. Values come from ``EXPENSE_TRACKER_*`` environment
    variables or a ``.env`` file and are validated once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger and default exports.",
    )
    storage_filename: str = Field(
        "ledger.json",
        description="File inside the data directory that stores the key-value slots.",
    )
    storage_key: str = Field(
        "transactions",
        description="Slot name under which the transaction array is persisted.",
        min_length=1,
    )
    currency_symbol: str = Field(
        "₹",
        description="Symbol prefixed to formatted amounts.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the CLI and web entry points.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the dashboard to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the dashboard exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "EXPENSE_TRACKER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True, always=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure the data directory expands user paths and exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def storage_path(self) -> Path:
        """Full path of the ledger storage file."""

        return self.data_directory / self.storage_filename


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ExpenseTrackerSettings()
