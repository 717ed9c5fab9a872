"""Mini README: Tests for the environment-driven settings."""

from __future__ import annotations

from expense_tracker.configuration import ExpenseTrackerSettings, get_settings


def test_settings_read_prefixed_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_KEY", "ledger-v2")
    monkeypatch.setenv("EXPENSE_TRACKER_INTERFACE_PORT", "9001")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.storage_key == "ledger-v2"
    assert settings.interface_port == 9001
    assert settings.storage_path == (tmp_path / "data").resolve() / "ledger.json"
    assert settings.data_directory.is_dir()


def test_settings_only_expose_fields_in_use() -> None:
    assert set(ExpenseTrackerSettings.model_fields) == {
        "data_directory",
        "storage_filename",
        "storage_key",
        "currency_symbol",
        "log_level",
        "interface_host",
        "interface_port",
    }
