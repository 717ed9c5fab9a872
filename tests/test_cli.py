"""Mini README: Tests for the Typer command line.

Commands run against the ledger file in the per-test data directory set up
by ``conftest.py``.
"""

from __future__ import annotations

import json

from typer.testing import CliRunner

from main_expense_tracker import cli

runner = CliRunner()


def test_add_list_and_summary() -> None:
    added = runner.invoke(cli, ["add", "Salary", "1000", "--type", "income", "--category", "Work"])
    assert added.exit_code == 0, added.output
    assert "+₹1,000.00" in added.output

    runner.invoke(cli, ["add", "Groceries", "400", "--category", "Food", "--date", "2024-01-05"])

    listed = runner.invoke(cli, ["list", "--type", "expense"])
    assert listed.exit_code == 0
    assert "Groceries" in listed.output
    assert "Salary" not in listed.output

    summary = runner.invoke(cli, ["summary"])
    assert "Net:     ₹600.00" in summary.output
    assert "Food: ₹400.00" in summary.output


def test_add_rejects_invalid_amount() -> None:
    result = runner.invoke(cli, ["add", "Tea", "abc"])

    assert result.exit_code == 1
    assert "Please enter a valid amount > 0" in result.output


def test_list_reports_empty_ledger() -> None:
    result = runner.invoke(cli, ["list"])

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_export_and_import_round_trip(tmp_path) -> None:
    runner.invoke(cli, ["add", "Rent", "1200", "--category", "Housing"])

    exported = runner.invoke(cli, ["export", str(tmp_path)])
    assert exported.exit_code == 0, exported.output
    export_file = tmp_path / "transactions.json"
    assert json.loads(export_file.read_text(encoding="utf-8"))[0]["description"] == "Rent"

    imported = runner.invoke(cli, ["import", str(export_file)])
    assert imported.exit_code == 0, imported.output
    assert "ledger now holds 2" in imported.output


def test_import_rejects_non_array(tmp_path) -> None:
    bad_file = tmp_path / "bad.json"
    bad_file.write_text('{"description": "nope"}', encoding="utf-8")

    result = runner.invoke(cli, ["import", str(bad_file)])

    assert result.exit_code == 1
    assert "Import failed" in result.output


def test_clear_requires_confirmation() -> None:
    runner.invoke(cli, ["add", "Rent", "1200"])

    aborted = runner.invoke(cli, ["clear"], input="n\n")
    assert aborted.exit_code == 1
    assert "No transactions found." not in runner.invoke(cli, ["list"]).output

    cleared = runner.invoke(cli, ["clear", "--yes"])
    assert cleared.exit_code == 0
    assert "No transactions found." in runner.invoke(cli, ["list"]).output
