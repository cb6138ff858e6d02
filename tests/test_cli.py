"""Tests for the compta command line."""

from datetime import date

import pytest
from compta.cli.commands.entry import parse_line_spec
from compta.cli.main import cli
from compta.domain.entities import EntryStatus


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _invoke


@pytest.fixture
def initialized(invoke):
    result = invoke("init-chart", "--no-fiscal-year")
    assert result.exit_code == 0
    return invoke


def test_init_chart(invoke, temp_db):
    result = invoke("init-chart")

    assert result.exit_code == 0
    assert "Created 34 account(s)" in result.output
    assert "Created 5 journal(s)" in result.output
    assert f"Opened fiscal year {date.today().year}" in result.output
    assert temp_db.get_journal("BQ").counterpart_account_number == "5210"
    assert temp_db.get_account_by_number("4111").is_letterable is True


def test_init_chart_twice_creates_nothing(initialized):
    result = initialized("init-chart", "--no-fiscal-year")
    assert result.exit_code == 0
    assert "Created 0 account(s)" in result.output


def test_account_create_and_show(invoke):
    result = invoke("account", "create", "601", "Achats", "--letterable")
    assert result.exit_code == 0
    assert "Created account 601 'Achats'" in result.output

    result = invoke("account", "show", "achats")
    assert result.exit_code == 0
    assert "Number:      601" in result.output
    assert "Letterable:  yes" in result.output


def test_account_create_duplicate(invoke):
    invoke("account", "create", "601", "Achats")
    result = invoke("account", "create", "601", "Achats")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_account_list(initialized):
    result = initialized("account", "list", "--class", "5")
    assert result.exit_code == 0
    assert "5210" in result.output
    assert "6011" not in result.output


def test_account_update_requires_a_change(initialized):
    result = initialized("account", "update", "6011")
    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_account_delete_used_account_fails(initialized):
    initialized("entry", "add", "AC", "Facture", "--date", "2024-01-15", "--line", "6011:100:", "--line", "4011::100")
    result = initialized("account", "delete", "6011", "--yes")
    assert result.exit_code == 1
    assert "Deactivate it instead" in result.output


def test_entry_add_and_validate(initialized, temp_db):
    result = initialized(
        "entry", "add", "AC", "Facture F-102",
        "--date", "15/01/2024",
        "--line", "6011:1000:",
        "--line", "4011::1000:F-102",
    )
    assert result.exit_code == 0
    assert "AC-2024-00001" in result.output
    assert "saved as draft" in result.output

    entry = temp_db.list_entries()[0]
    result = initialized("entry", "validate", str(entry.id))
    assert result.exit_code == 0
    assert "validated" in result.output
    # Drop rows cached before the CLI wrote
    temp_db.disconnect()
    assert temp_db.get_entry(entry.id).status == EntryStatus.VALIDATED

    result = initialized("entry", "validate", str(entry.id))
    assert result.exit_code == 1
    assert "already validated" in result.output


def test_entry_add_unbalanced_with_validate(initialized, temp_db):
    result = initialized(
        "entry", "add", "AC", "Facture",
        "--date", "2024-01-15",
        "--line", "6011:1000:",
        "--line", "4011::999",
        "--validate",
    )
    assert result.exit_code == 1
    assert "not balanced" in result.output
    assert temp_db.list_entries() == []


def test_entry_add_bad_line(initialized):
    result = initialized("entry", "add", "AC", "Facture", "--line", "6011-1000", "--line", "4011::1000")
    assert result.exit_code == 1
    assert "ACCOUNT:DEBIT:CREDIT" in result.output


def test_entry_show_and_list(initialized, temp_db):
    initialized("entry", "add", "VE", "Vente", "--date", "2024-02-01", "--line", "4111:500:", "--line", "7011::500", "--validate")
    entry = temp_db.list_entries()[0]

    result = initialized("entry", "show", str(entry.id))
    assert result.exit_code == 0
    assert "VE-2024-00001" in result.output
    assert "[Validated]" in result.output

    result = initialized("entry", "list", "--status", "Validated")
    assert result.exit_code == 0
    assert "Vente" in result.output


def test_reports(initialized):
    initialized("entry", "add", "OD", "Apport", "--date", "2024-01-02", "--line", "5210:10000:", "--line", "1010::10000", "--validate")
    initialized("entry", "add", "VE", "Vente", "--date", "2024-01-15", "--line", "4111:500:", "--line", "7011::500", "--validate")

    result = initialized("balance", "--start-date", "2024-01-01", "--end-date", "2024-01-31")
    assert result.exit_code == 0
    assert "10,500.00" in result.output
    assert "not balanced" not in result.output

    result = initialized("ledger", "5210", "--start-date", "2024-01-01")
    assert result.exit_code == 0
    assert "Apport" in result.output
    assert "10,000.00" in result.output

    result = initialized("bilan", "--as-of", "2024-12-31")
    assert result.exit_code == 0
    assert "Equilibre: yes" in result.output
    assert "131" in result.output

    result = initialized("resultat", "--start-date", "2024-01-01", "--end-date", "2024-12-31")
    assert result.exit_code == 0
    assert "Résultat net: 500.00" in result.output


def test_balance_rejects_two_periods(initialized):
    result = initialized("balance", "--this-month", "--last-month")
    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_reconcile_workflow(initialized, temp_db):
    initialized("entry", "add", "BQ", "Encaissement", "--date", "2024-01-10", "--line", "5210:300:", "--line", "4111::300", "--validate")

    result = initialized(
        "reconcile", "start", "5210",
        "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        "--statement-balance", "300",
    )
    assert result.exit_code == 0
    assert "with 1 line(s)" in result.output

    reconciliation = temp_db.list_reconciliations()[0]
    line_id = reconciliation.lines[0].id
    assert initialized("reconcile", "tick", str(reconciliation.id), str(line_id)).exit_code == 0

    result = initialized("reconcile", "show", str(reconciliation.id))
    assert "[x]" in result.output

    result = initialized("reconcile", "finalize", str(reconciliation.id))
    assert result.exit_code == 0
    assert "finalized" in result.output


def test_reconcile_non_treasury_account(initialized):
    result = initialized(
        "reconcile", "start", "4111",
        "--start-date", "2024-01-01", "--end-date", "2024-01-31",
        "--statement-balance", "0",
    )
    assert result.exit_code == 1
    assert "not a treasury account" in result.output


def test_letter_workflow(initialized, temp_db):
    initialized("entry", "add", "VE", "Facture", "--date", "2024-01-05", "--line", "4111:500:", "--line", "7011::500", "--validate")
    initialized("entry", "add", "BQ", "Règlement", "--date", "2024-01-20", "--line", "5210:500:", "--line", "4111::500", "--validate")
    line_ids = [line.line_id for line in temp_db.find_validated_lines(account_number="4111")]

    result = initialized("letter", "open", "4111")
    assert result.exit_code == 0
    assert "Facture" in result.output

    result = initialized("letter", "apply", *map(str, line_ids))
    assert result.exit_code == 0
    assert "'AA'" in result.output

    result = initialized("letter", "remove", "aa", "--account", "4111")
    assert result.exit_code == 0
    assert "from 2 line(s)" in result.output


def test_fiscal_year_commands(invoke):
    assert invoke("fiscal-year", "create", "2024").exit_code == 0

    result = invoke("fiscal-year", "list")
    assert "2024 | 2024-01-01 -> 2024-12-31 | Open" in result.output

    result = invoke("fiscal-year", "close", "2024")
    assert result.exit_code == 0

    result = invoke("fiscal-year", "close", "2024")
    assert result.exit_code == 1
    assert "already closed" in result.output


def test_journal_commands(initialized):
    result = initialized("journal", "create", "bq2", "Banque 2", "--type", "Tresorerie", "--counterpart", "5310")
    assert result.exit_code == 0

    result = initialized("journal", "list")
    assert "BQ2" in result.output
    assert "5310" in result.output


def test_parse_line_spec():
    line = parse_line_spec("4011::1 000,50:Facture F-1")
    assert line.account_number == "4011"
    assert line.debit == 0
    assert str(line.credit) == "1000.50"
    assert line.label == "Facture F-1"


def test_parse_line_spec_invalid():
    with pytest.raises(ValueError):
        parse_line_spec("4011:100")
