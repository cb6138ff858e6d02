"""Shared pytest fixtures for compta tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from compta.database.factories import create_sqlite_database
from compta.domain.account import AccountService
from compta.domain.entities import LineInput
from compta.domain.entry import EntryService
from compta.domain.fiscal_year import FiscalYearService
from compta.domain.journal import JournalService
from compta.domain.ledger import LedgerService
from compta.domain.lettering import LetteringService
from compta.domain.reconciliation import ReconciliationService
from compta.domain.statements import StatementService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def fiscal_year_service(temp_db):
    """Create a FiscalYearService with a temporary database."""
    return FiscalYearService(temp_db)


@pytest.fixture
def entry_service(temp_db):
    """Create an EntryService with a temporary database."""
    return EntryService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db)


@pytest.fixture
def reconciliation_service(temp_db):
    """Create a ReconciliationService with a temporary database."""
    return ReconciliationService(temp_db)


@pytest.fixture
def lettering_service(temp_db):
    """Create a LetteringService with a temporary database."""
    return LetteringService(temp_db)


@pytest.fixture
def seeded_chart(account_service, journal_service):
    """Load a small chart of accounts and the usual journals.

    Returns the list of account numbers created.
    """
    rows = [
        ("101", "Capital"),
        ("401", "Fournisseurs", True),
        ("411", "Clients", True),
        ("521", "Banque"),
        ("571", "Caisse"),
        ("601", "Achats de marchandises"),
        ("701", "Ventes de marchandises"),
    ]
    account_service.load_chart(rows)
    journal_service.create_journal("AC", "Achats", "Achat")
    journal_service.create_journal("VE", "Ventes", "Vente")
    journal_service.create_journal("BQ", "Banque", "Tresorerie", "521")
    journal_service.create_journal("OD", "Opérations diverses", "Operations Diverses")
    return [row[0] for row in rows]


@pytest.fixture
def post_entry(entry_service, seeded_chart):
    """Return a helper that records and validates a two-line entry."""

    def _post(
        debit_account: str,
        credit_account: str,
        amount,
        day: date = date(2024, 1, 15),
        journal: str = "OD",
        label: str = "Test entry",
    ) -> int:
        amount = Decimal(str(amount))
        return entry_service.create_entry(
            journal_code=journal,
            date=day,
            label=label,
            lines=[
                LineInput(debit_account, debit=amount),
                LineInput(credit_account, credit=amount),
            ],
            validate=True,
        )

    return _post


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
