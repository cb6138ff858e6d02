"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from compta.database.models import (
    Account as ORMAccount,
    Journal as ORMJournal,
    JournalEntry as ORMJournalEntry,
    EntryLine as ORMEntryLine,
    Reconciliation as ORMReconciliation,
    ReconciliationLine as ORMReconciliationLine,
)
from compta.database.mappers import (
    account_to_domain,
    journal_to_domain,
    entry_to_domain,
    posted_line_to_domain,
    reconciliation_to_domain,
)
from compta.domain.entities import (
    Account,
    AccountType,
    EntryStatus,
    JournalType,
    NormalSense,
    ReconciliationStatus,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            number="4111",
            label="Clients",
            account_class=4,
            normal_sense="Debit",
            account_type="Tiers",
            is_letterable=True,
            is_active=True,
            created_at=datetime.now(UTC),
        )

        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.number == "4111"
        assert account.normal_sense == NormalSense.DEBIT
        assert account.account_type == AccountType.TIERS
        assert account.is_letterable is True


class TestJournalMapper:
    def test_journal_to_domain(self):
        orm_journal = ORMJournal(
            id=3,
            code="BQ",
            label="Banque",
            journal_type="Tresorerie",
            counterpart_account_number="5210",
            is_active=True,
        )

        journal = journal_to_domain(orm_journal)

        assert journal.journal_type == JournalType.TRESORERIE
        assert journal.counterpart_account_number == "5210"


class TestEntryMapper:
    """Tests for JournalEntry and EntryLine mappers."""

    def _entry(self):
        entry = ORMJournalEntry(
            id=7,
            piece_number="AC-2024-00001",
            journal_code="AC",
            date=date(2024, 1, 15),
            label="Facture",
            status="Validated",
            total_debit=Decimal("1000"),
            total_credit=1000.0,
            created_at=datetime.now(UTC),
        )
        entry.lines = [
            ORMEntryLine(id=1, entry_id=7, position=1, account_number="601", label="", debit=Decimal("1000"), credit=Decimal("0")),
            ORMEntryLine(id=2, entry_id=7, position=2, account_number="401", label="F-1", debit=Decimal("0"), credit=Decimal("1000")),
        ]
        return entry

    def test_entry_to_domain_rounds_amounts(self):
        entry = entry_to_domain(self._entry())

        assert entry.status == EntryStatus.VALIDATED
        assert entry.total_debit == Decimal("1000.00")
        assert str(entry.total_credit) == "1000.00"
        assert isinstance(entry.lines, tuple)
        assert [line.account_number for line in entry.lines] == ["601", "401"]

    def test_posted_line_to_domain(self):
        orm_entry = self._entry()
        posted = posted_line_to_domain(orm_entry.lines[1])

        assert posted.line_id == 2
        assert posted.entry_id == 7
        assert posted.piece_number == "AC-2024-00001"
        assert posted.entry_label == "Facture"
        assert posted.label == "F-1"
        assert posted.credit == Decimal("1000.00")
        assert posted.status == EntryStatus.VALIDATED


class TestReconciliationMapper:
    def test_lines_sorted_by_date(self):
        orm_rec = ORMReconciliation(
            id=1,
            account_number="5210",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            opening_book_balance=Decimal("10"),
            statement_balance=Decimal("20"),
            status="In progress",
        )
        orm_rec.lines = [
            ORMReconciliationLine(id=2, entry_id=1, line_id=5, label="b", date=date(2024, 1, 20), debit=Decimal("5"), credit=Decimal("0"), is_reconciled=False),
            ORMReconciliationLine(id=1, entry_id=1, line_id=4, label="a", date=date(2024, 1, 3), debit=Decimal("5"), credit=Decimal("0"), is_reconciled=True),
        ]

        rec = reconciliation_to_domain(orm_rec)

        assert rec.status == ReconciliationStatus.IN_PROGRESS
        assert [line.label for line in rec.lines] == ["a", "b"]
        assert rec.lines[0].is_reconciled is True
