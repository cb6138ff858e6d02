"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so that the ORM schema can evolve
without touching the domain services.
"""

from compta.domain import entities as domain
from compta.database.models import (
    Account as ORMAccount,
    Journal as ORMJournal,
    FiscalYear as ORMFiscalYear,
    JournalEntry as ORMJournalEntry,
    EntryLine as ORMEntryLine,
    Reconciliation as ORMReconciliation,
    ReconciliationLine as ORMReconciliationLine,
)
from compta.utils.amount_parser import round_amount


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        number=orm_account.number,
        label=orm_account.label,
        account_class=orm_account.account_class,
        normal_sense=domain.NormalSense(orm_account.normal_sense),
        account_type=domain.AccountType(orm_account.account_type),
        is_letterable=bool(orm_account.is_letterable),
        is_active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def journal_to_domain(orm_journal: ORMJournal) -> domain.Journal:
    """Convert SQLAlchemy Journal model to domain Journal entity."""
    return domain.Journal(
        id=orm_journal.id,
        code=orm_journal.code,
        label=orm_journal.label,
        journal_type=domain.JournalType(orm_journal.journal_type),
        counterpart_account_number=orm_journal.counterpart_account_number,
        is_active=bool(orm_journal.is_active),
    )


def fiscal_year_to_domain(orm_year: ORMFiscalYear) -> domain.FiscalYear:
    """Convert SQLAlchemy FiscalYear model to domain FiscalYear entity."""
    return domain.FiscalYear(
        id=orm_year.id,
        year=orm_year.year,
        start_date=orm_year.start_date,
        end_date=orm_year.end_date,
        status=domain.FiscalYearStatus(orm_year.status),
        closed_at=orm_year.closed_at,
    )


def entry_line_to_domain(orm_line: ORMEntryLine) -> domain.EntryLine:
    """Convert SQLAlchemy EntryLine model to domain EntryLine entity."""
    return domain.EntryLine(
        id=orm_line.id,
        entry_id=orm_line.entry_id,
        position=orm_line.position,
        account_number=orm_line.account_number,
        label=orm_line.label,
        debit=round_amount(orm_line.debit),
        credit=round_amount(orm_line.credit),
        lettering_code=orm_line.lettering_code,
    )


def entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        piece_number=orm_entry.piece_number,
        journal_code=orm_entry.journal_code,
        date=orm_entry.date,
        label=orm_entry.label,
        status=domain.EntryStatus(orm_entry.status),
        total_debit=round_amount(orm_entry.total_debit),
        total_credit=round_amount(orm_entry.total_credit),
        lines=tuple(entry_line_to_domain(line) for line in orm_entry.lines),
        created_at=orm_entry.created_at,
        validated_at=orm_entry.validated_at,
    )


def posted_line_to_domain(orm_line: ORMEntryLine) -> domain.PostedLine:
    """Convert an EntryLine with its loaded parent entry to a PostedLine."""
    entry = orm_line.entry
    return domain.PostedLine(
        line_id=orm_line.id,
        entry_id=entry.id,
        piece_number=entry.piece_number,
        journal_code=entry.journal_code,
        date=entry.date,
        entry_label=entry.label,
        account_number=orm_line.account_number,
        label=orm_line.label,
        debit=round_amount(orm_line.debit),
        credit=round_amount(orm_line.credit),
        status=domain.EntryStatus(entry.status),
        lettering_code=orm_line.lettering_code,
    )


def reconciliation_line_to_domain(
    orm_line: ORMReconciliationLine,
) -> domain.ReconciliationLine:
    """Convert SQLAlchemy ReconciliationLine model to domain entity."""
    return domain.ReconciliationLine(
        id=orm_line.id,
        reconciliation_id=orm_line.reconciliation_id,
        entry_id=orm_line.entry_id,
        line_id=orm_line.line_id,
        label=orm_line.label,
        date=orm_line.date,
        debit=round_amount(orm_line.debit),
        credit=round_amount(orm_line.credit),
        is_reconciled=bool(orm_line.is_reconciled),
        reconciled_date=orm_line.reconciled_date,
    )


def reconciliation_to_domain(orm_rec: ORMReconciliation) -> domain.Reconciliation:
    """Convert SQLAlchemy Reconciliation model to domain Reconciliation entity."""
    lines = sorted(orm_rec.lines, key=lambda line: (line.date, line.id))
    return domain.Reconciliation(
        id=orm_rec.id,
        account_number=orm_rec.account_number,
        start_date=orm_rec.start_date,
        end_date=orm_rec.end_date,
        opening_book_balance=round_amount(orm_rec.opening_book_balance),
        statement_balance=round_amount(orm_rec.statement_balance),
        status=domain.ReconciliationStatus(orm_rec.status),
        lines=tuple(reconciliation_line_to_domain(line) for line in lines),
        created_at=orm_rec.created_at,
        finalized_at=orm_rec.finalized_at,
    )
