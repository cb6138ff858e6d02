"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from compta.domain.entities import (
    Account,
    Journal,
    FiscalYear,
    JournalEntry,
    LineInput,
    PostedLine,
    EntryStatus,
    Reconciliation,
    ReconciliationStatus,
)


class Database(ABC):
    """Abstract database interface for compta."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        number: str,
        label: str,
        account_class: int,
        normal_sense: str,
        account_type: str,
        is_letterable: bool = False,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_number(self, number: str) -> Optional[Account]:
        """Get account by its number."""
        pass

    @abstractmethod
    def list_accounts(self, account_class: Optional[int] = None) -> list[Account]:
        """List accounts ordered by number, optionally filtered by class."""
        pass

    @abstractmethod
    def update_account(
        self,
        number: str,
        label: Optional[str] = None,
        account_type: Optional[str] = None,
        normal_sense: Optional[str] = None,
        is_letterable: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update mutable account fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_account(self, number: str) -> None:
        """Physically delete an account."""
        pass

    @abstractmethod
    def count_account_references(self, number: str) -> int:
        """Count entry lines and journals referencing an account."""
        pass

    # Journal operations
    @abstractmethod
    def create_journal(
        self,
        code: str,
        label: str,
        journal_type: str,
        counterpart_account_number: Optional[str] = None,
    ) -> int:
        """Create a journal. Returns journal ID."""
        pass

    @abstractmethod
    def get_journal(self, code: str) -> Optional[Journal]:
        """Get journal by code."""
        pass

    @abstractmethod
    def list_journals(self) -> list[Journal]:
        """List journals ordered by code."""
        pass

    # Fiscal year operations
    @abstractmethod
    def create_fiscal_year(self, year: int, start_date: date, end_date: date) -> int:
        """Create an open fiscal year. Returns fiscal year ID."""
        pass

    @abstractmethod
    def get_fiscal_year(self, year: int) -> Optional[FiscalYear]:
        """Get fiscal year by year number."""
        pass

    @abstractmethod
    def list_fiscal_years(self) -> list[FiscalYear]:
        """List fiscal years ordered by start date."""
        pass

    @abstractmethod
    def close_fiscal_year(self, year: int) -> None:
        """Mark a fiscal year as closed."""
        pass

    # Entry operations
    @abstractmethod
    def insert_entry(
        self,
        piece_number: str,
        journal_code: str,
        date: date,
        label: str,
        lines: Sequence[LineInput],
        status: EntryStatus = EntryStatus.DRAFT,
    ) -> int:
        """Insert an entry header and its lines in one transaction. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get entry with its lines by ID."""
        pass

    @abstractmethod
    def piece_number_exists(self, piece_number: str) -> bool:
        """Check whether a piece number is already used."""
        pass

    @abstractmethod
    def count_entries(self, journal_code: str, start_date: date, end_date: date) -> int:
        """Count entries of a journal dated within a range."""
        pass

    @abstractmethod
    def replace_entry(
        self,
        entry_id: int,
        date: Optional[date] = None,
        label: Optional[str] = None,
        lines: Optional[Sequence[LineInput]] = None,
    ) -> None:
        """Update a Draft entry header and optionally replace all its lines.

        Raises a ConflictError when the entry is no longer Draft.
        """
        pass

    @abstractmethod
    def update_entry_status(
        self,
        entry_id: int,
        status: EntryStatus,
        expected_status: Optional[EntryStatus] = None,
        expected_totals: Optional[tuple[Decimal, Decimal]] = None,
    ) -> bool:
        """Set entry status.

        When expected_status or expected_totals (debit, credit) are given the
        update only applies if the stored values still match. Returns True
        when a row was updated.
        """
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry and its lines."""
        pass

    @abstractmethod
    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        journal_code: Optional[str] = None,
        status: Optional[EntryStatus] = None,
        account_number: Optional[str] = None,
    ) -> list[JournalEntry]:
        """List entries ordered by date then ID."""
        pass

    @abstractmethod
    def find_validated_lines(
        self,
        account_number: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        before: Optional[date] = None,
    ) -> list[PostedLine]:
        """Find lines of Validated entries.

        Args:
            account_number: Optional account filter
            start_date: Optional inclusive lower date bound
            end_date: Optional inclusive upper date bound
            before: Optional exclusive upper date bound

        Returns lines ordered by date, entry ID and line position.
        """
        pass

    @abstractmethod
    def get_posted_lines(self, line_ids: Sequence[int]) -> list[PostedLine]:
        """Get lines with their entry headers by line ID."""
        pass

    # Lettering operations
    @abstractmethod
    def set_lettering_code(self, line_ids: Sequence[int], code: Optional[str]) -> None:
        """Set or clear the lettering code of lines."""
        pass

    @abstractmethod
    def list_lettering_codes(self, account_number: str) -> list[str]:
        """List lettering codes in use on an account."""
        pass

    @abstractmethod
    def find_lines_by_lettering_code(self, code: str) -> list[PostedLine]:
        """Find lines carrying a lettering code."""
        pass

    # Reconciliation operations
    @abstractmethod
    def create_reconciliation(
        self,
        account_number: str,
        start_date: date,
        end_date: date,
        opening_book_balance: Decimal,
        statement_balance: Decimal,
        lines: Sequence[PostedLine],
    ) -> int:
        """Create an in-progress reconciliation with a snapshot of lines."""
        pass

    @abstractmethod
    def get_reconciliation(self, reconciliation_id: int) -> Optional[Reconciliation]:
        """Get reconciliation with its lines."""
        pass

    @abstractmethod
    def list_reconciliations(self, account_number: Optional[str] = None) -> list[Reconciliation]:
        """List reconciliations, optionally for one account."""
        pass

    @abstractmethod
    def set_reconciliation_line(
        self,
        reconciliation_line_id: int,
        is_reconciled: bool,
        reconciled_date: Optional[date] = None,
    ) -> None:
        """Tick or untick a reconciliation line."""
        pass

    @abstractmethod
    def update_reconciliation_status(
        self, reconciliation_id: int, status: ReconciliationStatus
    ) -> None:
        """Set reconciliation status."""
        pass
