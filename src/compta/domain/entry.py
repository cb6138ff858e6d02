"""Journal entry domain service: drafting and validation."""

import logging
from datetime import date
from typing import Optional, Sequence

from compta.database.base import Database
from compta.domain.entities import (
    ZERO,
    BalanceCheck,
    EntryStatus,
    JournalEntry,
    LineInput,
)
from compta.domain.errors import (
    ConflictError,
    EntryStatusError,
    ImbalanceError,
    NotFoundError,
    UnknownAccountError,
    ValidationError,
    entry_already_validated,
    entry_not_found,
    journal_not_found,
)
from compta.domain.fiscal_year import FiscalYearService
from compta.utils.amount_parser import BALANCE_TOLERANCE, round_amount

logger = logging.getLogger(__name__)

MIN_LINES = 2


def check_balance(lines: Sequence) -> BalanceCheck:
    """Check that the debit and credit sides of lines are equal.

    Each line amount is rounded to 2 decimals before summing.

    Args:
        lines: Objects with ``debit`` and ``credit`` attributes

    Returns:
        BalanceCheck with both totals and the verdict
    """
    total_debit = sum((round_amount(line.debit) for line in lines), ZERO)
    total_credit = sum((round_amount(line.credit) for line in lines), ZERO)
    return BalanceCheck(
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=abs(total_debit - total_credit) <= BALANCE_TOLERANCE,
    )


class EntryService:
    """Service for drafting, validating and querying journal entries."""

    def __init__(self, db: Database):
        """Initialize entry service.

        Args:
            db: Database instance
        """
        self.db = db
        self.fiscal_years = FiscalYearService(db)

    def check_balance(self, lines: Sequence) -> BalanceCheck:
        """Check that the debit and credit sides of lines are equal."""
        return check_balance(lines)

    def _normalize_lines(self, lines: Sequence[LineInput]) -> list[LineInput]:
        """Validate submitted lines and return them with rounded amounts.

        Raises:
            ValidationError: If there are fewer than 2 lines or an amount is invalid
            UnknownAccountError: If a line references a missing or inactive account
        """
        if len(lines) < MIN_LINES:
            raise ValidationError(f"An entry needs at least {MIN_LINES} lines, got {len(lines)}")

        normalized = []
        for position, line in enumerate(lines, start=1):
            debit = round_amount(line.debit)
            credit = round_amount(line.credit)
            if debit < 0 or credit < 0:
                raise ValidationError(f"Line {position}: amounts must not be negative")
            if (debit == ZERO) == (credit == ZERO):
                raise ValidationError(
                    f"Line {position}: exactly one of debit or credit must be non-zero"
                )

            account = self.db.get_account_by_number(line.account_number)
            if account is None:
                raise UnknownAccountError(line.account_number)
            if not account.is_active:
                raise ValidationError(f"Line {position}: account {account.number} is inactive")

            normalized.append(
                LineInput(
                    account_number=account.number,
                    debit=debit,
                    credit=credit,
                    label=line.label,
                )
            )
        return normalized

    def _next_piece_number(self, journal_code: str, entry_date: date) -> str:
        """Generate the next free piece number for a journal and year."""
        fiscal_year = self.fiscal_years.find_for_date(entry_date)
        if fiscal_year is not None:
            year, start, end = fiscal_year.year, fiscal_year.start_date, fiscal_year.end_date
        else:
            year = entry_date.year
            start, end = date(year, 1, 1), date(year, 12, 31)

        sequence = self.db.count_entries(journal_code, start, end) + 1
        piece_number = f"{journal_code}-{year}-{sequence:05d}"
        while self.db.piece_number_exists(piece_number):
            sequence += 1
            piece_number = f"{journal_code}-{year}-{sequence:05d}"
        return piece_number

    def create_entry(
        self,
        journal_code: str,
        date: date,
        label: str,
        lines: Sequence[LineInput],
        piece_number: Optional[str] = None,
        validate: bool = False,
    ) -> int:
        """Create a Draft entry, optionally validating it right away.

        Nothing is persisted if any check fails.

        Args:
            journal_code: Journal code
            date: Entry date
            label: Entry label
            lines: Entry lines
            piece_number: Optional piece number (generated when omitted)
            validate: If True, validate the entry after saving it

        Returns:
            Entry ID

        Raises:
            ValidationError: If lines, label or date are invalid
            UnknownAccountError: If a line references a missing account
            NotFoundError: If the journal doesn't exist
            ConflictError: If the piece number is already used
            ClosedFiscalYearError: If the date falls in a closed fiscal year
            ImbalanceError: If validate is True and the entry is unbalanced
        """
        journal_code = (journal_code or "").strip().upper()
        journal = self.db.get_journal(journal_code)
        if journal is None:
            raise NotFoundError(journal_not_found(journal_code))
        if not label or not label.strip():
            raise ValidationError("Entry label is required")

        normalized = self._normalize_lines(lines)
        self.fiscal_years.check_open_for_posting(date)

        if validate:
            # Reject before anything is written
            check = check_balance(normalized)
            if not check.is_balanced:
                logger.warning(
                    "Rejected unbalanced entry in %s: debit %s, credit %s",
                    journal_code,
                    check.total_debit,
                    check.total_credit,
                )
                raise ImbalanceError(check.total_debit, check.total_credit)

        if piece_number is None:
            piece_number = self._next_piece_number(journal_code, date)
        elif self.db.piece_number_exists(piece_number):
            raise ConflictError(f"Piece number '{piece_number}' is already used")

        status = EntryStatus.VALIDATED if validate else EntryStatus.DRAFT
        entry_id = self.db.insert_entry(
            piece_number=piece_number,
            journal_code=journal_code,
            date=date,
            label=label.strip(),
            lines=normalized,
            status=status,
        )
        if validate:
            logger.info("Entry %s (%s) validated", entry_id, piece_number)
        return entry_id

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get entry with its lines by ID."""
        return self.db.get_entry(entry_id)

    def require_entry(self, entry_id: int) -> JournalEntry:
        """Get entry by ID or raise NotFoundError."""
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        journal_code: Optional[str] = None,
        status: Optional[EntryStatus] = None,
        account_number: Optional[str] = None,
    ) -> list[JournalEntry]:
        """List entries ordered by date.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            journal_code: Optional journal filter
            status: Optional status filter
            account_number: Only entries with a line on this account

        Returns:
            List of entries
        """
        if journal_code is not None:
            journal_code = journal_code.strip().upper()
        return self.db.list_entries(
            start_date=start_date,
            end_date=end_date,
            journal_code=journal_code,
            status=status,
            account_number=account_number,
        )

    def update_entry(
        self,
        entry_id: int,
        label: Optional[str] = None,
        date: Optional[date] = None,
        lines: Optional[Sequence[LineInput]] = None,
    ) -> None:
        """Edit a Draft entry.

        Raises:
            NotFoundError: If the entry doesn't exist
            EntryStatusError: If the entry is already validated
            ValidationError: If the new label or lines are invalid
        """
        entry = self.require_entry(entry_id)
        if entry.is_validated:
            raise EntryStatusError(entry_already_validated(entry_id))
        if label is not None and not label.strip():
            raise ValidationError("Entry label is required")

        normalized = self._normalize_lines(lines) if lines is not None else None
        if date is not None:
            self.fiscal_years.check_open_for_posting(date)

        self.db.replace_entry(
            entry_id,
            date=date,
            label=label.strip() if label is not None else None,
            lines=normalized,
        )

    def validate_entry(self, entry_id: int) -> JournalEntry:
        """Move a Draft entry to Validated.

        The entry stays Draft when any check fails.

        Args:
            entry_id: Entry ID

        Returns:
            The validated entry

        Raises:
            NotFoundError: If the entry doesn't exist
            EntryStatusError: If the entry is already validated
                or its lines changed while it was being validated
            ImbalanceError: If debits and credits differ by more than 0.01
            ValidationError: If a line posts to an inactive account
            ClosedFiscalYearError: If the entry date is in a closed fiscal year
        """
        entry = self.require_entry(entry_id)
        if entry.is_validated:
            raise EntryStatusError(entry_already_validated(entry_id))
        if len(entry.lines) < MIN_LINES:
            raise ValidationError(f"An entry needs at least {MIN_LINES} lines, got {len(entry.lines)}")

        check = check_balance(entry.lines)
        if not check.is_balanced:
            logger.warning(
                "Rejected validation of entry %s: debit %s, credit %s",
                entry_id,
                check.total_debit,
                check.total_credit,
            )
            raise ImbalanceError(check.total_debit, check.total_credit)

        for entry_line in entry.lines:
            account = self.db.get_account_by_number(entry_line.account_number)
            if account is None:
                raise UnknownAccountError(entry_line.account_number)
            if not account.is_active:
                raise ValidationError(
                    f"Line {entry_line.position}: account {entry_line.account_number} is inactive"
                )

        self.fiscal_years.check_open_for_posting(entry.date)

        # Conditional update: fails if another session validated the entry
        # or replaced its lines since they were checked
        if not self.db.update_entry_status(
            entry_id,
            EntryStatus.VALIDATED,
            expected_status=EntryStatus.DRAFT,
            expected_totals=(check.total_debit, check.total_credit),
        ):
            current = self.require_entry(entry_id)
            if current.is_validated:
                raise EntryStatusError(entry_already_validated(entry_id))
            raise EntryStatusError(
                f"Entry {entry_id} was modified while being validated; validate it again"
            )

        logger.info("Entry %s (%s) validated", entry_id, entry.piece_number)
        return self.require_entry(entry_id)

    def delete_entry(self, entry_id: int) -> None:
        """Delete a Draft entry.

        Raises:
            NotFoundError: If the entry doesn't exist
            EntryStatusError: If the entry is validated
        """
        entry = self.require_entry(entry_id)
        if entry.is_validated:
            raise EntryStatusError(f"Entry {entry_id} is validated and cannot be deleted")
        self.db.delete_entry(entry_id)


def line(account_number: str, debit=ZERO, credit=ZERO, label: Optional[str] = None) -> LineInput:
    """Shorthand for building a LineInput from plain numbers."""
    return LineInput(
        account_number=account_number,
        debit=round_amount(debit),
        credit=round_amount(credit),
        label=label,
    )
