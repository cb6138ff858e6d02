"""Bank reconciliation domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from compta.database.base import Database
from compta.domain.entities import (
    ZERO,
    AccountType,
    Reconciliation,
    ReconciliationLine,
    ReconciliationStatus,
    ReconciliationSummary,
)
from compta.domain.errors import (
    ConflictError,
    NotFoundError,
    ReconciliationStateError,
    UnknownAccountError,
    ValidationError,
    reconciliation_not_found,
)
from compta.domain.ledger import check_date_range
from compta.utils.amount_parser import BALANCE_TOLERANCE, round_amount

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Service for reconciling treasury accounts against bank statements.

    A reconciliation snapshots the validated postings of the account for the
    period. Lines are ticked as they are found on the statement; once the
    ticked balance matches the statement the reconciliation is finalized and
    becomes read-only.
    """

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def start_reconciliation(
        self,
        account_number: str,
        start_date: date,
        end_date: date,
        statement_balance: Decimal,
    ) -> int:
        """Start reconciling a treasury account over a period.

        Args:
            account_number: Treasury account number (e.g. "5210")
            start_date: Inclusive start of the statement period
            end_date: Inclusive end of the statement period
            statement_balance: Closing balance shown on the bank statement

        Returns:
            Reconciliation ID

        Raises:
            UnknownAccountError: If the account doesn't exist
            ValidationError: If the account is not a treasury account or the
                dates are inverted
            ConflictError: If an open or finalized reconciliation of the
                account overlaps the period
        """
        check_date_range(start_date, end_date)
        account = self.db.get_account_by_number(account_number)
        if account is None:
            raise UnknownAccountError(account_number)
        if account.account_type != AccountType.TRESORERIE:
            raise ValidationError(
                f"Account {account_number} is not a treasury account and cannot be reconciled"
            )

        for existing in self.db.list_reconciliations(account_number=account_number):
            if existing.status == ReconciliationStatus.CANCELLED:
                continue
            if existing.start_date <= end_date and start_date <= existing.end_date:
                raise ConflictError(
                    f"Reconciliation {existing.id} of {account_number} already covers "
                    f"{existing.start_date} to {existing.end_date}"
                )

        opening = sum(
            (
                line.debit - line.credit
                for line in self.db.find_validated_lines(
                    account_number=account_number, before=start_date
                )
            ),
            ZERO,
        )
        lines = self.db.find_validated_lines(
            account_number=account_number, start_date=start_date, end_date=end_date
        )
        reconciliation_id = self.db.create_reconciliation(
            account_number=account_number,
            start_date=start_date,
            end_date=end_date,
            opening_book_balance=opening,
            statement_balance=round_amount(statement_balance),
            lines=lines,
        )
        logger.info(
            "Reconciliation %s started for %s with %d lines",
            reconciliation_id,
            account_number,
            len(lines),
        )
        return reconciliation_id

    def get_reconciliation(self, reconciliation_id: int) -> Optional[Reconciliation]:
        return self.db.get_reconciliation(reconciliation_id)

    def require_reconciliation(self, reconciliation_id: int) -> Reconciliation:
        """Get reconciliation by ID or raise NotFoundError."""
        reconciliation = self.db.get_reconciliation(reconciliation_id)
        if reconciliation is None:
            raise NotFoundError(reconciliation_not_found(reconciliation_id))
        return reconciliation

    def list_reconciliations(self, account_number: Optional[str] = None) -> list[Reconciliation]:
        return self.db.list_reconciliations(account_number=account_number)

    def _require_in_progress(self, reconciliation_id: int) -> Reconciliation:
        reconciliation = self.require_reconciliation(reconciliation_id)
        if reconciliation.status != ReconciliationStatus.IN_PROGRESS:
            raise ReconciliationStateError(
                f"Reconciliation {reconciliation_id} is {reconciliation.status.value.lower()}"
                " and can no longer be changed"
            )
        return reconciliation

    @staticmethod
    def _find_line(reconciliation: Reconciliation, line_id: int) -> ReconciliationLine:
        for line in reconciliation.lines:
            if line.id == line_id:
                return line
        raise NotFoundError(
            f"Line {line_id} is not part of reconciliation {reconciliation.id}"
        )

    def tick_line(
        self,
        reconciliation_id: int,
        line_id: int,
        reconciled_date: Optional[date] = None,
    ) -> None:
        """Mark a reconciliation line as found on the bank statement.

        Args:
            reconciliation_id: Reconciliation ID
            line_id: Reconciliation line ID
            reconciled_date: Date of the match (defaults to today)

        Raises:
            NotFoundError: If the reconciliation or line doesn't exist
            ReconciliationStateError: If the reconciliation is not in progress
        """
        reconciliation = self._require_in_progress(reconciliation_id)
        line = self._find_line(reconciliation, line_id)
        self.db.set_reconciliation_line(
            line.id, is_reconciled=True, reconciled_date=reconciled_date or date.today()
        )

    def untick_line(self, reconciliation_id: int, line_id: int) -> None:
        """Clear the reconciled mark of a line.

        Raises:
            NotFoundError: If the reconciliation or line doesn't exist
            ReconciliationStateError: If the reconciliation is not in progress
        """
        reconciliation = self._require_in_progress(reconciliation_id)
        line = self._find_line(reconciliation, line_id)
        self.db.set_reconciliation_line(line.id, is_reconciled=False)

    def summarize(self, reconciliation_id: int) -> ReconciliationSummary:
        """Compute the balances of a reconciliation.

        Balances are debit minus credit, starting from the opening book
        balance. The difference is statement balance minus reconciled balance.
        """
        reconciliation = self.require_reconciliation(reconciliation_id)
        opening = reconciliation.opening_book_balance

        book_balance = opening
        reconciled_balance = opening
        unreconciled = 0
        for line in reconciliation.lines:
            movement = line.debit - line.credit
            book_balance += movement
            if line.is_reconciled:
                reconciled_balance += movement
            else:
                unreconciled += 1

        return ReconciliationSummary(
            reconciliation_id=reconciliation.id,
            opening_book_balance=opening,
            book_balance=book_balance,
            reconciled_balance=reconciled_balance,
            statement_balance=reconciliation.statement_balance,
            difference=reconciliation.statement_balance - reconciled_balance,
            unreconciled_count=unreconciled,
        )

    def finalize(self, reconciliation_id: int) -> ReconciliationSummary:
        """Close a reconciliation whose ticked lines match the statement.

        Raises:
            ReconciliationStateError: If the reconciliation is not in progress
            ValidationError: If the difference exceeds 0.01
        """
        self._require_in_progress(reconciliation_id)
        summary = self.summarize(reconciliation_id)
        if abs(summary.difference) > BALANCE_TOLERANCE:
            raise ValidationError(
                f"Reconciliation {reconciliation_id} does not match the statement: "
                f"difference {summary.difference:.2f}"
            )
        self.db.update_reconciliation_status(reconciliation_id, ReconciliationStatus.RECONCILED)
        logger.info("Reconciliation %s finalized", reconciliation_id)
        return summary

    def cancel(self, reconciliation_id: int) -> None:
        """Abandon an in-progress reconciliation.

        Raises:
            ReconciliationStateError: If the reconciliation is not in progress
        """
        self._require_in_progress(reconciliation_id)
        self.db.update_reconciliation_status(reconciliation_id, ReconciliationStatus.CANCELLED)
        logger.info("Reconciliation %s cancelled", reconciliation_id)
