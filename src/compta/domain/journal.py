"""Journal domain service."""

from typing import Optional

from compta.database.base import Database
from compta.domain.entities import Journal as JournalEntity, JournalType
from compta.domain.errors import (
    ConflictError,
    NotFoundError,
    UnknownAccountError,
    ValidationError,
    journal_not_found,
)


class JournalService:
    """Service for managing accounting journals."""

    def __init__(self, db: Database):
        self.db = db

    def create_journal(
        self,
        code: str,
        label: str,
        journal_type: JournalType,
        counterpart_account_number: Optional[str] = None,
    ) -> int:
        """Create a journal.

        Args:
            code: Short unique code, stored uppercase (e.g. "BQ")
            label: Journal label
            journal_type: Kind of journal
            counterpart_account_number: Optional default counterpart account

        Returns:
            Journal ID

        Raises:
            ValidationError: If code or label is empty
            ConflictError: If the code already exists
            UnknownAccountError: If the counterpart account doesn't exist
        """
        code = (code or "").strip().upper()
        if not code:
            raise ValidationError("Journal code is required")
        if not label or not label.strip():
            raise ValidationError("Journal label is required")
        if self.db.get_journal(code) is not None:
            raise ConflictError(f"Journal '{code}' already exists")
        if counterpart_account_number is not None:
            if self.db.get_account_by_number(counterpart_account_number) is None:
                raise UnknownAccountError(counterpart_account_number)

        return self.db.create_journal(
            code=code,
            label=label.strip(),
            journal_type=JournalType(journal_type),
            counterpart_account_number=counterpart_account_number,
        )

    def get_journal(self, code: str) -> Optional[JournalEntity]:
        """Get journal by code (case-insensitive)."""
        return self.db.get_journal((code or "").strip().upper())

    def require_journal(self, code: str) -> JournalEntity:
        """Get journal by code or raise NotFoundError."""
        journal = self.get_journal(code)
        if journal is None:
            raise NotFoundError(journal_not_found(code))
        return journal

    def list_journals(self) -> list[JournalEntity]:
        """List all journals."""
        return self.db.list_journals()
