"""Chart of accounts domain service."""

import logging
from typing import Iterable, Optional

from compta.database.base import Database
from compta.domain.entities import Account as AccountEntity, AccountType, NormalSense
from compta.domain.errors import (
    ConflictError,
    DependencyError,
    UnknownAccountError,
    ValidationError,
    account_delete_blocked,
)

logger = logging.getLogger(__name__)

DEFAULT_TYPE_BY_CLASS = {
    1: AccountType.BILAN,
    2: AccountType.BILAN,
    3: AccountType.BILAN,
    4: AccountType.TIERS,
    5: AccountType.TRESORERIE,
    6: AccountType.RESULTAT,
    7: AccountType.RESULTAT,
    8: AccountType.RESULTAT,
    9: AccountType.AUTRE,
}


def account_class_of(number: str) -> int:
    """Return the class (first digit) of an account number.

    Raises:
        ValidationError: If the number is not a digit string starting with 1-9
    """
    if not number or not number.isdigit():
        raise ValidationError(f"Invalid account number '{number}': digits only")
    account_class = int(number[0])
    if account_class == 0:
        raise ValidationError(f"Invalid account number '{number}': class must be 1-9")
    return account_class


def default_normal_sense(number: str) -> NormalSense:
    """Return the usual balance side for an account number."""
    account_class = account_class_of(number)
    if account_class in (1, 7):
        return NormalSense.CREDIT
    # Suppliers (40x) carry credit balances
    if number.startswith("40"):
        return NormalSense.CREDIT
    return NormalSense.DEBIT


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        number: str,
        label: str,
        normal_sense: Optional[NormalSense] = None,
        account_type: Optional[AccountType] = None,
        is_letterable: bool = False,
    ) -> int:
        """Create a new account.

        Args:
            number: Account number (digits, first digit is the class)
            label: Account label
            normal_sense: Balance side; derived from the number when omitted
            account_type: Account type; derived from the class when omitted
            is_letterable: Whether lines on this account can be lettered

        Returns:
            Account ID

        Raises:
            ValidationError: If number or label is invalid
            ConflictError: If the number already exists
        """
        number = (number or "").strip()
        account_class = account_class_of(number)
        if not label or not label.strip():
            raise ValidationError("Account label is required")

        if self.db.get_account_by_number(number) is not None:
            raise ConflictError(f"Account {number} already exists")

        return self.db.create_account(
            number=number,
            label=label.strip(),
            account_class=account_class,
            normal_sense=NormalSense(normal_sense or default_normal_sense(number)),
            account_type=AccountType(account_type or DEFAULT_TYPE_BY_CLASS[account_class]),
            is_letterable=is_letterable,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID."""
        return self.db.get_account(account_id)

    def get_account_by_number(self, number: str) -> Optional[AccountEntity]:
        """Get account by number."""
        return self.db.get_account_by_number(number)

    def require_account(self, number: str) -> AccountEntity:
        """Get account by number or raise UnknownAccountError."""
        account = self.db.get_account_by_number(number)
        if account is None:
            raise UnknownAccountError(number)
        return account

    def list_accounts(
        self, account_class: Optional[int] = None, include_inactive: bool = True
    ) -> list[AccountEntity]:
        """List accounts ordered by number.

        Args:
            account_class: Optional class filter (1-9)
            include_inactive: If False, skip deactivated accounts
        """
        accounts = self.db.list_accounts(account_class=account_class)
        if not include_inactive:
            accounts = [acc for acc in accounts if acc.is_active]
        return accounts

    def update_account(
        self,
        number: str,
        label: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        normal_sense: Optional[NormalSense] = None,
        is_letterable: Optional[bool] = None,
    ) -> None:
        """Edit an account. The number itself is immutable.

        Raises:
            UnknownAccountError: If account doesn't exist
            ValidationError: If the new label is empty
        """
        self.require_account(number)
        if label is not None and not label.strip():
            raise ValidationError("Account label is required")

        self.db.update_account(
            number=number,
            label=label.strip() if label is not None else None,
            account_type=AccountType(account_type) if account_type is not None else None,
            normal_sense=NormalSense(normal_sense) if normal_sense is not None else None,
            is_letterable=is_letterable,
        )

    def deactivate_account(self, number: str) -> None:
        """Deactivate an account so that no new line can use it."""
        self.require_account(number)
        self.db.update_account(number=number, is_active=False)
        logger.info("Account %s deactivated", number)

    def reactivate_account(self, number: str) -> None:
        """Reactivate a deactivated account."""
        self.require_account(number)
        self.db.update_account(number=number, is_active=True)

    def delete_account(self, number: str) -> None:
        """Delete an account that nothing references.

        Raises:
            UnknownAccountError: If account doesn't exist
            DependencyError: If entry lines, journals or reconciliations use it
        """
        self.require_account(number)
        references = self.db.count_account_references(number)
        if references > 0:
            raise DependencyError(account_delete_blocked(number, references))
        self.db.delete_account(number)
        logger.info("Account %s deleted", number)

    def load_chart(self, rows: Iterable[tuple]) -> int:
        """Create accounts that don't exist yet.

        Args:
            rows: Tuples of (number, label) or (number, label, is_letterable)

        Returns:
            Number of accounts created
        """
        created = 0
        for row in rows:
            number, label = row[0], row[1]
            is_letterable = row[2] if len(row) > 2 else False
            if self.db.get_account_by_number(number) is not None:
                continue
            self.create_account(number=number, label=label, is_letterable=is_letterable)
            created += 1
        return created
