"""Utility for resolving account numbers or labels to accounts."""

from compta.domain.account import AccountService
from compta.domain.entities import Account
from compta.domain.errors import UnknownAccountError, ValidationError


def resolve_account(account_service: AccountService, account: str) -> Account:
    """Resolve an account number or label to an account.

    Args:
        account_service: AccountService instance
        account: Account number (e.g. "5210") or exact label (case-insensitive)

    Returns:
        Account entity

    Raises:
        UnknownAccountError: If no account matches
        ValidationError: If the label matches several accounts
    """
    account = account.strip()
    if account.isdigit():
        return account_service.require_account(account)

    wanted = account.casefold()
    matches = [acc for acc in account_service.list_accounts() if acc.label.casefold() == wanted]
    if not matches:
        raise UnknownAccountError(account)
    if len(matches) > 1:
        numbers = ", ".join(acc.number for acc in matches)
        raise ValidationError(f"Label '{account}' matches several accounts: {numbers}")
    return matches[0]
