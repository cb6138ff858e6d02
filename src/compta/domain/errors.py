"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or illegal state changes."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class ImbalanceError(ValidationError):
    """Entry debits and credits differ by more than the tolerance."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(entry_imbalance(total_debit, total_credit))

    @property
    def difference(self) -> Decimal:
        return self.total_debit - self.total_credit


class UnknownAccountError(NotFoundError):
    """A line or query references an account missing from the chart."""

    def __init__(self, account_number: str):
        self.account_number = account_number
        super().__init__(account_not_found(account_number))


class EntryStatusError(ConflictError):
    """Operation not allowed in the entry's current status."""


class ClosedFiscalYearError(ConflictError):
    """Posting or change attempted in a closed fiscal year."""


class ReconciliationStateError(ConflictError):
    """Reconciliation is no longer in progress."""


def account_not_found(account_number: str) -> str:
    """Return message for missing account."""
    return f"Account {account_number} not found"


def journal_not_found(code: str) -> str:
    """Return message for missing journal."""
    return f"Journal '{code}' not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Entry {entry_id} not found"


def fiscal_year_not_found(year: int) -> str:
    """Return message for missing fiscal year."""
    return f"Fiscal year {year} not found"


def reconciliation_not_found(reconciliation_id: int) -> str:
    """Return message for missing reconciliation."""
    return f"Reconciliation {reconciliation_id} not found"


def entry_imbalance(total_debit: Decimal, total_credit: Decimal) -> str:
    """Return message for an unbalanced entry."""
    return (
        f"Entry is not balanced: total debit {total_debit:.2f} "
        f"!= total credit {total_credit:.2f}"
    )


def entry_already_validated(entry_id: int) -> str:
    """Return message when a validated entry is changed or re-validated."""
    return f"Entry {entry_id} is already validated"


def account_delete_blocked(account_number: str, line_count: int) -> str:
    """Return message when an account is referenced by entry lines."""
    return (
        f"Cannot delete account {account_number}: it is used by "
        f"{line_count} entry line{'s' if line_count != 1 else ''}. "
        "Deactivate it instead."
    )


def date_range_inverted(start, end) -> str:
    """Return message for a start date after the end date."""
    return f"Start date {start} is after end date {end}"
