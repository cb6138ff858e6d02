"""Domain model entities for compta.

These are pure data classes representing accounting concepts, independent of
the database schema. Derived report structures (ledger rows, statements) live
here too so that services and the CLI share one vocabulary.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

ZERO = Decimal("0.00")


class NormalSense(str, Enum):
    """Side on which an account normally carries its balance."""

    DEBIT = "Debit"
    CREDIT = "Credit"


class AccountType(str, Enum):
    """Management type of an account."""

    TIERS = "Tiers"
    TRESORERIE = "Tresorerie"
    BILAN = "Bilan"
    RESULTAT = "Resultat"
    AUTRE = "Autre"


class JournalType(str, Enum):
    """Kind of accounting journal."""

    VENTE = "Vente"
    ACHAT = "Achat"
    TRESORERIE = "Tresorerie"
    OPERATIONS_DIVERSES = "Operations Diverses"


class EntryStatus(str, Enum):
    """Journal entry lifecycle. VALIDATED is terminal."""

    DRAFT = "Draft"
    VALIDATED = "Validated"


class FiscalYearStatus(str, Enum):
    """Fiscal year lifecycle."""

    OPEN = "Open"
    CLOSED = "Closed"


class ReconciliationStatus(str, Enum):
    """Bank reconciliation lifecycle."""

    IN_PROGRESS = "In progress"
    RECONCILED = "Reconciled"
    CANCELLED = "Cancelled"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    number: str
    label: str
    account_class: int
    normal_sense: NormalSense
    account_type: AccountType
    is_letterable: bool
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Journal:
    """Accounting journal (sales, purchases, bank, ...)."""

    id: int
    code: str
    label: str
    journal_type: JournalType
    counterpart_account_number: Optional[str]
    is_active: bool


@dataclass(frozen=True)
class FiscalYear:
    """Fiscal period entries are attached to."""

    id: int
    year: int
    start_date: date
    end_date: date
    status: FiscalYearStatus
    closed_at: Optional[datetime] = None

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class LineInput:
    """A line as submitted for a new or edited entry."""

    account_number: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    label: Optional[str] = None


@dataclass(frozen=True)
class EntryLine:
    """Persisted journal entry line."""

    id: int
    entry_id: int
    position: int
    account_number: str
    label: str
    debit: Decimal
    credit: Decimal
    lettering_code: Optional[str] = None


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry (écriture) with its ordered lines."""

    id: int
    piece_number: str
    journal_code: str
    date: date
    label: str
    status: EntryStatus
    total_debit: Decimal
    total_credit: Decimal
    lines: tuple[EntryLine, ...]
    created_at: datetime
    validated_at: Optional[datetime] = None

    @property
    def is_validated(self) -> bool:
        return self.status == EntryStatus.VALIDATED


@dataclass(frozen=True)
class PostedLine:
    """Entry line joined with its parent entry header."""

    line_id: int
    entry_id: int
    piece_number: str
    journal_code: str
    date: date
    entry_label: str
    account_number: str
    label: str
    debit: Decimal
    credit: Decimal
    status: EntryStatus
    lettering_code: Optional[str] = None


@dataclass(frozen=True)
class BalanceCheck:
    """Outcome of checking that debits equal credits."""

    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool

    @property
    def difference(self) -> Decimal:
        return self.total_debit - self.total_credit


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class LedgerRow:
    """Opening, movement and closing figures of one account over a range."""

    account_number: str
    account_label: str
    normal_sense: NormalSense
    opening_debit: Decimal = ZERO
    opening_credit: Decimal = ZERO
    period_debit: Decimal = ZERO
    period_credit: Decimal = ZERO
    closing_debit: Decimal = ZERO
    closing_credit: Decimal = ZERO

    @property
    def account_class(self) -> int:
        return int(self.account_number[0])

    @property
    def opening_net(self) -> Decimal:
        """Opening balance as debit minus credit."""
        return self.opening_debit - self.opening_credit

    @property
    def closing_net(self) -> Decimal:
        """Closing balance as debit minus credit."""
        return self.closing_debit - self.closing_credit

    @property
    def closing_balance(self) -> Decimal:
        """Closing balance, positive when on the account's normal side."""
        if self.normal_sense == NormalSense.CREDIT:
            return -self.closing_net
        return self.closing_net

    @property
    def has_activity(self) -> bool:
        return any(
            amount != ZERO
            for amount in (
                self.opening_debit,
                self.opening_credit,
                self.period_debit,
                self.period_credit,
            )
        )


@dataclass(frozen=True)
class BalanceGenerale:
    """Balance Générale table with column totals."""

    period: DateRange
    rows: tuple[LedgerRow, ...]
    total_opening_debit: Decimal
    total_opening_credit: Decimal
    total_period_debit: Decimal
    total_period_credit: Decimal
    total_closing_debit: Decimal
    total_closing_credit: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class LedgerMovement:
    """One posting in a Grand Livre, with the running balance after it."""

    entry_id: int
    line_id: int
    date: date
    journal_code: str
    piece_number: str
    label: str
    debit: Decimal
    credit: Decimal
    running_balance: Decimal
    lettering_code: Optional[str] = None


@dataclass(frozen=True)
class GrandLivre:
    """Chronological postings of one account over a range."""

    account_number: str
    account_label: str
    period: DateRange
    opening_balance: Decimal
    movements: tuple[LedgerMovement, ...]
    closing_balance: Decimal

    @property
    def total_debit(self) -> Decimal:
        return sum((m.debit for m in self.movements), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((m.credit for m in self.movements), ZERO)


@dataclass(frozen=True)
class StatementItem:
    """Single account line of a financial statement."""

    account_number: str
    label: str
    amount: Decimal


@dataclass(frozen=True)
class StatementSection:
    """Named group of statement items with its total."""

    name: str
    items: tuple[StatementItem, ...] = ()
    total: Decimal = ZERO


@dataclass(frozen=True)
class Bilan:
    """Balance sheet at a date."""

    as_of: date
    actif: StatementSection
    passif: StatementSection
    resultat: Decimal
    equilibre: bool


@dataclass(frozen=True)
class CompteDeResultat:
    """Income statement over a period."""

    period: DateRange
    charges: StatementSection
    produits: StatementSection
    resultat_net: Decimal


@dataclass(frozen=True)
class ReconciliationLine:
    """Book posting included in a bank reconciliation."""

    id: int
    reconciliation_id: int
    entry_id: int
    line_id: int
    label: str
    date: date
    debit: Decimal
    credit: Decimal
    is_reconciled: bool = False
    reconciled_date: Optional[date] = None


@dataclass(frozen=True)
class Reconciliation:
    """Bank reconciliation of a treasury account over a period."""

    id: int
    account_number: str
    start_date: date
    end_date: date
    opening_book_balance: Decimal
    statement_balance: Decimal
    status: ReconciliationStatus
    lines: tuple[ReconciliationLine, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    finalized_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReconciliationSummary:
    """Computed balances of a reconciliation."""

    reconciliation_id: int
    opening_book_balance: Decimal
    book_balance: Decimal
    reconciled_balance: Decimal
    statement_balance: Decimal
    difference: Decimal
    unreconciled_count: int
