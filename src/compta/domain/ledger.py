"""Ledger aggregation: account ledger rows, Balance Générale and Grand Livre."""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from compta.database.base import Database
from compta.domain.entities import (
    ZERO,
    Account,
    BalanceGenerale,
    DateRange,
    GrandLivre,
    LedgerMovement,
    LedgerRow,
    PostedLine,
)
from compta.domain.errors import UnknownAccountError, ValidationError, date_range_inverted
from compta.utils.amount_parser import BALANCE_TOLERANCE

logger = logging.getLogger(__name__)


def check_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    """Raise ValidationError when start_date is after end_date."""
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError(date_range_inverted(start_date, end_date))


def split_net(net: Decimal) -> tuple[Decimal, Decimal]:
    """Split a debit-minus-credit figure onto the debit or credit side."""
    if net > 0:
        return net, ZERO
    return ZERO, -net


def net_by_account(lines: Iterable[PostedLine]) -> dict[str, Decimal]:
    """Sum debit minus credit per account number."""
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for line in lines:
        totals[line.account_number] += line.debit - line.credit
    return totals


def make_row(
    account: Account,
    opening_net: Decimal,
    period_debit: Decimal,
    period_credit: Decimal,
) -> LedgerRow:
    """Build a ledger row from an opening net balance and period movements."""
    opening_debit, opening_credit = split_net(opening_net)
    closing_debit, closing_credit = split_net(opening_net + period_debit - period_credit)
    return LedgerRow(
        account_number=account.number,
        account_label=account.label,
        normal_sense=account.normal_sense,
        opening_debit=opening_debit,
        opening_credit=opening_credit,
        period_debit=period_debit,
        period_credit=period_credit,
        closing_debit=closing_debit,
        closing_credit=closing_credit,
    )


class LedgerService:
    """Service computing balances from validated entry lines.

    Only lines of Validated entries are aggregated. Results are never cached;
    every call recomputes from the stored lines.
    """

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_number: str) -> Account:
        account = self.db.get_account_by_number(account_number)
        if account is None:
            raise UnknownAccountError(account_number)
        return account

    def _opening_lines(self, account_number: Optional[str], start_date: Optional[date]):
        if start_date is None:
            return []
        return self.db.find_validated_lines(account_number=account_number, before=start_date)

    def build_ledger(
        self,
        account_number: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> LedgerRow:
        """Compute opening, period and closing figures of one account.

        Args:
            account_number: Account number
            start_date: Inclusive start of the period (None for no lower bound)
            end_date: Inclusive end of the period (None for no upper bound)

        Returns:
            LedgerRow; zero-filled when the account has no validated lines

        Raises:
            UnknownAccountError: If the account doesn't exist
            ValidationError: If start_date is after end_date
        """
        check_date_range(start_date, end_date)
        account = self._require_account(account_number)

        opening = self._opening_lines(account_number, start_date)
        period = self.db.find_validated_lines(
            account_number=account_number, start_date=start_date, end_date=end_date
        )
        return make_row(
            account,
            opening_net=sum((l.debit - l.credit for l in opening), ZERO),
            period_debit=sum((l.debit for l in period), ZERO),
            period_credit=sum((l.credit for l in period), ZERO),
        )

    def build_balance_generale(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_unused: bool = True,
    ) -> BalanceGenerale:
        """Build the Balance Générale for a period.

        An unbalanced table is reported through ``is_balanced`` and a warning;
        figures are never adjusted.

        Args:
            start_date: Inclusive start of the period
            end_date: Inclusive end of the period
            include_unused: If False, skip accounts without any figure

        Returns:
            BalanceGenerale with one row per account ordered by number

        Raises:
            ValidationError: If start_date is after end_date
        """
        check_date_range(start_date, end_date)

        opening = net_by_account(self._opening_lines(None, start_date))
        period_debit: dict[str, Decimal] = defaultdict(lambda: ZERO)
        period_credit: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for line in self.db.find_validated_lines(start_date=start_date, end_date=end_date):
            period_debit[line.account_number] += line.debit
            period_credit[line.account_number] += line.credit

        rows = []
        for account in self.db.list_accounts():
            row = make_row(
                account,
                opening_net=opening.get(account.number, ZERO),
                period_debit=period_debit.get(account.number, ZERO),
                period_credit=period_credit.get(account.number, ZERO),
            )
            if include_unused or row.has_activity:
                rows.append(row)

        totals = {
            name: sum((getattr(row, name) for row in rows), ZERO)
            for name in (
                "opening_debit",
                "opening_credit",
                "period_debit",
                "period_credit",
                "closing_debit",
                "closing_credit",
            )
        }
        is_balanced = all(
            abs(totals[f"{column}_debit"] - totals[f"{column}_credit"]) <= BALANCE_TOLERANCE
            for column in ("opening", "period", "closing")
        )
        if not is_balanced:
            logger.warning(
                "Balance générale %s..%s is not balanced: period %s/%s, closing %s/%s",
                start_date,
                end_date,
                totals["period_debit"],
                totals["period_credit"],
                totals["closing_debit"],
                totals["closing_credit"],
            )

        return BalanceGenerale(
            period=DateRange(start=start_date, end=end_date),
            rows=tuple(rows),
            total_opening_debit=totals["opening_debit"],
            total_opening_credit=totals["opening_credit"],
            total_period_debit=totals["period_debit"],
            total_period_credit=totals["period_credit"],
            total_closing_debit=totals["closing_debit"],
            total_closing_credit=totals["closing_credit"],
            is_balanced=is_balanced,
        )

    def build_grand_livre(
        self,
        account_number: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> GrandLivre:
        """List the postings of one account with a running balance.

        Balances are expressed as debit minus credit.

        Raises:
            UnknownAccountError: If the account doesn't exist
            ValidationError: If start_date is after end_date
        """
        check_date_range(start_date, end_date)
        account = self._require_account(account_number)

        opening_balance = sum(
            (l.debit - l.credit for l in self._opening_lines(account_number, start_date)), ZERO
        )
        running = opening_balance
        movements = []
        for line in self.db.find_validated_lines(
            account_number=account_number, start_date=start_date, end_date=end_date
        ):
            running += line.debit - line.credit
            movements.append(
                LedgerMovement(
                    entry_id=line.entry_id,
                    line_id=line.line_id,
                    date=line.date,
                    journal_code=line.journal_code,
                    piece_number=line.piece_number,
                    label=line.label or line.entry_label,
                    debit=line.debit,
                    credit=line.credit,
                    running_balance=running,
                    lettering_code=line.lettering_code,
                )
            )

        return GrandLivre(
            account_number=account.number,
            account_label=account.label,
            period=DateRange(start=start_date, end=end_date),
            opening_balance=opening_balance,
            movements=tuple(movements),
            closing_balance=running,
        )
