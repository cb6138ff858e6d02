"""Financial statements: Bilan and Compte de Résultat."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from compta.database.base import Database
from compta.domain.entities import (
    ZERO,
    Bilan,
    CompteDeResultat,
    DateRange,
    StatementItem,
    StatementSection,
)
from compta.domain.ledger import check_date_range, net_by_account
from compta.utils.amount_parser import BALANCE_TOLERANCE

logger = logging.getLogger(__name__)

PROFIT_ACCOUNT = ("131", "Résultat net : bénéfice")
LOSS_ACCOUNT = ("139", "Résultat net : perte")

RESULT_CLASSES = (6, 7, 8)


def _section(name: str, items: list[StatementItem]) -> StatementSection:
    return StatementSection(
        name=name,
        items=tuple(items),
        total=sum((item.amount for item in items), ZERO),
    )


class StatementService:
    """Service composing financial statements from validated lines.

    Accounts are placed by class: class 1 on the Passif, classes 2-3 on the
    Actif, classes 4-5 on the side of their balance, classes 6-8 into the
    result. Class 9 is off-balance and left out.
    """

    def __init__(self, db: Database):
        self.db = db

    def _labels(self) -> dict[str, str]:
        return {account.number: account.label for account in self.db.list_accounts()}

    def build_bilan(self, as_of_date: date) -> Bilan:
        """Build the balance sheet at a date.

        Uses cumulative balances of Validated lines up to as_of_date. The
        result of classes 6-8 appears as account 131 (profit, Passif) or 139
        (loss, Actif). Imbalance is reported, never corrected.

        Args:
            as_of_date: Inclusive reporting date

        Returns:
            Bilan with Actif and Passif sections
        """
        labels = self._labels()
        nets = net_by_account(self.db.find_validated_lines(end_date=as_of_date))

        actif: list[StatementItem] = []
        passif: list[StatementItem] = []
        result_net = ZERO
        for number in sorted(nets):
            net = nets[number]
            account_class = int(number[0])
            label = labels.get(number, number)

            if account_class in RESULT_CLASSES:
                result_net += net
                continue
            if net == ZERO or account_class == 9:
                continue

            if account_class == 1:
                passif.append(StatementItem(number, label, -net))
            elif account_class in (2, 3):
                actif.append(StatementItem(number, label, net))
            elif net > 0:
                actif.append(StatementItem(number, label, net))
            else:
                passif.append(StatementItem(number, label, -net))

        # Products are credits, so the profit is minus the net debit
        resultat = -result_net
        if resultat > 0:
            passif.append(StatementItem(*PROFIT_ACCOUNT, resultat))
        elif resultat < 0:
            actif.append(StatementItem(*LOSS_ACCOUNT, -resultat))

        actif_section = _section("Actif", actif)
        passif_section = _section("Passif", passif)
        equilibre = abs(actif_section.total - passif_section.total) <= BALANCE_TOLERANCE
        if not equilibre:
            logger.warning(
                "Bilan at %s is not balanced: actif %s, passif %s",
                as_of_date,
                actif_section.total,
                passif_section.total,
            )

        return Bilan(
            as_of=as_of_date,
            actif=actif_section,
            passif=passif_section,
            resultat=resultat,
            equilibre=equilibre,
        )

    def build_compte_de_resultat(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> CompteDeResultat:
        """Build the income statement for a period.

        Args:
            start_date: Inclusive start of the period
            end_date: Inclusive end of the period

        Returns:
            CompteDeResultat where resultat_net = produits - charges

        Raises:
            ValidationError: If start_date is after end_date
        """
        check_date_range(start_date, end_date)
        labels = self._labels()
        nets = net_by_account(
            self.db.find_validated_lines(start_date=start_date, end_date=end_date)
        )

        charges: list[StatementItem] = []
        produits: list[StatementItem] = []
        for number in sorted(nets):
            net: Decimal = nets[number]
            account_class = int(number[0])
            if account_class not in RESULT_CLASSES or net == ZERO:
                continue
            label = labels.get(number, number)
            if account_class == 6 or (account_class == 8 and net > 0):
                charges.append(StatementItem(number, label, net))
            else:
                produits.append(StatementItem(number, label, -net))

        charges_section = _section("Charges", charges)
        produits_section = _section("Produits", produits)
        return CompteDeResultat(
            period=DateRange(start=start_date, end=end_date),
            charges=charges_section,
            produits=produits_section,
            resultat_net=produits_section.total - charges_section.total,
        )
