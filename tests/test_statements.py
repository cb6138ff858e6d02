"""Tests for StatementService: Bilan and Compte de Résultat."""

from datetime import date
from decimal import Decimal

from compta.domain.entities import EntryStatus, LineInput

DEC_31 = date(2024, 12, 31)


def _items(section):
    return {item.account_number: item.amount for item in section.items}


def test_bilan_with_profit(statement_service, post_entry):
    post_entry("521", "101", 10000, day=date(2024, 1, 2))  # capital
    post_entry("601", "401", 3000, day=date(2024, 2, 1))  # purchase on credit
    post_entry("411", "701", 5000, day=date(2024, 3, 1))  # sale on credit

    bilan = statement_service.build_bilan(DEC_31)

    assert _items(bilan.actif) == {"411": Decimal("5000"), "521": Decimal("10000")}
    assert _items(bilan.passif) == {
        "101": Decimal("10000"),
        "401": Decimal("3000"),
        "131": Decimal("2000"),
    }
    assert bilan.resultat == Decimal("2000")
    assert bilan.actif.total == bilan.passif.total == Decimal("15000")
    assert bilan.equilibre is True


def test_bilan_with_loss(statement_service, post_entry):
    post_entry("521", "101", 1000, day=date(2024, 1, 2))
    post_entry("601", "521", 400, day=date(2024, 2, 1))

    bilan = statement_service.build_bilan(DEC_31)

    assert bilan.resultat == Decimal("-400")
    assert _items(bilan.actif)["139"] == Decimal("400")
    assert bilan.equilibre is True


def test_bilan_treasury_overdraft_goes_to_passif(statement_service, post_entry):
    post_entry("601", "521", 250, day=date(2024, 2, 1))

    bilan = statement_service.build_bilan(DEC_31)

    assert _items(bilan.passif)["521"] == Decimal("250")
    assert "521" not in _items(bilan.actif)


def test_bilan_is_cumulative_up_to_date(statement_service, post_entry):
    post_entry("521", "101", 1000, day=date(2024, 1, 2))
    post_entry("521", "101", 500, day=date(2024, 6, 1))

    bilan = statement_service.build_bilan(date(2024, 3, 31))
    assert _items(bilan.actif)["521"] == Decimal("1000")


def test_bilan_reports_unbalanced_seed(statement_service, temp_db, seeded_chart):
    temp_db.insert_entry(
        piece_number="OD-2024-99999",
        journal_code="OD",
        date=date(2024, 1, 15),
        label="Corrupt",
        lines=[LineInput("521", debit=Decimal("1000")), LineInput("101", credit=Decimal("900"))],
        status=EntryStatus.VALIDATED,
    )

    bilan = statement_service.build_bilan(DEC_31)

    assert bilan.equilibre is False
    assert bilan.actif.total == Decimal("1000")
    assert bilan.passif.total == Decimal("900")


def test_empty_bilan_is_balanced(statement_service, seeded_chart):
    bilan = statement_service.build_bilan(DEC_31)
    assert bilan.actif.items == ()
    assert bilan.resultat == Decimal("0")
    assert bilan.equilibre is True


def test_compte_de_resultat(statement_service, post_entry):
    post_entry("601", "401", 3000, day=date(2024, 2, 1))
    post_entry("411", "701", 5000, day=date(2024, 3, 1))
    post_entry("411", "701", 700, day=date(2025, 1, 5))

    statement = statement_service.build_compte_de_resultat(date(2024, 1, 1), DEC_31)

    assert _items(statement.charges) == {"601": Decimal("3000")}
    assert _items(statement.produits) == {"701": Decimal("5000")}
    assert statement.charges.total == Decimal("3000")
    assert statement.produits.total == Decimal("5000")
    assert statement.resultat_net == Decimal("2000")


def test_compte_de_resultat_matches_bilan_result(statement_service, post_entry):
    post_entry("601", "521", 800, day=date(2024, 2, 1))
    post_entry("521", "701", 1100, day=date(2024, 3, 1))

    statement = statement_service.build_compte_de_resultat(None, DEC_31)
    bilan = statement_service.build_bilan(DEC_31)

    assert statement.resultat_net == bilan.resultat == Decimal("300")
