"""Tests for LetteringService."""

from datetime import date
from decimal import Decimal

import pytest

from compta.domain.entities import LineInput
from compta.domain.errors import (
    ConflictError,
    ImbalanceError,
    NotFoundError,
    ValidationError,
)
from compta.domain.lettering import lettering_code


def _line_on(entry_service, entry_id, account_number):
    entry = entry_service.get_entry(entry_id)
    return next(l.id for l in entry.lines if l.account_number == account_number)


@pytest.fixture
def invoice_and_payment(entry_service, post_entry):
    invoice = post_entry("411", "701", 500, day=date(2024, 1, 5), journal="VE")
    payment = post_entry("521", "411", 500, day=date(2024, 1, 20), journal="BQ")
    return (
        _line_on(entry_service, invoice, "411"),
        _line_on(entry_service, payment, "411"),
    )


def test_lettering_code_sequence():
    assert lettering_code(0) == "AA"
    assert lettering_code(1) == "AB"
    assert lettering_code(26) == "BA"
    assert lettering_code(675) == "ZZ"
    assert lettering_code(676) == "AAA"


def test_letter_lines(lettering_service, invoice_and_payment):
    code = lettering_service.letter_lines(invoice_and_payment)

    assert code == "AA"
    assert lettering_service.list_unlettered("411") == []


def test_next_code_skips_used(lettering_service, entry_service, post_entry, invoice_and_payment):
    lettering_service.letter_lines(invoice_and_payment)
    invoice = post_entry("411", "701", 80, day=date(2024, 2, 5), journal="VE")
    payment = post_entry("521", "411", 80, day=date(2024, 2, 9), journal="BQ")

    code = lettering_service.letter_lines(
        [_line_on(entry_service, invoice, "411"), _line_on(entry_service, payment, "411")]
    )
    assert code == "AB"


def test_letter_unbalanced_lines(lettering_service, entry_service, post_entry):
    invoice = post_entry("411", "701", 500, journal="VE")
    payment = post_entry("521", "411", 300, journal="BQ")

    with pytest.raises(ImbalanceError):
        lettering_service.letter_lines(
            [_line_on(entry_service, invoice, "411"), _line_on(entry_service, payment, "411")]
        )


def test_letter_non_letterable_account(lettering_service, entry_service, post_entry):
    first = post_entry("601", "521", 100)
    second = post_entry("521", "601", 100)

    with pytest.raises(ValidationError, match="not letterable"):
        lettering_service.letter_lines(
            [_line_on(entry_service, first, "601"), _line_on(entry_service, second, "601")]
        )


def test_letter_lines_across_accounts(lettering_service, entry_service, post_entry):
    entry_id = post_entry("411", "401", 100)
    entry = entry_service.get_entry(entry_id)

    with pytest.raises(ValidationError, match="several accounts"):
        lettering_service.letter_lines([l.id for l in entry.lines])


def test_letter_draft_lines(lettering_service, entry_service, seeded_chart):
    entry_id = entry_service.create_entry(
        "OD",
        date(2024, 1, 5),
        "Brouillard",
        [LineInput("411", debit=Decimal("10")), LineInput("411", credit=Decimal("10"))],
    )
    entry = entry_service.get_entry(entry_id)
    with pytest.raises(ValidationError, match="draft"):
        lettering_service.letter_lines([l.id for l in entry.lines])


def test_letter_already_lettered(lettering_service, invoice_and_payment):
    lettering_service.letter_lines(invoice_and_payment)
    with pytest.raises(ConflictError, match="already lettered"):
        lettering_service.letter_lines(invoice_and_payment)


def test_letter_missing_lines(lettering_service, seeded_chart):
    with pytest.raises(NotFoundError):
        lettering_service.letter_lines([998, 999])


def test_letter_needs_two_lines(lettering_service, invoice_and_payment):
    with pytest.raises(ValidationError, match="at least 2"):
        lettering_service.letter_lines(invoice_and_payment[:1])


def test_explicit_code(lettering_service, invoice_and_payment):
    assert lettering_service.letter_lines(invoice_and_payment, code="xy") == "XY"


def test_unletter(lettering_service, invoice_and_payment):
    code = lettering_service.letter_lines(invoice_and_payment)

    assert lettering_service.unletter(code) == 2
    assert len(lettering_service.list_unlettered("411")) == 2
    with pytest.raises(NotFoundError):
        lettering_service.unletter(code)
