"""Tests for date parser with relative dates and periods."""

import pytest
from datetime import date, timedelta
from compta.utils.date_parser import parse_date, get_date_range


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_day_first_date():
    """French-style dates are read day first."""
    assert parse_date("05/01/2024") == date(2024, 1, 5)


def test_parse_today():
    assert parse_date("today") == date.today()
    assert parse_date("aujourd'hui") == date.today()


def test_parse_yesterday():
    assert parse_date("Yesterday") == date.today() - timedelta(days=1)
    assert parse_date("hier") == date.today() - timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month'."""
    result = parse_date("last month")
    today = date.today()
    if today.month == 1:
        expected = date(today.year - 1, 12, 1)
    else:
        expected = date(today.year, today.month - 1, 1)
    assert result == expected


def test_parse_end_of_month():
    result = parse_date("end of month")
    assert result.month == date.today().month
    assert (result + timedelta(days=1)).day == 1


def test_parse_invalid_date():
    with pytest.raises(ValueError):
        parse_date("not a date")


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-month", (date(2024, 3, 1), date(2024, 3, 31))),
        ("this-quarter", (date(2024, 1, 1), date(2024, 3, 31))),
        ("this-year", (date(2024, 1, 1), date(2024, 12, 31))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-quarter", (date(2023, 10, 1), date(2023, 12, 31))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=date(2024, 3, 14)) == expected


def test_get_date_range_unknown_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
