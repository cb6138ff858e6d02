"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from compta.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from compta.utils.date_parser import get_date_range, parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags={"this-month": True},
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"this-month": True},
    )
    assert (start, end) == get_date_range("this-month")


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-01",
        end_date="31/01/2024",
        period_flags={},
    )
    assert start == date(2024, 1, 1)
    assert end == date(2024, 1, 31)


def test_resolve_cli_date_range_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date="garbage", end_date=None, period_flags={})
    assert "Invalid start date" in capsys.readouterr().err


def test_resolve_cli_date_range_uses_default():
    default = (date(2024, 1, 1), date(2024, 6, 30))
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}, default_range=default
    ) == default


def test_pop_period_flags():
    kwargs = {"this_month": True, "last_year": False, "start_date": None}
    flags = pop_period_flags(kwargs)
    assert flags["this-month"] is True
    assert flags["this-year"] is False
    assert kwargs == {"start_date": None}
    assert flags["last-quarter"] is False


def test_period_options_accept_quarter_flags(cli_runner):
    @click.command()
    @period_options
    def show_range(**kwargs):
        ctx = click.get_current_context()
        start, end = resolve_cli_date_range(
            ctx,
            start_date=kwargs.pop("start_date"),
            end_date=kwargs.pop("end_date"),
            period_flags=pop_period_flags(kwargs),
        )
        click.echo(f"{start} {end}")

    result = cli_runner.invoke(show_range, ["--last-quarter"])
    assert result.exit_code == 0
    start, end = get_date_range("last-quarter")
    assert f"{start} {end}" in result.output

    result = cli_runner.invoke(show_range, ["--this-quarter", "--this-year"])
    assert result.exit_code == 1
    assert "--this-quarter" in result.output
