"""CLI helpers for date and period options."""

from datetime import date

import click

from compta.utils.date_parser import PERIODS, get_date_range, parse_date

PERIOD_FLAGS = PERIODS


def period_options(command):
    """Add --start-date/--end-date and the period flags to a command."""
    for flag in reversed(PERIOD_FLAGS):
        command = click.option(
            f"--{flag}",
            flag.replace("-", "_"),
            is_flag=True,
            help=f"Limit to {flag.replace('-', ' ')}",
        )(command)
    command = click.option(
        "--end-date", help="End date (YYYY-MM-DD, DD/MM/YYYY or relative like 'today')"
    )(command)
    command = click.option(
        "--start-date", help="Start date (YYYY-MM-DD, DD/MM/YYYY or relative like 'last month')"
    )(command)
    return command


def pop_period_flags(kwargs: dict) -> dict[str, bool]:
    """Remove the period flags from command kwargs, keyed by period name."""
    return {flag: kwargs.pop(flag.replace("-", "_"), False) for flag in PERIOD_FLAGS}


def parse_date_or_exit(ctx, value: str, what: str = "date") -> date:
    """Parse a date option or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {what}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option ("
            + ", ".join(f"--{flag}" for flag in PERIOD_FLAGS)
            + ") can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    else:
        if start_date:
            start = parse_date_or_exit(ctx, start_date, "start date")
        if end_date:
            end = parse_date_or_exit(ctx, end_date, "end date")

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end
