"""Fiscal year commands."""

import click
from compta.cli.date_filters import parse_date_or_exit
from compta.cli.error_handling import handle_domain_error
from compta.domain.errors import DomainError
from compta.domain.fiscal_year import FiscalYearService


@click.group()
def fiscal_year_group():
    """Manage fiscal years."""
    pass


@fiscal_year_group.command("create")
@click.argument("year", type=int)
@click.option("--start-date", help="First day (defaults to January 1st)")
@click.option("--end-date", help="Last day (defaults to December 31st)")
@click.pass_context
def create_fiscal_year(ctx, year: int, start_date: str | None, end_date: str | None):
    """Open a fiscal year."""
    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    service = FiscalYearService(ctx.obj["db"])
    try:
        service.create_fiscal_year(year, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Opened fiscal year {year}")


@fiscal_year_group.command("list")
@click.pass_context
def list_fiscal_years(ctx):
    """List fiscal years."""
    service = FiscalYearService(ctx.obj["db"])
    fiscal_years = service.list_fiscal_years()
    if not fiscal_years:
        click.echo("No fiscal years found.")
        return

    for fy in fiscal_years:
        click.echo(f"{fy.year} | {fy.start_date} -> {fy.end_date} | {fy.status.value}")


@fiscal_year_group.command("close")
@click.argument("year", type=int)
@click.pass_context
def close_fiscal_year(ctx, year: int):
    """Close a fiscal year. Draft entries must be validated or deleted first."""
    service = FiscalYearService(ctx.obj["db"])
    try:
        service.close_fiscal_year(year)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Closed fiscal year {year}")


def register_commands(cli):
    """Register fiscal year commands with main CLI."""
    cli.add_command(fiscal_year_group, name="fiscal-year")
