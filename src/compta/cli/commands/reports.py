"""Report commands: Balance Générale, Grand Livre, Bilan, Compte de Résultat."""

from datetime import date

import click
from compta.cli.account_resolution import resolve_account_or_exit
from compta.cli.date_filters import (
    parse_date_or_exit,
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from compta.cli.error_handling import handle_domain_error
from compta.domain.account import AccountService
from compta.domain.entities import StatementSection
from compta.domain.errors import DomainError
from compta.domain.ledger import LedgerService
from compta.domain.statements import StatementService
from compta.utils.amount_parser import format_amount


def _amount(value) -> str:
    return format_amount(value) if value else ""


def _date_range(ctx, kwargs: dict, default_range=None):
    period_flags = pop_period_flags(kwargs)
    return resolve_cli_date_range(
        ctx,
        start_date=kwargs.get("start_date"),
        end_date=kwargs.get("end_date"),
        period_flags=period_flags,
        default_range=default_range,
    )


def _echo_section(section: StatementSection) -> None:
    click.echo(f"\n{section.name}")
    click.echo("-" * 70)
    for item in section.items:
        click.echo(f"{item.account_number:8s} {item.label:42.42s} {format_amount(item.amount):>18s}")
    click.echo(f"{'Total ' + section.name:51s} {format_amount(section.total):>18s}")


@click.command("balance")
@period_options
@click.option("--all-accounts", is_flag=True, help="Include accounts without any figure")
@click.pass_context
def balance(ctx, all_accounts: bool, **kwargs):
    """Show the Balance Générale (trial balance)."""
    start, end = _date_range(ctx, kwargs)
    service = LedgerService(ctx.obj["db"])
    try:
        table = service.build_balance_generale(start, end, include_unused=all_accounts)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not table.rows:
        click.echo("No validated entries found.")
        return

    click.echo(
        f"{'Account':8s} {'Label':28s} {'Open D':>12s} {'Open C':>12s} "
        f"{'Debit':>12s} {'Credit':>12s} {'Close D':>12s} {'Close C':>12s}"
    )
    click.echo("-" * 116)
    for row in table.rows:
        click.echo(
            f"{row.account_number:8s} {row.account_label:28.28s} "
            f"{_amount(row.opening_debit):>12s} {_amount(row.opening_credit):>12s} "
            f"{_amount(row.period_debit):>12s} {_amount(row.period_credit):>12s} "
            f"{_amount(row.closing_debit):>12s} {_amount(row.closing_credit):>12s}"
        )
    click.echo("-" * 116)
    click.echo(
        f"{'Totals':37s} "
        f"{format_amount(table.total_opening_debit):>12s} {format_amount(table.total_opening_credit):>12s} "
        f"{format_amount(table.total_period_debit):>12s} {format_amount(table.total_period_credit):>12s} "
        f"{format_amount(table.total_closing_debit):>12s} {format_amount(table.total_closing_credit):>12s}"
    )
    if not table.is_balanced:
        click.echo("Warning: the balance is not balanced.", err=True)


@click.command("ledger")
@click.argument("account", metavar="ACCOUNT")
@period_options
@click.pass_context
def ledger(ctx, account: str, **kwargs):
    """Show the Grand Livre of an account.

    ACCOUNT can be an account number or label.
    """
    start, end = _date_range(ctx, kwargs)
    acc = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    service = LedgerService(ctx.obj["db"])
    try:
        grand_livre = service.build_grand_livre(acc.number, start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"{grand_livre.account_number} - {grand_livre.account_label}")
    click.echo("-" * 100)
    click.echo(f"{'Opening balance':70s} {format_amount(grand_livre.opening_balance):>16s}")
    for movement in grand_livre.movements:
        click.echo(
            f"{movement.date} {movement.journal_code:4s} {movement.piece_number:16s} "
            f"{movement.label:25.25s} {_amount(movement.debit):>12s} {_amount(movement.credit):>12s} "
            f"{format_amount(movement.running_balance):>16s}"
        )
    click.echo("-" * 100)
    click.echo(
        f"{'Totals':59s} {format_amount(grand_livre.total_debit):>12s} "
        f"{format_amount(grand_livre.total_credit):>12s}"
    )
    click.echo(f"{'Closing balance':70s} {format_amount(grand_livre.closing_balance):>16s}")


@click.command("bilan")
@click.option("--as-of", default="today", show_default=True, help="Reporting date")
@click.pass_context
def bilan(ctx, as_of: str):
    """Show the Bilan (balance sheet)."""
    as_of_date = parse_date_or_exit(ctx, as_of, "date")
    service = StatementService(ctx.obj["db"])
    statement = service.build_bilan(as_of_date)

    click.echo(f"Bilan au {statement.as_of}")
    _echo_section(statement.actif)
    _echo_section(statement.passif)
    click.echo(f"\nRésultat: {format_amount(statement.resultat)}")
    if statement.equilibre:
        click.echo("Equilibre: yes")
    else:
        click.echo("Equilibre: NO", err=True)


@click.command("resultat")
@period_options
@click.pass_context
def resultat(ctx, **kwargs):
    """Show the Compte de Résultat (income statement).

    Defaults to the current calendar year.
    """
    today = date.today()
    start, end = _date_range(ctx, kwargs, default_range=(today.replace(month=1, day=1), today))
    service = StatementService(ctx.obj["db"])
    try:
        statement = service.build_compte_de_resultat(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Compte de résultat {start or '...'} -> {end or '...'}")
    _echo_section(statement.charges)
    _echo_section(statement.produits)
    click.echo(f"\nRésultat net: {format_amount(statement.resultat_net)}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(balance)
    cli.add_command(ledger)
    cli.add_command(bilan)
    cli.add_command(resultat)
