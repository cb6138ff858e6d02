"""Bank reconciliation commands."""

import click
from compta.cli.date_filters import parse_date_or_exit
from compta.cli.error_handling import handle_domain_error
from compta.domain.errors import DomainError
from compta.domain.reconciliation import ReconciliationService
from compta.utils.amount_parser import format_amount, parse_amount


@click.group()
def reconcile_group():
    """Reconcile treasury accounts with bank statements."""
    pass


@reconcile_group.command("start")
@click.argument("account", metavar="ACCOUNT")
@click.option("--start-date", required=True, help="First day of the statement")
@click.option("--end-date", required=True, help="Last day of the statement")
@click.option("--statement-balance", required=True, help="Closing balance on the statement")
@click.pass_context
def start(ctx, account: str, start_date: str, end_date: str, statement_balance: str):
    """Start reconciling a treasury account.

    Examples:
        compta reconcile start 5210 --start-date 2024-01-01 --end-date 2024-01-31 \\
            --statement-balance "1 250 000"
    """
    start_day = parse_date_or_exit(ctx, start_date, "start date")
    end_day = parse_date_or_exit(ctx, end_date, "end date")
    service = ReconciliationService(ctx.obj["db"])
    try:
        balance = parse_amount(statement_balance)
        reconciliation_id = service.start_reconciliation(account, start_day, end_day, balance)
    except ValueError as e:
        handle_domain_error(ctx, e)

    reconciliation = service.require_reconciliation(reconciliation_id)
    click.echo(
        f"Started reconciliation {reconciliation_id} for {account} "
        f"with {len(reconciliation.lines)} line(s)"
    )


@reconcile_group.command("list")
@click.option("--account", help="Only reconciliations of this account")
@click.pass_context
def list_reconciliations(ctx, account: str | None):
    """List reconciliations."""
    service = ReconciliationService(ctx.obj["db"])
    reconciliations = service.list_reconciliations(account)
    if not reconciliations:
        click.echo("No reconciliations found.")
        return
    for rec in reconciliations:
        click.echo(
            f"{rec.id:4d} | {rec.account_number:8s} | {rec.start_date} -> {rec.end_date} | "
            f"{format_amount(rec.statement_balance):>14s} | {rec.status.value}"
        )


@reconcile_group.command("show")
@click.argument("reconciliation_id", type=int)
@click.pass_context
def show(ctx, reconciliation_id: int):
    """Show reconciliation lines and balances."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        reconciliation = service.require_reconciliation(reconciliation_id)
        summary = service.summarize(reconciliation_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Reconciliation {reconciliation.id} - {reconciliation.account_number} "
        f"{reconciliation.start_date} -> {reconciliation.end_date} [{reconciliation.status.value}]"
    )
    click.echo("-" * 80)
    for line in reconciliation.lines:
        mark = "x" if line.is_reconciled else " "
        debit = format_amount(line.debit) if line.debit else ""
        credit = format_amount(line.credit) if line.credit else ""
        click.echo(f"[{mark}] {line.id:5d} {line.date} {line.label:30.30s} {debit:>14s} {credit:>14s}")
    click.echo("-" * 80)
    click.echo(f"Opening book balance: {format_amount(summary.opening_book_balance):>16s}")
    click.echo(f"Book balance:         {format_amount(summary.book_balance):>16s}")
    click.echo(f"Reconciled balance:   {format_amount(summary.reconciled_balance):>16s}")
    click.echo(f"Statement balance:    {format_amount(summary.statement_balance):>16s}")
    click.echo(f"Difference:           {format_amount(summary.difference):>16s}")
    click.echo(f"Unreconciled lines:   {summary.unreconciled_count}")


@reconcile_group.command("tick")
@click.argument("reconciliation_id", type=int)
@click.argument("line_ids", type=int, nargs=-1, required=True)
@click.option("--date", "reconciled_date", help="Date the lines appear on the statement (defaults to today)")
@click.pass_context
def tick(ctx, reconciliation_id: int, line_ids: tuple[int, ...], reconciled_date: str | None):
    """Mark reconciliation lines as found on the statement."""
    day = parse_date_or_exit(ctx, reconciled_date) if reconciled_date else None
    service = ReconciliationService(ctx.obj["db"])
    try:
        for line_id in line_ids:
            service.tick_line(reconciliation_id, line_id, day)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Ticked {len(line_ids)} line(s)")


@reconcile_group.command("untick")
@click.argument("reconciliation_id", type=int)
@click.argument("line_ids", type=int, nargs=-1, required=True)
@click.pass_context
def untick(ctx, reconciliation_id: int, line_ids: tuple[int, ...]):
    """Clear the reconciled mark of lines."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        for line_id in line_ids:
            service.untick_line(reconciliation_id, line_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Unticked {len(line_ids)} line(s)")


@reconcile_group.command("finalize")
@click.argument("reconciliation_id", type=int)
@click.pass_context
def finalize(ctx, reconciliation_id: int):
    """Finalize a reconciliation whose difference is zero."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        service.finalize(reconciliation_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Reconciliation {reconciliation_id} finalized")


@reconcile_group.command("cancel")
@click.argument("reconciliation_id", type=int)
@click.pass_context
def cancel(ctx, reconciliation_id: int):
    """Cancel an in-progress reconciliation."""
    service = ReconciliationService(ctx.obj["db"])
    try:
        service.cancel(reconciliation_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Reconciliation {reconciliation_id} cancelled")


def register_commands(cli):
    """Register reconciliation commands with main CLI."""
    cli.add_command(reconcile_group, name="reconcile")
