"""Journal entry commands."""

import click
from compta.cli.date_filters import (
    parse_date_or_exit,
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from compta.cli.error_handling import handle_domain_error
from compta.domain.entities import ZERO, EntryStatus, JournalEntry, LineInput
from compta.domain.entry import EntryService
from compta.domain.errors import DomainError
from compta.utils.amount_parser import format_amount, parse_amount


def parse_line_spec(spec: str) -> LineInput:
    """Parse an ACCOUNT:DEBIT:CREDIT[:LABEL] line option.

    Empty amounts mean zero, so "601:1000:" and "401::1000" are valid.

    Raises:
        ValueError: If the spec is malformed or an amount cannot be parsed
    """
    parts = spec.split(":", 3)
    if len(parts) < 3:
        raise ValueError(f"Invalid line '{spec}': expected ACCOUNT:DEBIT:CREDIT[:LABEL]")
    account_number, debit, credit = (part.strip() for part in parts[:3])
    label = parts[3].strip() if len(parts) > 3 and parts[3].strip() else None
    return LineInput(
        account_number=account_number,
        debit=parse_amount(debit) if debit else ZERO,
        credit=parse_amount(credit) if credit else ZERO,
        label=label,
    )


def _echo_entry(entry: JournalEntry) -> None:
    click.echo(f"Entry {entry.id}  {entry.piece_number}  [{entry.status.value}]")
    click.echo(f"Journal: {entry.journal_code}   Date: {entry.date}")
    click.echo(f"Label:   {entry.label}")
    click.echo("-" * 78)
    for line in entry.lines:
        debit = format_amount(line.debit) if line.debit else ""
        credit = format_amount(line.credit) if line.credit else ""
        lettering = f" ({line.lettering_code})" if line.lettering_code else ""
        click.echo(
            f"{line.id:5d} {line.account_number:8s} {line.label:30.30s} "
            f"{debit:>14s} {credit:>14s}{lettering}"
        )
    click.echo("-" * 78)
    click.echo(
        f"{'Totals':45s} {format_amount(entry.total_debit):>14s} "
        f"{format_amount(entry.total_credit):>14s}"
    )


@click.group()
def entry_group():
    """Record and validate journal entries."""
    pass


@entry_group.command("add")
@click.argument("journal", metavar="JOURNAL")
@click.argument("label", metavar="LABEL")
@click.option("--date", "entry_date", default="today", show_default=True, help="Entry date")
@click.option(
    "--line",
    "line_specs",
    multiple=True,
    required=True,
    help="Line as ACCOUNT:DEBIT:CREDIT[:LABEL] (repeat for each line)",
)
@click.option("--piece", help="Piece number (generated when omitted)")
@click.option("--validate", is_flag=True, help="Validate the entry immediately")
@click.pass_context
def add_entry(ctx, journal: str, label: str, entry_date: str, line_specs: tuple[str, ...], piece: str | None, validate: bool):
    """Record a journal entry.

    The entry is saved as a draft unless --validate is given.

    Examples:
        compta entry add AC "Facture F-102" --line 6011:1000: --line 4011::1000
        compta entry add BQ "Règlement client" --date 15/01/2024 \\
            --line 5210:500: --line 4111::500 --validate
    """
    day = parse_date_or_exit(ctx, entry_date)
    try:
        lines = [parse_line_spec(spec) for spec in line_specs]
    except ValueError as e:
        handle_domain_error(ctx, e)

    service = EntryService(ctx.obj["db"])
    try:
        entry_id = service.create_entry(
            journal_code=journal,
            date=day,
            label=label,
            lines=lines,
            piece_number=piece,
            validate=validate,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    entry = service.require_entry(entry_id)
    status = "validated" if entry.is_validated else "saved as draft"
    click.echo(f"Entry {entry.id} ({entry.piece_number}) {status}")


@entry_group.command("list")
@period_options
@click.option("--journal", help="Only entries of this journal")
@click.option("--status", type=click.Choice([s.value for s in EntryStatus]), help="Only entries with this status")
@click.option("--account", help="Only entries with a line on this account")
@click.pass_context
def list_entries(ctx, journal: str | None, status: str | None, account: str | None, **kwargs):
    """List journal entries."""
    period_flags = pop_period_flags(kwargs)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=kwargs.get("start_date"),
        end_date=kwargs.get("end_date"),
        period_flags=period_flags,
    )

    service = EntryService(ctx.obj["db"])
    entries = service.list_entries(
        start_date=start,
        end_date=end,
        journal_code=journal,
        status=EntryStatus(status) if status else None,
        account_number=account,
    )
    if not entries:
        click.echo("No entries found.")
        return

    for entry in entries:
        click.echo(
            f"{entry.id:5d} | {entry.date} | {entry.piece_number:16s} | {entry.label:30.30s} | "
            f"{format_amount(entry.total_debit):>14s} | {entry.status.value}"
        )


@entry_group.command("show")
@click.argument("entry_id", type=int)
@click.pass_context
def show_entry(ctx, entry_id: int):
    """Show an entry with its lines."""
    service = EntryService(ctx.obj["db"])
    try:
        entry = service.require_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    _echo_entry(entry)


@entry_group.command("validate")
@click.argument("entry_id", type=int)
@click.pass_context
def validate_entry(ctx, entry_id: int):
    """Validate a draft entry. Validated entries can no longer change."""
    service = EntryService(ctx.obj["db"])
    try:
        entry = service.validate_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Entry {entry.id} ({entry.piece_number}) validated")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.pass_context
def delete_entry(ctx, entry_id: int):
    """Delete a draft entry."""
    service = EntryService(ctx.obj["db"])
    try:
        service.delete_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {entry_id}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
