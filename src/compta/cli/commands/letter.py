"""Lettering commands."""

import click
from compta.cli.error_handling import handle_domain_error
from compta.domain.errors import DomainError
from compta.domain.lettering import LetteringService
from compta.utils.amount_parser import format_amount


@click.group()
def letter():
    """Letter third-party account lines."""
    pass


@letter.command("apply")
@click.argument("line_ids", type=int, nargs=-1, required=True)
@click.option("--code", help="Lettering code (defaults to the next free code)")
@click.pass_context
def apply(ctx, line_ids: tuple[int, ...], code: str | None):
    """Letter entry lines that settle each other.

    LINE_IDS are entry line IDs as shown by 'compta entry show' or
    'compta letter open'.

    Examples:
        compta letter apply 12 31
        compta letter apply 12 31 40 --code AF
    """
    service = LetteringService(ctx.obj["db"])
    try:
        applied = service.letter_lines(line_ids, code)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Lettered {len(set(line_ids))} line(s) with '{applied}'")


@letter.command("remove")
@click.argument("code")
@click.option("--account", help="Account the code belongs to")
@click.pass_context
def remove(ctx, code: str, account: str | None):
    """Remove a lettering code."""
    service = LetteringService(ctx.obj["db"])
    try:
        count = service.unletter(code, account)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed lettering '{code.upper()}' from {count} line(s)")


@letter.command("open")
@click.argument("account")
@click.pass_context
def open_lines(ctx, account: str):
    """List validated lines of ACCOUNT that are not lettered."""
    service = LetteringService(ctx.obj["db"])
    try:
        lines = service.list_unlettered(account)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not lines:
        click.echo("No open lines.")
        return
    for line in lines:
        debit = format_amount(line.debit) if line.debit else ""
        credit = format_amount(line.credit) if line.credit else ""
        click.echo(
            f"{line.line_id:5d} | {line.date} | {line.piece_number:16s} | "
            f"{(line.label or line.entry_label):30.30s} | {debit:>14s} | {credit:>14s}"
        )


def register_commands(cli):
    """Register lettering commands with main CLI."""
    cli.add_command(letter)
