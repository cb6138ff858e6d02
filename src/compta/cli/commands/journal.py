"""Journal commands."""

import click
from compta.cli.error_handling import handle_domain_error
from compta.domain.entities import JournalType
from compta.domain.errors import DomainError
from compta.domain.journal import JournalService


@click.group()
def journal_group():
    """Manage accounting journals."""
    pass


@journal_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("label", metavar="LABEL")
@click.option(
    "--type",
    "journal_type",
    type=click.Choice([t.value for t in JournalType]),
    default=JournalType.OPERATIONS_DIVERSES.value,
    show_default=True,
    help="Journal type",
)
@click.option("--counterpart", help="Default counterpart account number")
@click.pass_context
def create_journal(ctx, code: str, label: str, journal_type: str, counterpart: str | None):
    """Create a journal.

    Examples:
        compta journal create BQ2 "Banque secondaire" --type Tresorerie --counterpart 5310
    """
    service = JournalService(ctx.obj["db"])
    try:
        service.create_journal(code, label, JournalType(journal_type), counterpart)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created journal {code.upper()} '{label}'")


@journal_group.command("list")
@click.pass_context
def list_journals(ctx):
    """List journals."""
    service = JournalService(ctx.obj["db"])
    journals = service.list_journals()
    if not journals:
        click.echo("No journals found.")
        return

    click.echo("\nJournals:")
    click.echo("-" * 70)
    for journal in journals:
        counterpart = journal.counterpart_account_number or "-"
        click.echo(
            f"{journal.code:5s} | {journal.label:35.35s} | {journal.journal_type.value:20s} | {counterpart}"
        )


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
