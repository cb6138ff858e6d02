"""Chart of accounts commands."""

import click
from compta.cli.account_resolution import resolve_account_or_exit
from compta.cli.error_handling import handle_domain_error
from compta.domain.account import AccountService
from compta.domain.entities import AccountType, NormalSense
from compta.domain.errors import DomainError

SENSE_CHOICES = [sense.value for sense in NormalSense]
TYPE_CHOICES = [account_type.value for account_type in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("number", metavar="NUMBER")
@click.argument("label", metavar="LABEL")
@click.option("--sense", type=click.Choice(SENSE_CHOICES), help="Normal balance side (default by class)")
@click.option("--type", "account_type", type=click.Choice(TYPE_CHOICES), help="Account type (default by class)")
@click.option("--letterable", is_flag=True, help="Allow lettering of this account's lines")
@click.pass_context
def create_account(ctx, number: str, label: str, sense: str | None, account_type: str | None, letterable: bool):
    """Create a new account.

    The class is the first digit of NUMBER.

    Examples:
        compta account create 601 "Achats de marchandises"
        compta account create 4111 "Clients" --letterable
    """
    service = AccountService(ctx.obj["db"])
    try:
        account_id = service.create_account(
            number=number,
            label=label,
            normal_sense=NormalSense(sense) if sense else None,
            account_type=AccountType(account_type) if account_type else None,
            is_letterable=letterable,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account {number} '{label}' (ID: {account_id})")


@account_group.command("list")
@click.option("--class", "account_class", type=click.IntRange(1, 9), help="Only accounts of this class")
@click.option("--active-only", is_flag=True, help="Hide deactivated accounts")
@click.pass_context
def list_accounts(ctx, account_class: int | None, active_only: bool):
    """List accounts."""
    service = AccountService(ctx.obj["db"])
    accounts = service.list_accounts(account_class=account_class, include_inactive=not active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        flags = []
        if acc.is_letterable:
            flags.append("letterable")
        if not acc.is_active:
            flags.append("inactive")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"{acc.number:8s} | {acc.label:45.45s} | {acc.normal_sense.value:6s} | "
            f"{acc.account_type.value}{suffix}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show account details.

    ACCOUNT can be an account number or label.
    """
    service = AccountService(ctx.obj["db"])
    acc = resolve_account_or_exit(ctx, service, account)
    click.echo(f"Number:      {acc.number}")
    click.echo(f"Label:       {acc.label}")
    click.echo(f"Class:       {acc.account_class}")
    click.echo(f"Sense:       {acc.normal_sense.value}")
    click.echo(f"Type:        {acc.account_type.value}")
    click.echo(f"Letterable:  {'yes' if acc.is_letterable else 'no'}")
    click.echo(f"Active:      {'yes' if acc.is_active else 'no'}")


@account_group.command("update")
@click.argument("number", metavar="NUMBER")
@click.option("--label", help="New label")
@click.option("--sense", type=click.Choice(SENSE_CHOICES), help="New normal balance side")
@click.option("--type", "account_type", type=click.Choice(TYPE_CHOICES), help="New account type")
@click.option("--letterable/--not-letterable", default=None, help="Allow or forbid lettering")
@click.pass_context
def update_account(ctx, number: str, label: str | None, sense: str | None, account_type: str | None, letterable: bool | None):
    """Edit an account. The number cannot be changed."""
    if label is None and sense is None and account_type is None and letterable is None:
        click.echo("Error: Nothing to update. Use --label, --sense, --type or --letterable.", err=True)
        ctx.exit(1)

    service = AccountService(ctx.obj["db"])
    try:
        service.update_account(
            number=number,
            label=label,
            normal_sense=NormalSense(sense) if sense else None,
            account_type=AccountType(account_type) if account_type else None,
            is_letterable=letterable,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {number}")


@account_group.command("deactivate")
@click.argument("number", metavar="NUMBER")
@click.pass_context
def deactivate_account(ctx, number: str):
    """Deactivate an account so it can no longer receive lines."""
    service = AccountService(ctx.obj["db"])
    try:
        service.deactivate_account(number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated account {number}")


@account_group.command("delete")
@click.argument("number", metavar="NUMBER")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, number: str, yes: bool):
    """Delete an unused account.

    Accounts used by entry lines, journals or reconciliations cannot be
    deleted; deactivate them instead.
    """
    service = AccountService(ctx.obj["db"])
    acc = resolve_account_or_exit(ctx, service, number)

    if not yes and not click.confirm(f"Are you sure you want to delete account {acc.number} '{acc.label}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(acc.number)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account {acc.number}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
