"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from compta.domain.account import AccountService
from compta.domain.entities import Account
from compta.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str
) -> Account:
    """Resolve account number or label, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
