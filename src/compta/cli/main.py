"""Main CLI entry point."""

import logging

import click
from compta.database.factories import create_sqlite_database

# Import and register all commands at module level
from compta.cli.commands import (
    account,
    journal,
    fiscal_year,
    entry,
    reports,
    reconcile,
    letter,
    init_chart,
)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides COMPTA_DB_PATH environment variable)",
    envvar="COMPTA_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="COMPTA_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Compta - double-entry bookkeeping.

    Keep a chart of accounts, record balanced journal entries and produce the
    Balance Générale, Grand Livre, Bilan and Compte de Résultat.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_chart.register_commands(cli)
account.register_commands(cli)
journal.register_commands(cli)
fiscal_year.register_commands(cli)
entry.register_commands(cli)
reports.register_commands(cli)
reconcile.register_commands(cli)
letter.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
