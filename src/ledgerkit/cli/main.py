"""Main CLI entry point."""

import click

from ledgerkit.cli.commands import budget, recurring, summary, top, totals
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.logging_setup import configure_logging


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--workspace",
    default="default",
    show_default=True,
    help="Workspace id to query (overrides LEDGERKIT_WORKSPACE environment variable)",
    envvar="LEDGERKIT_WORKSPACE",
)
@click.option(
    "--log-level",
    help="Log level name, e.g. DEBUG (overrides LEDGERKIT_LOG_LEVEL environment variable)",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, workspace: str, log_level: str | None):
    """Ledgerkit - Ledger aggregation and recurrence engine.

    Report multi-currency totals, balances, ranked breakdowns and budget
    progress, and inspect recurring transaction schedules.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level, force=True)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["workspace"] = workspace


totals.register_commands(cli)
top.register_commands(cli)
summary.register_commands(cli)
budget.register_commands(cli)
recurring.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
