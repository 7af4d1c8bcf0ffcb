"""Main CLI entry point."""

import click
from cashbook.database.factories import create_sqlite_storage
from cashbook.database.record_store import RecordStore
from cashbook.logging_setup import configure_logging

# Import and register all commands at module level
from cashbook.cli.commands import (
    add,
    transaction,
    summary,
    report,
    export,
    category,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHBOOK_DB_PATH environment variable)",
    envvar="CASHBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ...; overrides CASHBOOK_LOG_LEVEL)",
    envvar="CASHBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Cashbook - Personal income and expense tracker.

    Record income and expenses, search your history and see where the money
    went by category and month.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        storage = create_sqlite_storage(database_path=db_path)
        storage.connect()
        storage.initialize_schema()
        ctx.call_on_close(storage.disconnect)
        ctx.obj["db"] = storage
        ctx.obj["store"] = RecordStore(storage)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)
export.register_commands(cli)
category.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
