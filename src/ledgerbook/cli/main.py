"""Main CLI entry point."""

import logging

import click
from ledgerbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    add,
    backup,
    entry,
    settings,
    summary,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Ledgerbook - Sales and expenditure ledger for a small business.

    Record credit sales, purchases and cash settlements against clients and
    suppliers, and view balances, statements and monthly reports.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        db.seed_defaults()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
entry.register_commands(cli)
account.register_commands(cli)
summary.register_commands(cli)
backup.register_commands(cli)
settings.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
