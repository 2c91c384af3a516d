"""Main CLI entry point."""

import logging

import click
from sheetledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from sheetledger.cli.commands import (
    upload,
    ledger,
    settlement,
    report,
    rule,
    category,
    keyword_filter,
    mapping,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHEETLEDGER_DB_PATH environment variable)",
    envvar="SHEETLEDGER_DB_PATH",
)
@click.option(
    "--user",
    default="default",
    show_default=True,
    help="Owner of column mapping profiles",
    envvar="SHEETLEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="SHEETLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """Sheetledger - Spreadsheet ledger ingestion and settlement.

    Upload sales and purchase spreadsheets, confirm the rows you want to
    keep, and compute VAT and net profit for any period.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user"] = user

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
upload.register_commands(cli)
ledger.register_commands(cli)
settlement.register_commands(cli)
report.register_commands(cli)
rule.register_commands(cli)
category.register_commands(cli)
keyword_filter.register_commands(cli)
mapping.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
