"""Ledger row commands: list, add, confirm and delete."""

import click
from sheetledger.cli.date_filters import (
    period_flags,
    period_options,
    require_date_range,
    resolve_cli_date_range,
)
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import format_row, ledger_type_option, to_ledger_type
from sheetledger.domain.ledger import DEFAULT_PAGE_SIZE, LedgerService
from sheetledger.domain.reconciliation import ReconciliationService
from sheetledger.utils.date_parser import parse_date


def _split_keywords(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


@click.command("list")
@ledger_type_option
@click.option("--search", help="Comma separated keywords (matches item, category, note, payment)")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=DEFAULT_PAGE_SIZE, show_default=True)
@click.pass_context
def list_rows(ctx, ledger_type: str, search: str | None, page: int, limit: int):
    """List unconfirmed rows, newest first."""
    service = LedgerService(ctx.obj["db"])

    with reported_errors(ctx):
        result = service.list_unconfirmed(
            to_ledger_type(ledger_type), keywords=_split_keywords(search), page=page, limit=limit
        )
        if not result.items:
            click.echo("No unconfirmed rows found.")
            return
        for row in result.items:
            click.echo(format_row(row))
        click.echo(f"\nPage {result.page} of {result.total_pages} ({result.total} rows)")


@click.command("add")
@ledger_type_option
@click.option("--date", "row_date", required=True, help="Date of the row")
@click.option("--item", "item_name", required=True, help="Item name")
@click.option("--amount", required=True, help="Amount")
@click.option("--category", help="Category (default: 기타)")
@click.option("--payment", help="Payment method, sales only (default: 카드)")
@click.option("--note", help="Note")
@click.pass_context
def add_row(
    ctx,
    ledger_type: str,
    row_date: str,
    item_name: str,
    amount: str,
    category: str | None,
    payment: str | None,
    note: str | None,
):
    """Add an unconfirmed row by hand."""
    service = LedgerService(ctx.obj["db"])

    try:
        parsed_date = parse_date(row_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    with reported_errors(ctx):
        row_id = service.create_row(
            to_ledger_type(ledger_type),
            parsed_date,
            item_name,
            amount,
            category=category,
            payment_method=payment,
            note=note,
        )
        click.echo(f"Added unconfirmed row {row_id}")


@click.command("confirm")
@ledger_type_option
@click.option("--keyword", "keywords", multiple=True, help="Only confirm rows matching this keyword (repeatable)")
@click.option("--id", "ids", type=int, multiple=True, help="Only confirm this row (repeatable)")
@click.pass_context
def confirm(ctx, ledger_type: str, keywords: tuple[str, ...], ids: tuple[int, ...]):
    """Confirm unconfirmed rows, discarding duplicates of confirmed data."""
    service = ReconciliationService(ctx.obj["db"])

    with reported_errors(ctx):
        result = service.confirm(to_ledger_type(ledger_type), keywords=keywords, ids=ids or None)
        click.echo(f"Confirmed: {result.confirmed}")
        click.echo(f"Discarded duplicates: {result.discarded}")


@click.command("delete")
@ledger_type_option
@click.option("--id", "ids", type=int, multiple=True, help="Row to delete (repeatable)")
@click.option("--keep", help="Delete every unconfirmed row NOT matching these comma separated keywords")
@click.option("--confirmed-item", "items", multiple=True, help="Delete confirmed rows with this item name (repeatable)")
@click.pass_context
def delete_rows(ctx, ledger_type: str, ids: tuple[int, ...], keep: str | None, items: tuple[str, ...]):
    """Delete rows by ID, by keyword exclusion or by confirmed item name."""
    if sum(1 for given in (ids, keep, items) if given) != 1:
        click.echo("Error: Specify exactly one of --id, --keep or --confirmed-item.", err=True)
        ctx.exit(1)

    service = LedgerService(ctx.obj["db"])
    kind = to_ledger_type(ledger_type)

    with reported_errors(ctx):
        if ids:
            deleted = service.delete_rows(kind, ids)
        elif keep:
            deleted = service.delete_unconfirmed_except(kind, _split_keywords(keep))
        else:
            deleted = service.delete_confirmed_items(kind, items)
        click.echo(f"Deleted {deleted} rows")


@click.command("delete-range")
@ledger_type_option
@period_options
@click.option("--include-unconfirmed", is_flag=True, help="Also delete unconfirmed rows in the range")
@click.pass_context
def delete_range(ctx, ledger_type: str, start_date, end_date, include_unconfirmed: bool, **flags):
    """Delete rows dated within a range (confirmed only unless told otherwise)."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags(**flags)
    )
    start, end = require_date_range(ctx, start, end)
    service = ReconciliationService(ctx.obj["db"])

    with reported_errors(ctx):
        deleted = service.delete_range(
            to_ledger_type(ledger_type), start, end, only_confirmed=not include_unconfirmed
        )
        click.echo(f"Deleted {deleted} rows between {start} and {end}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(list_rows)
    cli.add_command(add_row)
    cli.add_command(confirm)
    cli.add_command(delete_rows)
    cli.add_command(delete_range)
