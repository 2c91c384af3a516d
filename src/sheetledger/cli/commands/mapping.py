"""Column mapping profile commands."""

import click
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import ledger_type_option, to_ledger_type
from sheetledger.domain.column_mapping import ColumnMappingService
from sheetledger.domain.entities import FilterMode


@click.group()
def mapping_group():
    """Manage saved column mappings for the current user."""
    pass


@mapping_group.command("add")
@click.argument("name")
@ledger_type_option
@click.option("--date-col", required=True, help="Header name of the date column")
@click.option("--item-col", required=True, help="Header name of the item column")
@click.option("--amount-col", required=True, help="Header name of the amount column")
@click.option("--category-col", help="Header name of the category column")
@click.option("--payment-col", help="Header name of the payment method column (sales)")
@click.option("--note-col", help="Header name of the note column")
@click.option(
    "--mode",
    type=click.Choice(["all", "include", "exclude"], case_sensitive=False),
    help="Row filter mode used with the saved keywords",
)
@click.option("--include", help="Comma separated include keywords")
@click.option("--exclude", help="Comma separated exclude keywords")
@click.pass_context
def add_mapping(
    ctx,
    name: str,
    ledger_type: str,
    date_col: str,
    item_col: str,
    amount_col: str,
    category_col: str | None,
    payment_col: str | None,
    note_col: str | None,
    mode: str | None,
    include: str | None,
    exclude: str | None,
):
    """Save a column mapping named NAME."""
    service = ColumnMappingService(ctx.obj["db"])

    with reported_errors(ctx):
        mapping_id = service.create_mapping(
            owner=ctx.obj["user"],
            name=name,
            ledger_type=to_ledger_type(ledger_type),
            col_date=date_col,
            col_item=item_col,
            col_amount=amount_col,
            col_category=category_col,
            col_payment=payment_col,
            col_note=note_col,
            filter_exclude=exclude,
            filter_include=include,
            filter_mode=FilterMode(mode.upper()) if mode else None,
        )
        click.echo(f"Created column mapping '{name}' (ID: {mapping_id})")


@mapping_group.command("list")
@click.option(
    "--type",
    "ledger_type",
    type=click.Choice(["sales", "purchase"], case_sensitive=False),
    help="Only mappings for this ledger",
)
@click.pass_context
def list_mappings(ctx, ledger_type: str | None):
    """List saved column mappings, newest first."""
    service = ColumnMappingService(ctx.obj["db"])
    mappings = service.list_mappings(
        ctx.obj["user"], to_ledger_type(ledger_type) if ledger_type else None
    )
    if not mappings:
        click.echo("No column mappings found.")
        return
    for m in mappings:
        columns = f"date={m.col_date}, item={m.col_item}, amount={m.col_amount}"
        if m.col_category:
            columns += f", category={m.col_category}"
        if m.col_payment:
            columns += f", payment={m.col_payment}"
        if m.col_note:
            columns += f", note={m.col_note}"
        click.echo(f"{m.id:>5}  {m.name} ({m.ledger_type.value.lower()}): {columns}")


@mapping_group.command("delete")
@click.argument("mapping_id", type=int)
@click.pass_context
def delete_mapping(ctx, mapping_id: int):
    """Delete a saved column mapping by ID."""
    service = ColumnMappingService(ctx.obj["db"])

    with reported_errors(ctx):
        service.delete_mapping(mapping_id, ctx.obj["user"])
        click.echo(f"Deleted column mapping {mapping_id}")


def register_commands(cli):
    """Register column mapping commands with main CLI."""
    cli.add_command(mapping_group, name="mapping")
