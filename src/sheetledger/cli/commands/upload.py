"""Spreadsheet upload command."""

import click
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import ledger_type_option, to_ledger_type
from sheetledger.domain.entities import ColumnHints, FilterConfig, FilterMode
from sheetledger.domain.ingestion import IngestionService


@click.command("upload")
@click.argument("xlsx_file", type=click.Path(exists=True, dir_okay=False))
@ledger_type_option
@click.option("--password", help="Password of a protected workbook")
@click.option("--mapping", "mapping_id", type=int, help="Saved column mapping ID to use")
@click.option("--date-col", help="Header name of the date column")
@click.option("--item-col", help="Header name of the item column")
@click.option("--amount-col", help="Header name of the amount column")
@click.option("--category-col", help="Header name of the category column")
@click.option("--payment-col", help="Header name of the payment method column (sales)")
@click.option("--note-col", help="Header name of the note column")
@click.option(
    "--mode",
    type=click.Choice(["all", "include", "exclude"], case_sensitive=False),
    help="Row filter mode (default: exclude)",
)
@click.option("--include", help="Comma separated keywords a row must contain (include mode)")
@click.option("--exclude", help="Comma separated keywords that drop a row (exclude mode)")
@click.pass_context
def upload(
    ctx,
    xlsx_file: str,
    ledger_type: str,
    password: str | None,
    mapping_id: int | None,
    date_col: str | None,
    item_col: str | None,
    amount_col: str | None,
    category_col: str | None,
    payment_col: str | None,
    note_col: str | None,
    mode: str | None,
    include: str | None,
    exclude: str | None,
):
    """Replace the unconfirmed rows of a ledger with the rows of XLSX_FILE."""
    db = ctx.obj["db"]
    service = IngestionService(db)

    columns = (date_col, item_col, amount_col, category_col, payment_col, note_col)
    hints = None
    if any(columns):
        hints = ColumnHints(*columns)

    filter_config = None
    if mode or include or exclude:
        filter_config = FilterConfig(
            mode=FilterMode(mode.upper()) if mode else FilterMode.EXCLUDE,
            include=include or "",
            exclude=exclude or "",
        )

    with open(xlsx_file, "rb") as f:
        file_bytes = f.read()

    with reported_errors(ctx):
        result = service.ingest(
            to_ledger_type(ledger_type),
            file_bytes,
            hints=hints,
            filter_config=filter_config,
            password=password,
            mapping_id=mapping_id,
            owner=ctx.obj["user"],
        )
        click.echo("\nUpload complete:")
        click.echo(f"  Header row: {result.header_row_index + 1}")
        click.echo(f"  Inserted: {result.inserted} unconfirmed rows")
        click.echo(f"  Replaced: {result.replaced} previous unconfirmed rows")
        for reason, count in sorted(result.skipped.items()):
            click.echo(f"  Skipped ({reason.replace('_', ' ')}): {count}")


def register_commands(cli):
    """Register upload command with main CLI."""
    cli.add_command(upload)
