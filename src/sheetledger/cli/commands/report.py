"""Report commands."""

import click
from sheetledger.cli.date_filters import (
    period_flags,
    period_options,
    require_date_range,
    resolve_cli_date_range,
)
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import format_amount, format_row, ledger_type_option, to_ledger_type
from sheetledger.domain.reports import ReportService
from sheetledger.utils.date_parser import get_date_range, parse_date


@click.group()
def report_group():
    """Profit and item reports over confirmed rows."""
    pass


@report_group.command("period")
@period_options
@click.option("--skip-empty", is_flag=True, help="Hide days without rows")
@click.pass_context
def period_report(ctx, start_date, end_date, skip_empty: bool, **flags):
    """Daily sales, purchases and profit (default: this month)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags(**flags),
        default_range=get_date_range("this-month"),
    )
    start, end = require_date_range(ctx, start, end)
    service = ReportService(ctx.obj["db"])

    with reported_errors(ctx):
        summary = service.period_summary(start, end)
        click.echo(f"\n{'Date':<10}  {'Sales':>12}  {'#':>4}  {'Purchase':>12}  {'#':>4}  {'Profit':>12}")
        for day in summary.days:
            if skip_empty and not (day.sales_count or day.purchase_count):
                continue
            click.echo(
                f"{day.day.isoformat():<10}  {format_amount(day.sales):>12}  {day.sales_count:>4}  "
                f"{format_amount(day.purchase):>12}  {day.purchase_count:>4}  {format_amount(day.profit):>12}"
            )
        click.echo(
            f"{'Total':<10}  {format_amount(summary.total_sales):>12}  {'':>4}  "
            f"{format_amount(summary.total_purchase):>12}  {'':>4}  {format_amount(summary.total_profit):>12}"
        )


@report_group.command("day")
@click.option("--date", "day", required=True, help="Day to show (YYYY-MM-DD or today, yesterday)")
@click.pass_context
def day_report(ctx, day: str):
    """Confirmed sales and purchases of one day, largest first."""
    try:
        parsed_day = parse_date(day)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    service = ReportService(ctx.obj["db"])

    with reported_errors(ctx):
        detail = service.day_detail(parsed_day)
        for title, rows, total in (
            ("Sales", detail.sales, detail.total_sales),
            ("Purchases", detail.purchases, detail.total_purchase),
        ):
            click.echo(f"\n{title} on {detail.day.isoformat()}: {format_amount(total)} ({len(rows)} rows)")
            for row in rows:
                click.echo(format_row(row))


@report_group.command("items")
@ledger_type_option
@period_options
@click.option("--category", help="Only this exact category")
@click.option("--keyword", "keywords", multiple=True, help="Only items containing this text (repeatable)")
@click.pass_context
def item_report(ctx, ledger_type: str, start_date, end_date, category: str | None, keywords, **flags):
    """Totals per item and category, largest first."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags(**flags)
    )
    service = ReportService(ctx.obj["db"])

    with reported_errors(ctx):
        entries = service.item_analysis(
            to_ledger_type(ledger_type),
            start_date=start,
            end_date=end,
            category=category,
            keywords=keywords,
        )
        if not entries:
            click.echo("No confirmed rows found.")
            return
        for entry in entries:
            click.echo(
                f"{format_amount(entry.total_amount):>14}  {entry.count:>5}x  "
                f"avg {format_amount(entry.average_amount):>10}  {entry.item_name} [{entry.category}]"
            )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
