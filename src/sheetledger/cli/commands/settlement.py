"""Settlement commands."""

import click
from sheetledger.cli.date_filters import (
    period_flags,
    period_options,
    require_date_range,
    resolve_cli_date_range,
)
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import format_amount
from sheetledger.domain.entities import SettlementReport
from sheetledger.domain.settlement import SettlementService


def print_settlement(report: SettlementReport) -> None:
    """Print a settlement report."""
    lines = [
        ("Card sales", report.card_sales),
        ("Cash sales", report.cash_sales),
        ("Total sales", report.total_sales),
        ("Total purchase", report.total_purchase),
        ("Labor excluded from VAT base", report.labor_cost_to_exclude),
        ("Gross profit", report.gross_profit),
        ("Reported cash sales", report.reported_cash_sales),
        ("Sales VAT", report.sales_vat),
        ("Purchase VAT", report.purchase_vat),
        ("VAT payable", report.actual_vat),
        ("Manager rent support", report.manager_rent_support),
        ("Net profit", report.net_profit),
    ]
    click.echo(f"\nSettlement {report.start_date} to {report.end_date}:")
    width = max(len(label) for label, _ in lines)
    for label, amount in lines:
        click.echo(f"  {label:<{width}}  {format_amount(amount):>14}")


@click.group()
def settlement_group():
    """Compute and save period settlements."""
    pass


@settlement_group.command("show")
@period_options
@click.pass_context
def show_settlement(ctx, start_date, end_date, **flags):
    """Show the settlement for a period using its saved manual inputs."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags(**flags)
    )
    start, end = require_date_range(ctx, start, end)
    service = SettlementService(ctx.obj["db"])

    with reported_errors(ctx):
        print_settlement(service.get_settlement(start, end))


@settlement_group.command("save")
@period_options
@click.option("--reported-cash", default="0", show_default=True, help="Cash sales reported to the tax office")
@click.option("--rent-support", default="0", show_default=True, help="Rent support paid by the manager")
@click.pass_context
def save_settlement(ctx, start_date, end_date, reported_cash: str, rent_support: str, **flags):
    """Save manual inputs for exactly this period and show the result."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags(**flags)
    )
    start, end = require_date_range(ctx, start, end)
    service = SettlementService(ctx.obj["db"])

    with reported_errors(ctx):
        report = service.save_settlement(
            start, end, reported_cash_sales=reported_cash, manager_rent_support=rent_support
        )
        click.echo("Saved settlement inputs.")
        print_settlement(report)


def register_commands(cli):
    """Register settlement commands with main CLI."""
    cli.add_command(settlement_group, name="settlement")
