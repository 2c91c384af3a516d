"""Keyword filter commands."""

import click
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import ledger_type_option, to_ledger_type
from sheetledger.domain.classification import KeywordFilterService


@click.group()
def filter_group():
    """Manage keywords applied to every upload."""
    pass


@filter_group.command("add")
@ledger_type_option
@click.argument("keyword")
@click.option("--include", "is_include", is_flag=True, help="Include keyword (default: exclude)")
@click.pass_context
def add_filter(ctx, ledger_type: str, keyword: str, is_include: bool):
    """Add a global keyword (no-op if it already exists)."""
    service = KeywordFilterService(ctx.obj["db"])

    with reported_errors(ctx):
        filter_id = service.add_filter(to_ledger_type(ledger_type), keyword, is_include=is_include)
        kind = "include" if is_include else "exclude"
        click.echo(f"{kind.capitalize()} keyword '{keyword.strip()}' (ID: {filter_id})")


@filter_group.command("list")
@ledger_type_option
@click.pass_context
def list_filters(ctx, ledger_type: str):
    """List global keywords."""
    service = KeywordFilterService(ctx.obj["db"])
    filters = service.list_filters(to_ledger_type(ledger_type))
    if not filters:
        click.echo("No keyword filters found.")
        return
    for kw_filter in filters:
        kind = "include" if kw_filter.is_include else "exclude"
        click.echo(f"{kw_filter.id:>5}  {kind:<7}  {kw_filter.keyword}")


@filter_group.command("delete")
@click.argument("filter_id", type=int)
@click.pass_context
def delete_filter(ctx, filter_id: int):
    """Delete a global keyword by ID."""
    service = KeywordFilterService(ctx.obj["db"])

    with reported_errors(ctx):
        service.delete_filter(filter_id)
        click.echo(f"Deleted keyword filter {filter_id}")


def register_commands(cli):
    """Register keyword filter commands with main CLI."""
    cli.add_command(filter_group, name="filter")
