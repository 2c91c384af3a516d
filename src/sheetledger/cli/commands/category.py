"""Category management commands."""

import click
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import ledger_type_option, to_ledger_type
from sheetledger.domain.classification import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@ledger_type_option
@click.option("--merged", is_flag=True, help="Include categories used only by rules")
@click.pass_context
def list_categories(ctx, ledger_type: str, merged: bool):
    """List categories ordered by name."""
    service = CategoryService(ctx.obj["db"])
    kind = to_ledger_type(ledger_type)

    if merged:
        names = service.merged_categories(kind)
        if not names:
            click.echo("No categories found.")
        for name in names:
            click.echo(name)
        return

    categories = service.list_categories(kind)
    if not categories:
        click.echo("No categories found.")
        return
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


@category_group.command("add")
@ledger_type_option
@click.argument("name")
@click.pass_context
def add_category(ctx, ledger_type: str, name: str):
    """Add a category (no-op if it already exists)."""
    service = CategoryService(ctx.obj["db"])

    with reported_errors(ctx):
        category_id = service.create_category(to_ledger_type(ledger_type), name)
        click.echo(f"Category '{name.strip()}' (ID: {category_id})")


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a category by ID."""
    service = CategoryService(ctx.obj["db"])

    with reported_errors(ctx):
        service.delete_category(category_id)
        click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
