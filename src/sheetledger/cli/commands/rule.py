"""Classification rule commands."""

import click
from sheetledger.cli.error_handling import reported_errors
from sheetledger.cli.options import ledger_type_option, to_ledger_type
from sheetledger.domain.classification import ClassificationService


@click.group()
def rule_group():
    """Manage item name to category rules."""
    pass


@rule_group.command("import")
@ledger_type_option
@click.argument("rules_file", type=click.File("r", encoding="utf-8"))
@click.pass_context
def import_rules(ctx, ledger_type: str, rules_file):
    """Import rules from RULES_FILE ('item : category' or tab separated lines, '-' for stdin)."""
    service = ClassificationService(ctx.obj["db"])

    with reported_errors(ctx):
        created = service.import_rules(to_ledger_type(ledger_type), rules_file.read())
        click.echo(f"Created {created} rules")


@rule_group.command("list")
@ledger_type_option
@click.pass_context
def list_rules(ctx, ledger_type: str):
    """List rules ordered by item name."""
    service = ClassificationService(ctx.obj["db"])
    rules = service.list_rules(to_ledger_type(ledger_type))
    if not rules:
        click.echo("No rules found.")
        return
    for rule in rules:
        click.echo(f"{rule.id:>5}  {rule.item_name} : {rule.category}")


@rule_group.command("delete")
@ledger_type_option
@click.option("--id", "rule_id", type=int, help="Rule to delete")
@click.option("--category", help="Delete every rule of this category")
@click.pass_context
def delete_rule(ctx, ledger_type: str, rule_id: int | None, category: str | None):
    """Delete a rule, or all rules of a category."""
    if (rule_id is None) == (category is None):
        click.echo("Error: Specify exactly one of --id or --category.", err=True)
        ctx.exit(1)

    service = ClassificationService(ctx.obj["db"])
    with reported_errors(ctx):
        if rule_id is not None:
            service.delete_rule(rule_id)
            click.echo(f"Deleted rule {rule_id}")
        else:
            deleted = service.delete_rules_in_category(to_ledger_type(ledger_type), category)
            click.echo(f"Deleted {deleted} rules in category '{category}'")


def register_commands(cli):
    """Register rule commands with main CLI."""
    cli.add_command(rule_group, name="rule")
