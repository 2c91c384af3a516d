"""Options and formatting shared by several commands."""

import click

from sheetledger.domain.entities import LedgerRow, LedgerType

ledger_type_option = click.option(
    "--type",
    "ledger_type",
    type=click.Choice(["sales", "purchase"], case_sensitive=False),
    required=True,
    help="Ledger to work on",
)


def to_ledger_type(value: str) -> LedgerType:
    return LedgerType(value.upper())


def format_amount(amount: int) -> str:
    return f"{amount:,}"


def format_row(row: LedgerRow) -> str:
    """One line per ledger row."""
    parts = [
        f"{row.id:>6}",
        row.date.strftime("%Y-%m-%d"),
        f"{format_amount(row.amount):>12}",
        row.item_name,
        f"[{row.category}]",
    ]
    if row.payment_method:
        parts.append(f"({row.payment_method})")
    if row.note:
        parts.append(f"- {row.note}")
    return "  ".join(parts)
