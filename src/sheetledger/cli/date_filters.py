"""CLI helpers for date range resolution."""

from datetime import date

import click

from sheetledger.utils.date_parser import get_date_range, parse_date

PERIOD_NAMES = ("this-month", "last-month", "this-year", "last-year")


def period_options(fn):
    """Add --start-date/--end-date and one flag per named period."""
    fn = click.option("--last-year", is_flag=True, help="Previous calendar year")(fn)
    fn = click.option("--this-year", is_flag=True, help="Current year up to today")(fn)
    fn = click.option("--last-month", is_flag=True, help="Previous calendar month")(fn)
    fn = click.option("--this-month", is_flag=True, help="Current month up to today")(fn)
    fn = click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")(fn)
    fn = click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")(fn)
    return fn


def period_flags(**kwargs: bool) -> dict[str, bool]:
    """Map click's keyword arguments for the period flags to period names."""
    return {name: bool(kwargs.get(name.replace("-", "_"))) for name in PERIOD_NAMES}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --last-month, --this-year, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period)
                break
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end


def require_date_range(ctx, start: date | None, end: date | None) -> tuple[date, date]:
    """Exit unless both ends of the range are known."""
    if start is None or end is None:
        click.echo("Error: Both --start-date and --end-date (or a period option) are required.", err=True)
        ctx.exit(1)
    return start, end
