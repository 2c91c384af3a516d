"""Date parsing utilities."""

import re
from datetime import date, datetime, time, timedelta
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from sheetledger.domain.constants import PINNED_TIME, SERIAL_DATE_EPOCH

KOREAN_DATE_RE = re.compile(r"(\d{4})년\s*(\d{1,2})월\s*(\d{1,2})일")

# Two unrelated defaults: a field dateutil had to fill in differs between them.
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def pin_time(day: date) -> datetime:
    """Return ``day`` at the pinned time of day."""
    return datetime.combine(day, PINNED_TIME)


def parse_sheet_date(value: Any) -> datetime:
    """Parse a spreadsheet cell into a ledger date.

    Accepts:
    - native ``datetime``/``date`` cell values
    - numeric serial dates (days since 1899-12-30)
    - "YYYY년 M월 D일" strings
    - anything else dateutil can parse into a full date, read year first
      ("2024-01-15", "2024/01/15 13:02", "24.01.15", ...)

    The time component is always replaced by the pinned time so that a day
    never shifts across a timezone boundary.

    Raises:
        ValueError: If the value is empty or cannot be parsed
    """
    if value is None or isinstance(value, (bool, time)):
        raise ValueError(f"Could not parse date {value!r}")

    if isinstance(value, datetime):
        return pin_time(value.date())
    if isinstance(value, date):
        return pin_time(value)

    if isinstance(value, (int, float)):
        try:
            return pin_time(SERIAL_DATE_EPOCH + timedelta(days=int(value)))
        except OverflowError as e:
            raise ValueError(f"Could not parse date serial {value!r}: {e}")

    text = str(value).strip()
    if not text:
        raise ValueError("Empty date string")

    match = KOREAN_DATE_RE.search(text)
    if match:
        year, month, day = (int(part) for part in match.groups())
        try:
            return pin_time(date(year, month, day))
        except ValueError:
            # fall through to the generic parser
            pass

    try:
        first, second = (
            date_parser.parse(text, default=default, yearfirst=True) for default in _FILL_DEFAULTS
        )
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{text}': {e}")
    if first.date() != second.date():
        raise ValueError(f"Incomplete date '{text}': year, month and day are required")
    return pin_time(first.date())


def parse_date(date_str: str) -> date:
    """Parse a user-entered date for command arguments.

    Supports absolute dates and a few relative words:
    "today", "yesterday", "this month", "last month", "this year", "last year".

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
        "this year": today.replace(month=1, day=1),
        "last year": today.replace(month=1, day=1) - relativedelta(years=1),
    }
    if text in relative:
        return relative[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)

    if period == "this-month":
        return first_of_month, today
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "this-year":
        return first_of_year, today
    if period == "last-year":
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: this-month, last-month, this-year, last-year"
    )


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.min.time())


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, datetime.max.time())
