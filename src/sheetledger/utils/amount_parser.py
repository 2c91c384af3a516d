"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_currency(value: Any, commas_only: bool = False) -> int:
    """Parse a currency cell into whole currency units.

    Handles:
    - native numbers (1000, 1000.0)
    - "1,234", "₩1,234", "1,234원", "-1,234"
    - "(1,234)" (negative in parentheses)

    With ``commas_only`` only thousands separators are removed, so symbols
    or units make the value unparseable. Fractions round half-up.

    Returns 0 for anything that cannot be parsed; callers drop zero rows.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return _to_units(Decimal(str(value)))

    text = str(value).strip()
    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    if commas_only:
        text = text.replace(",", "").strip()
    else:
        text = _NON_NUMERIC.sub("", text)

    if not text:
        return 0

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return 0

    units = _to_units(amount)
    return -units if is_negative else units


def _to_units(amount: Decimal) -> int:
    if not amount.is_finite():
        return 0
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_manual_amount(value: Any) -> int:
    """Parse a user-entered settlement adjustment.

    Blank or None means 0.

    Raises:
        ValueError: If the value is not a number
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).replace(",", "").strip()
    if not text:
        return 0
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Not a number: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Not a number: {value!r}")
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def round_half_up(amount: Decimal) -> int:
    """Nearest integer, with halves going toward positive infinity."""
    return int((amount + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))
