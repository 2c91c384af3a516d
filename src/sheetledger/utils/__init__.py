"""Utility functions for sheetledger."""

from sheetledger.utils.amount_parser import parse_currency, parse_manual_amount
from sheetledger.utils.date_parser import parse_date, parse_sheet_date
from sheetledger.utils.text_normalizer import get_search_variants, to_full_width, to_half_width

__all__ = [
    "parse_currency",
    "parse_manual_amount",
    "parse_date",
    "parse_sheet_date",
    "get_search_variants",
    "to_full_width",
    "to_half_width",
]
