"""Tests for ingestion row filtering and ledger keyword search."""

from datetime import datetime

from sheetledger.domain.entities import FilterConfig, FilterMode, KeywordFilter, LedgerRow, LedgerType
from sheetledger.domain.row_filter import (
    RowFilter,
    expand_search_keywords,
    ledger_row_matches,
    parse_keywords,
    row_content,
)


def _global(keyword: str, is_include: bool) -> KeywordFilter:
    return KeywordFilter(id=1, keyword=keyword, ledger_type=LedgerType.SALES, is_include=is_include)


def _row(**overrides) -> LedgerRow:
    values = dict(
        id=1,
        ledger_type=LedgerType.SALES,
        date=datetime(2024, 1, 15, 12),
        item_name="Coffee",
        amount=4500,
        category="음료",
        payment_method="카드",
        note="",
        confirmed=False,
        created_at=datetime(2024, 1, 15, 12),
    )
    values.update(overrides)
    return LedgerRow(**values)


def test_parse_keywords_splits_normalizes_and_dedups():
    assert parse_keywords(" 배달, ＡＢＣ ,abc,,") == ("배달", "abc")
    assert parse_keywords("") == ()
    assert parse_keywords(None) == ()


def test_row_content_is_normalized():
    assert row_content("ＣＯＦＦＥＥ", None, "Note") == "coffee  note"


def test_all_mode_accepts_everything():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.ALL, exclude="coffee"))
    assert row_filter.accepts(row_content("coffee"))


def test_exclude_drops_matching_rows():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.EXCLUDE, exclude="배달"))
    assert not row_filter.accepts(row_content("배달의민족 정산"))
    assert row_filter.accepts(row_content("매장 판매"))


def test_exclude_is_width_symmetric():
    """Half-width keywords drop full-width content and the other way round."""
    half = RowFilter.build(FilterConfig(mode=FilterMode.EXCLUDE, exclude="baemin"))
    full = RowFilter.build(FilterConfig(mode=FilterMode.EXCLUDE, exclude="ｂａｅｍｉｎ"))
    assert not half.accepts(row_content("ＢＡＥＭＩＮ order"))
    assert not full.accepts(row_content("baemin order"))


def test_exclude_with_no_keywords_keeps_everything():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.EXCLUDE))
    assert row_filter.accepts(row_content("anything"))


def test_include_requires_a_keyword():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.INCLUDE, include="카드"))
    assert row_filter.accepts(row_content("편의점", "", "", "카드"))
    assert not row_filter.accepts(row_content("편의점", "", "", "현금"))


def test_include_with_empty_union_drops_every_row():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.INCLUDE))
    assert row_filter.include == ()
    assert not row_filter.accepts(row_content("anything"))
    assert not row_filter.accepts("")


def test_global_filters_merge_with_runtime_keywords():
    row_filter = RowFilter.build(
        FilterConfig(mode=FilterMode.EXCLUDE, exclude="refund"),
        [_global("배달", is_include=False), _global("쿠팡", is_include=True)],
    )
    assert row_filter.exclude == ("refund", "배달")
    assert row_filter.include == ("쿠팡",)
    assert not row_filter.accepts(row_content("배달 수수료"))


def test_global_include_keywords_satisfy_include_mode():
    row_filter = RowFilter.build(FilterConfig(mode=FilterMode.INCLUDE), [_global("쿠팡", is_include=True)])
    assert row_filter.accepts(row_content("쿠팡 정산"))


def test_expand_search_keywords_lowercases_all_widths():
    variants = expand_search_keywords(["AB", " ", "ab"])
    assert variants == ("ab", "ａｂ")


def test_ledger_row_matches_any_searchable_field():
    variants = expand_search_keywords(["ｃｏｆｆｅｅ"])
    assert ledger_row_matches(_row(), variants)
    assert ledger_row_matches(_row(item_name="Tea", note="with COFFEE beans"), variants)
    assert not ledger_row_matches(_row(item_name="Tea"), variants)


def test_payment_is_searched_for_sales_only():
    variants = expand_search_keywords(["카드"])
    assert ledger_row_matches(_row(item_name="Tea"), variants)
    purchase = _row(item_name="Tea", ledger_type=LedgerType.PURCHASE, payment_method=None)
    assert not ledger_row_matches(purchase, variants)
