"""Tests for spreadsheet ingestion into the unconfirmed ledger."""

from datetime import datetime, time

import pytest

from sheetledger.domain.entities import FilterConfig, FilterMode, LedgerType, StagedRow
from sheetledger.domain.errors import (
    EmptySheet,
    MissingRequiredColumns,
    NoFileProvided,
    NoValidRowsFound,
    NotFoundError,
    ValidationError,
)

SALES_HEADER = ["일자", "품목", "금액", "결제"]


def _unconfirmed(db, ledger_type=LedgerType.SALES):
    return db.list_ledger_rows(ledger_type, confirmed=False)


def test_ingest_inserts_unconfirmed_rows(ingestion_service, temp_db, xlsx):
    data = xlsx([
        SALES_HEADER,
        ["2024-01-15", "Coffee", 4500, "카드"],
        ["2024-01-16", "Tea", "3,000원", "현금"],
    ])

    result = ingestion_service.ingest(LedgerType.SALES, data)

    assert result.inserted == 2
    assert result.replaced == 0
    assert result.header_row_index == 0
    rows = _unconfirmed(temp_db)
    assert [(r.date, r.item_name, r.amount, r.payment_method) for r in rows] == [
        (datetime(2024, 1, 15, 12), "Coffee", 4500, "카드"),
        (datetime(2024, 1, 16, 12), "Tea", 3000, "현금"),
    ]
    assert all(r.category == "기타" for r in rows)
    assert not any(r.confirmed for r in rows)


def test_header_row_is_found_below_title_rows(ingestion_service, xlsx):
    data = xlsx([
        ["Shop report"],
        ["Account 123-456"],
        SALES_HEADER,
        [datetime(2024, 1, 15), "Coffee", 4500, "카드"],
    ])

    result = ingestion_service.ingest(LedgerType.SALES, data)

    assert result.header_row_index == 2
    assert result.inserted == 1


def test_sales_payment_defaults_when_column_is_missing(ingestion_service, temp_db, xlsx):
    data = xlsx([["일자", "품목", "금액"], ["2024-01-15", "Coffee", 4500]])

    ingestion_service.ingest(LedgerType.SALES, data)

    assert _unconfirmed(temp_db)[0].payment_method == "기타"


def test_bad_rows_are_skipped_and_counted(ingestion_service, temp_db, xlsx):
    data = xlsx([
        SALES_HEADER,
        ["2024-01-15", "Coffee", 4500, "카드"],
        ["unknown", "Tea", 3000, "카드"],
        ["2024-01-15", "Cake", 0, "카드"],
        ["2024-01-15", "Bread", "free", "카드"],
        ["2024-01-15", None, None, "카드"],
    ])

    result = ingestion_service.ingest(LedgerType.SALES, data)

    assert result.inserted == 1
    assert result.skipped == {"invalid_date": 1, "zero_amount": 2, "blank": 1}
    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Coffee"]


def test_upload_replaces_unconfirmed_rows_only(ingestion_service, reconciliation_service, temp_db, xlsx):
    ingestion_service.ingest(LedgerType.SALES, xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]]))
    reconciliation_service.confirm(LedgerType.SALES)
    ingestion_service.ingest(LedgerType.SALES, xlsx([
        SALES_HEADER,
        ["2024-01-16", "Tea", 3000, "카드"],
        ["2024-01-16", "Cake", 6000, "카드"],
    ]))

    result = ingestion_service.ingest(LedgerType.SALES, xlsx([SALES_HEADER, ["2024-01-17", "Juice", 5000, "카드"]]))

    assert result.replaced == 2
    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Juice"]
    assert [r.item_name for r in temp_db.list_ledger_rows(LedgerType.SALES, confirmed=True)] == ["Coffee"]


def test_sales_and_purchase_ledgers_are_independent(ingestion_service, temp_db, xlsx):
    ingestion_service.ingest(LedgerType.SALES, xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]]))
    ingestion_service.ingest(LedgerType.PURCHASE, xlsx([["일자", "품목", "금액"], ["2024-01-15", "Beans", 20000]]))

    assert [r.item_name for r in _unconfirmed(temp_db, LedgerType.SALES)] == ["Coffee"]
    purchase = _unconfirmed(temp_db, LedgerType.PURCHASE)
    assert [r.item_name for r in purchase] == ["Beans"]
    assert purchase[0].payment_method is None


def test_purchase_amounts_only_strip_commas(ingestion_service, temp_db, xlsx):
    data = xlsx([
        ["일자", "품목", "금액"],
        ["2024-01-15", "Beans", "20,000"],
        ["2024-01-15", "Milk", "₩5,000"],
    ])

    result = ingestion_service.ingest(LedgerType.PURCHASE, data)

    assert result.inserted == 1
    assert result.skipped == {"zero_amount": 1}
    assert _unconfirmed(temp_db, LedgerType.PURCHASE)[0].amount == 20000


def test_rules_override_sheet_category(ingestion_service, temp_db, xlsx):
    temp_db.create_classification_rule("Coffee", "음료", LedgerType.SALES)
    data = xlsx([
        ["일자", "품목", "금액", "분류"],
        ["2024-01-15", "Coffee", 4500, "간식"],
        ["2024-01-15", "Cookie", 2000, "간식"],
        ["2024-01-15", "Bagel", 3000, None],
    ])

    ingestion_service.ingest(LedgerType.SALES, data)

    categories = {r.item_name: r.category for r in _unconfirmed(temp_db)}
    assert categories == {"Coffee": "음료", "Cookie": "간식", "Bagel": "기타"}


def test_exclude_keywords_drop_rows(ingestion_service, temp_db, xlsx):
    temp_db.create_keyword_filter("Tea", LedgerType.SALES, False)
    data = xlsx([
        SALES_HEADER,
        ["2024-01-15", "Coffee", 4500, "카드"],
        ["2024-01-15", "Ｔｅａ latte", 5000, "카드"],
        ["2024-01-15", "배달 정산", 12000, "카드"],
    ])

    result = ingestion_service.ingest(
        LedgerType.SALES, data, filter_config=FilterConfig(mode=FilterMode.EXCLUDE, exclude="배달")
    )

    assert result.skipped == {"filtered": 2}
    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Coffee"]


def test_include_mode_keeps_only_matching_rows(ingestion_service, temp_db, xlsx):
    data = xlsx([
        SALES_HEADER,
        ["2024-01-15", "Coffee", 4500, "카드"],
        ["2024-01-15", "Tea", 3000, "현금"],
    ])

    ingestion_service.ingest(LedgerType.SALES, data, filter_config=FilterConfig(mode=FilterMode.INCLUDE, include="현금"))

    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Tea"]


def test_include_mode_without_keywords_rejects_upload(ingestion_service, temp_db, xlsx):
    data = xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]])

    with pytest.raises(NoValidRowsFound):
        ingestion_service.ingest(LedgerType.SALES, data, filter_config=FilterConfig(mode=FilterMode.INCLUDE))


def test_rejected_upload_keeps_previous_unconfirmed_rows(ingestion_service, temp_db, xlsx):
    ingestion_service.ingest(LedgerType.SALES, xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]]))

    with pytest.raises(NoValidRowsFound):
        ingestion_service.ingest(LedgerType.SALES, xlsx([SALES_HEADER, ["2024-01-15", "Tea", 0, "카드"]]))

    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Coffee"]


def test_missing_required_column(ingestion_service, temp_db, xlsx):
    data = xlsx([["일자", "금액"], ["2024-01-15", 4500]])

    with pytest.raises(MissingRequiredColumns) as exc_info:
        ingestion_service.ingest(LedgerType.SALES, data)

    assert exc_info.value.missing == ["item"]
    assert exc_info.value.header_row_index == 0
    message = str(exc_info.value)
    assert "Item (User: -, Defaults: item, name" in message
    assert "Found headers in row 1: 일자, 금액" in message
    assert _unconfirmed(temp_db) == []


def test_no_file(ingestion_service):
    with pytest.raises(NoFileProvided):
        ingestion_service.ingest(LedgerType.SALES, b"")
    with pytest.raises(NoFileProvided):
        ingestion_service.ingest(LedgerType.SALES, None)


def test_empty_sheet(ingestion_service, xlsx):
    with pytest.raises(EmptySheet):
        ingestion_service.ingest(LedgerType.SALES, xlsx([]))


def test_column_hints_take_priority(ingestion_service, temp_db, xlsx):
    from sheetledger.domain.entities import ColumnHints

    data = xlsx([
        ["거래일", "Desc", "Deposit", "금액"],
        ["2024-01-15", "Coffee", 4500, 999],
    ])

    ingestion_service.ingest(
        LedgerType.SALES, data, hints=ColumnHints(date="거래일", item="Desc", amount="Deposit")
    )

    assert _unconfirmed(temp_db)[0].amount == 4500


def test_saved_mapping_supplies_hints_and_filters(ingestion_service, mapping_service, temp_db, xlsx):
    mapping_id = mapping_service.create_mapping(
        "alice",
        "Bank export",
        LedgerType.SALES,
        col_date="거래일",
        col_item="Desc",
        col_amount="Deposit",
        filter_exclude="interest",
        filter_mode=FilterMode.EXCLUDE,
    )
    data = xlsx([
        ["거래일", "Desc", "Deposit"],
        ["2024-01-15", "Coffee", 4500],
        ["2024-01-15", "Interest", 12],
    ])

    result = ingestion_service.ingest(LedgerType.SALES, data, mapping_id=mapping_id, owner="alice")

    assert result.inserted == 1
    assert [r.item_name for r in _unconfirmed(temp_db)] == ["Coffee"]


def test_mapping_for_other_ledger_type_is_rejected(ingestion_service, mapping_service, xlsx):
    mapping_id = mapping_service.create_mapping(
        "alice", "Card", LedgerType.PURCHASE, col_date="일자", col_item="품목", col_amount="금액"
    )
    data = xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]])

    with pytest.raises(ValidationError, match="PURCHASE"):
        ingestion_service.ingest(LedgerType.SALES, data, mapping_id=mapping_id, owner="alice")


def test_mapping_of_other_owner_is_not_found(ingestion_service, mapping_service, xlsx):
    mapping_id = mapping_service.create_mapping(
        "alice", "Card", LedgerType.SALES, col_date="일자", col_item="품목", col_amount="금액"
    )
    data = xlsx([SALES_HEADER, ["2024-01-15", "Coffee", 4500, "카드"]])

    with pytest.raises(NotFoundError):
        ingestion_service.ingest(LedgerType.SALES, data, mapping_id=mapping_id, owner="bob")


def test_insert_rows_directly(temp_db):
    """Staged rows keep their fields when written."""
    row = StagedRow(
        date=datetime(2024, 1, 15, 12),
        item_name="Coffee",
        amount=4500,
        category="음료",
        payment_method="카드",
        note="takeout",
    )
    assert temp_db.insert_ledger_rows(LedgerType.SALES, [row]) == 1
    stored = _unconfirmed(temp_db)[0]
    assert (stored.item_name, stored.category, stored.note) == ("Coffee", "음료", "takeout")


def test_time_only_date_column_skips_rows(ingestion_service, temp_db, xlsx):
    """A time cell in the date column is not taken as today's date."""
    data = xlsx([
        ["거래시간", "거래일자", "내역", "금액"],
        [time(13, 2), "2024-01-15", "Coffee", 4500],
        ["12:30", "2024-01-16", "Tea", 3000],
    ])

    with pytest.raises(NoValidRowsFound):
        ingestion_service.ingest(LedgerType.SALES, data)

    assert _unconfirmed(temp_db) == []
