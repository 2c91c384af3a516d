"""Business constants shared by the ingestion, reconciliation and settlement code."""

from datetime import date, time

from sheetledger.domain.entities import LedgerType

# Header detection never looks further than this many rows into a sheet.
HEADER_SCAN_LIMIT = 100

# Day zero of the spreadsheet serial date system (serial 25569 == 1970-01-01).
SERIAL_DATE_EPOCH = date(1899, 12, 30)

# Every ledger date is pinned to this time of day.
PINNED_TIME = time(12, 0)

DEFAULT_CATEGORY = "기타"
DEFAULT_UPLOAD_PAYMENT = "기타"
DEFAULT_MANUAL_PAYMENT = "카드"

CASH_MARKER = "현금"
LABOR_MARKER = "인건비"
URGENT_LABOR_MARKER = "인건비(급구)"

# Percent, applied as base * VAT_RATE_PERCENT / 100
VAT_RATE_PERCENT = 10

DATE_KEYWORDS = ("date", "일자", "날짜", "시간", "거래일시")

DEFAULT_KEYWORDS: dict[LedgerType, dict[str, tuple[str, ...]]] = {
    LedgerType.SALES: {
        "date": DATE_KEYWORDS,
        "item": (
            "item", "name", "품목", "상품", "내역", "적요", "보낸분/받는분",
            "출금표시내용", "가맹점명", "기재내용", "상호명",
        ),
        "amount": (
            "amount", "price", "cost", "금액", "가격", "입금액", "승인금액",
            "이용금액", "맡기신금액",
        ),
        "category": ("category", "type", "분류", "구분", "적요"),
        "payment": ("payment", "method", "결제", "카드", "수단", "지불", "입금통장"),
        "note": ("note", "memo", "비고", "메모"),
    },
    LedgerType.PURCHASE: {
        "date": DATE_KEYWORDS,
        "item": (
            "item", "name", "품목", "상품", "내역", "적요", "보낸분/받는분",
            "가맹점명",
        ),
        "amount": ("amount", "price", "cost", "금액", "가격", "출금액", "이용금액"),
        "category": ("category", "type", "분류", "구분", "분야"),
        "payment": (),
        "note": ("note", "memo", "비고", "메모", "송금메모", "카드명"),
    },
}
