"""Tests for settlement and VAT computation."""

from datetime import date, datetime

import pytest

from sheetledger.domain.entities import LedgerType, SettlementAdjustment, StagedRow
from sheetledger.domain.errors import InvalidManualInput, ValidationError
from sheetledger.domain.settlement import SettlementTotals, compute_settlement, vat

JANUARY = (date(2024, 1, 1), date(2024, 1, 31))


def _confirmed(db, ledger_type, day, amount, category="기타", payment=None, confirmed=True):
    db.insert_ledger_rows(
        ledger_type,
        [
            StagedRow(
                date=datetime(2024, day[0], day[1], 12),
                item_name="row",
                amount=amount,
                category=category,
                payment_method=payment,
                note="",
            )
        ],
        confirmed=confirmed,
    )


@pytest.fixture
def january_ledger(temp_db):
    _confirmed(temp_db, LedgerType.SALES, (1, 15), 900000, payment="카드")
    _confirmed(temp_db, LedgerType.SALES, (1, 31), 100000, payment="현금")
    _confirmed(temp_db, LedgerType.SALES, (1, 20), 50000, payment="카드", confirmed=False)
    _confirmed(temp_db, LedgerType.SALES, (2, 1), 70000, payment="카드")
    _confirmed(temp_db, LedgerType.PURCHASE, (1, 3), 400000, category="식자재")
    _confirmed(temp_db, LedgerType.PURCHASE, (1, 10), 80000, category="인건비")
    _confirmed(temp_db, LedgerType.PURCHASE, (1, 11), 20000, category="인건비(급구)")
    return temp_db


def test_vat_rounds_half_up():
    assert vat(900000) == 90000
    assert vat(14) == 1
    assert vat(15) == 2
    assert vat(-15) == -1
    assert vat(0) == 0


def test_compute_settlement():
    totals = SettlementTotals(card_sales=900000, total_purchase=500000, labor=100000, urgent_labor=20000)

    report = compute_settlement(totals, SettlementAdjustment(*JANUARY))

    assert report.labor_cost_to_exclude == 80000
    assert report.sales_vat == 90000
    assert report.purchase_vat == 42000
    assert report.actual_vat == 48000
    assert report.gross_profit == 400000
    assert report.net_profit == 352000


def test_compute_settlement_with_manual_inputs():
    totals = SettlementTotals(card_sales=900000, cash_sales=100000, total_purchase=500000)

    report = compute_settlement(
        totals, SettlementAdjustment(*JANUARY, reported_cash_sales=100000, manager_rent_support=30000)
    )

    assert report.total_sales == 1000000
    assert report.sales_vat == 100000
    assert report.purchase_vat == 50000
    assert report.net_profit == 500000 - 50000 - 30000


def test_collect_totals_uses_confirmed_rows_in_range(settlement_service, january_ledger):
    totals = settlement_service.collect_totals(*JANUARY)

    assert totals == SettlementTotals(
        card_sales=900000,
        cash_sales=100000,
        total_purchase=500000,
        labor=100000,
        urgent_labor=20000,
    )


def test_get_settlement_without_saved_inputs(settlement_service, january_ledger):
    report = settlement_service.get_settlement(*JANUARY)

    assert report.reported_cash_sales == 0
    assert report.total_sales == 1000000
    assert report.gross_profit == 500000
    assert report.actual_vat == 48000
    assert report.net_profit == 452000


def test_saved_inputs_apply_to_the_exact_period(settlement_service, january_ledger):
    report = settlement_service.save_settlement(*JANUARY, reported_cash_sales="100,000", manager_rent_support=30000)

    assert report.reported_cash_sales == 100000
    assert report.sales_vat == 100000
    assert report.net_profit == 500000 - 58000 - 30000
    assert settlement_service.get_settlement(*JANUARY).manager_rent_support == 30000
    assert settlement_service.get_settlement(date(2024, 1, 1), date(2024, 1, 30)).reported_cash_sales == 0


def test_saving_again_replaces_inputs(settlement_service, temp_db):
    settlement_service.save_settlement(*JANUARY, reported_cash_sales=100000)
    settlement_service.save_settlement(*JANUARY, reported_cash_sales="", manager_rent_support="5000")

    saved = temp_db.get_settlement(*JANUARY)
    assert (saved.reported_cash_sales, saved.manager_rent_support) == (0, 5000)


def test_explicit_manual_inputs_override_saved_ones(settlement_service):
    settlement_service.save_settlement(*JANUARY, reported_cash_sales=100000)

    report = settlement_service.get_settlement(*JANUARY, manual_inputs=SettlementAdjustment(*JANUARY))

    assert report.reported_cash_sales == 0


def test_invalid_manual_input(settlement_service, temp_db):
    with pytest.raises(InvalidManualInput, match="reported_cash_sales"):
        settlement_service.save_settlement(*JANUARY, reported_cash_sales="lots")
    assert temp_db.get_settlement(*JANUARY) is None


def test_reversed_period_is_rejected(settlement_service):
    with pytest.raises(ValidationError):
        settlement_service.get_settlement(date(2024, 2, 1), date(2024, 1, 1))
