"""Period settlement: sales, purchases, VAT and net profit."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from sheetledger.database.base import Database
from sheetledger.domain.constants import (
    CASH_MARKER,
    LABOR_MARKER,
    URGENT_LABOR_MARKER,
    VAT_RATE_PERCENT,
)
from sheetledger.domain.entities import LedgerType, SettlementAdjustment, SettlementReport
from sheetledger.domain.errors import InvalidManualInput, ValidationError
from sheetledger.utils.amount_parser import parse_manual_amount, round_half_up
from sheetledger.utils.date_parser import end_of_day, start_of_day

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettlementTotals:
    """Confirmed sums a settlement is computed from."""

    card_sales: int = 0
    cash_sales: int = 0
    total_purchase: int = 0
    labor: int = 0
    urgent_labor: int = 0


def vat(base: int) -> int:
    """VAT on ``base``, rounded to the nearest unit with halves going up."""
    return round_half_up(Decimal(base) * VAT_RATE_PERCENT / 100)


def compute_settlement(totals: SettlementTotals, adjustment: SettlementAdjustment) -> SettlementReport:
    """Build the settlement report from confirmed totals and manual inputs.

    Urgent labor is subtracted from labor, so it stays in the purchase VAT
    base. Both VAT terms are rounded before they are subtracted.
    """
    total_sales = totals.card_sales + totals.cash_sales
    labor_cost_to_exclude = totals.labor - totals.urgent_labor
    gross_profit = total_sales - totals.total_purchase

    sales_vat = vat(totals.card_sales + adjustment.reported_cash_sales)
    purchase_vat = vat(totals.total_purchase - labor_cost_to_exclude)
    actual_vat = sales_vat - purchase_vat

    return SettlementReport(
        start_date=adjustment.start_date,
        end_date=adjustment.end_date,
        reported_cash_sales=adjustment.reported_cash_sales,
        manager_rent_support=adjustment.manager_rent_support,
        card_sales=totals.card_sales,
        cash_sales=totals.cash_sales,
        total_sales=total_sales,
        total_purchase=totals.total_purchase,
        labor_cost_to_exclude=labor_cost_to_exclude,
        gross_profit=gross_profit,
        sales_vat=sales_vat,
        purchase_vat=purchase_vat,
        actual_vat=actual_vat,
        net_profit=gross_profit - actual_vat - adjustment.manager_rent_support,
    )


class SettlementService:
    """Service for computing and saving period settlements."""

    def __init__(self, db: Database):
        """Initialize settlement service.

        Args:
            db: Database instance
        """
        self.db = db

    def collect_totals(self, start_date: date, end_date: date) -> SettlementTotals:
        """Sum confirmed rows dated from the start of ``start_date`` to the end of ``end_date``."""
        start, end = start_of_day(start_date), end_of_day(end_date)
        total_sales = self.db.sum_ledger_amounts(LedgerType.SALES, start, end)
        cash_sales = self.db.sum_ledger_amounts(LedgerType.SALES, start, end, payment_contains=CASH_MARKER)
        return SettlementTotals(
            card_sales=total_sales - cash_sales,
            cash_sales=cash_sales,
            total_purchase=self.db.sum_ledger_amounts(LedgerType.PURCHASE, start, end),
            labor=self.db.sum_ledger_amounts(
                LedgerType.PURCHASE, start, end, category_contains=LABOR_MARKER
            ),
            urgent_labor=self.db.sum_ledger_amounts(
                LedgerType.PURCHASE, start, end, category_contains=URGENT_LABOR_MARKER
            ),
        )

    def get_settlement(
        self,
        start_date: date,
        end_date: date,
        manual_inputs: Optional[SettlementAdjustment] = None,
    ) -> SettlementReport:
        """Compute the settlement for a period.

        Args:
            start_date: First day of the period
            end_date: Last day of the period
            manual_inputs: Adjustments to use; when omitted the ones saved for
                exactly this date pair are used, or zeros

        Returns:
            SettlementReport

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        if manual_inputs is None:
            manual_inputs = self.db.get_settlement(start_date, end_date) or SettlementAdjustment(
                start_date=start_date, end_date=end_date
            )
        return compute_settlement(self.collect_totals(start_date, end_date), manual_inputs)

    def save_settlement(
        self,
        start_date: date,
        end_date: date,
        reported_cash_sales: Any = 0,
        manager_rent_support: Any = 0,
    ) -> SettlementReport:
        """Save manual inputs for an exact date pair and recompute.

        Raises:
            InvalidManualInput: If an input is not a number
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        adjustment = SettlementAdjustment(
            start_date=start_date,
            end_date=end_date,
            reported_cash_sales=_manual_amount("reported_cash_sales", reported_cash_sales),
            manager_rent_support=_manual_amount("manager_rent_support", manager_rent_support),
        )
        self.db.run_atomic(
            lambda db: db.upsert_settlement(
                start_date,
                end_date,
                adjustment.reported_cash_sales,
                adjustment.manager_rent_support,
            )
        )
        logger.info(
            "Saved settlement inputs for %s..%s: reported cash %d, rent support %d",
            start_date,
            end_date,
            adjustment.reported_cash_sales,
            adjustment.manager_rent_support,
        )
        return self.get_settlement(start_date, end_date)


def _manual_amount(field_name: str, value: Any) -> int:
    try:
        return parse_manual_amount(value)
    except ValueError:
        raise InvalidManualInput(field_name, value)
