"""Profit and item reports over confirmed rows."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from sheetledger.database.base import Database
from sheetledger.domain.entities import (
    DailyProfit,
    DayDetail,
    ItemAnalysisEntry,
    LedgerRow,
    LedgerType,
    PeriodSummary,
)
from sheetledger.domain.errors import ValidationError
from sheetledger.utils.amount_parser import round_half_up
from sheetledger.utils.date_parser import end_of_day, start_of_day


def _day_totals(rows: Iterable[LedgerRow]) -> dict[date, tuple[int, int]]:
    totals: dict[date, list[int]] = defaultdict(lambda: [0, 0])
    for row in rows:
        entry = totals[row.date.date()]
        entry[0] += row.amount
        entry[1] += 1
    return {day: (amount, count) for day, (amount, count) in totals.items()}


class ReportService:
    """Service for building reports from confirmed ledger rows."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def period_summary(self, start_date: date, end_date: date) -> PeriodSummary:
        """Daily sales, purchases and profit for every day in the range.

        Days without rows are included with zeros.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        start, end = start_of_day(start_date), end_of_day(end_date)
        sales = _day_totals(self.db.list_ledger_rows(LedgerType.SALES, confirmed=True, start=start, end=end))
        purchases = _day_totals(
            self.db.list_ledger_rows(LedgerType.PURCHASE, confirmed=True, start=start, end=end)
        )

        days = []
        day = start_date
        while day <= end_date:
            sale_amount, sale_count = sales.get(day, (0, 0))
            purchase_amount, purchase_count = purchases.get(day, (0, 0))
            days.append(
                DailyProfit(
                    day=day,
                    sales=sale_amount,
                    sales_count=sale_count,
                    purchase=purchase_amount,
                    purchase_count=purchase_count,
                )
            )
            day += timedelta(days=1)

        return PeriodSummary(start_date=start_date, end_date=end_date, days=tuple(days))

    def day_detail(self, day: date) -> DayDetail:
        """Confirmed sales and purchases of one day, ordered by amount descending."""
        start, end = start_of_day(day), end_of_day(day)
        sales, purchases = (
            sorted(
                self.db.list_ledger_rows(ledger_type, confirmed=True, start=start, end=end),
                key=lambda row: row.amount,
                reverse=True,
            )
            for ledger_type in (LedgerType.SALES, LedgerType.PURCHASE)
        )
        return DayDetail(day=day, sales=tuple(sales), purchases=tuple(purchases))

    def item_analysis(
        self,
        ledger_type: LedgerType,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        keywords: Optional[Iterable[str]] = None,
    ) -> list[ItemAnalysisEntry]:
        """Group confirmed rows by item name and category.

        Args:
            ledger_type: SALES or PURCHASE
            start_date: Optional first day (used only together with end_date)
            end_date: Optional last day
            category: Only rows with exactly this category
            keywords: Only rows whose item name contains any keyword

        Returns:
            Entries ordered by total amount, largest first
        """
        start = end = None
        if start_date is not None and end_date is not None:
            start, end = start_of_day(start_date), end_of_day(end_date)
        rows = self.db.list_ledger_rows(LedgerType(ledger_type), confirmed=True, start=start, end=end)

        if category is not None:
            rows = [row for row in rows if row.category == category]
        keys = [k.strip() for k in keywords or () if k.strip()]
        if keys:
            rows = [row for row in rows if any(k in row.item_name for k in keys)]

        groups: dict[tuple[str, str], list[int]] = defaultdict(lambda: [0, 0])
        for row in rows:
            group = groups[(row.item_name, row.category)]
            group[0] += row.amount
            group[1] += 1

        entries = [
            ItemAnalysisEntry(
                item_name=item_name,
                category=category_name,
                total_amount=total,
                count=count,
                average_amount=round_half_up(Decimal(total) / count),
            )
            for (item_name, category_name), (total, count) in groups.items()
        ]
        entries.sort(key=lambda entry: entry.total_amount, reverse=True)
        return entries
