"""Domain model entities for sheetledger.

These are pure data classes representing business concepts, independent of
database schema. Sales and purchase rows share one shape; the ledger type
decides which store they live in.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime, date
from typing import Optional


class LedgerType(str, enum.Enum):
    """The two ledger families. Also used to partition rules and filters."""

    SALES = "SALES"
    PURCHASE = "PURCHASE"


class FilterMode(str, enum.Enum):
    """Row filter policy applied during ingestion."""

    ALL = "ALL"
    INCLUDE = "INCLUDE"
    EXCLUDE = "EXCLUDE"


@dataclass(frozen=True)
class LedgerRow:
    """A sale or purchase row."""

    id: int
    ledger_type: LedgerType
    date: datetime
    item_name: str
    amount: int
    category: str
    payment_method: Optional[str]
    note: str
    confirmed: bool
    created_at: datetime

    @property
    def signature(self) -> tuple[datetime, str, int]:
        """Content signature used to detect duplicates of confirmed data."""
        return (self.date, self.item_name.strip(), self.amount)


@dataclass(frozen=True)
class StagedRow:
    """A parsed row waiting to be written as unconfirmed."""

    date: datetime
    item_name: str
    amount: int
    category: str
    payment_method: Optional[str]
    note: str


@dataclass(frozen=True)
class ClassificationRule:
    """Maps an exact item name to a category for one ledger type."""

    id: int
    item_name: str
    category: str
    ledger_type: LedgerType


@dataclass(frozen=True)
class Category:
    """Explicit category label for one ledger type."""

    id: int
    name: str
    ledger_type: LedgerType
    created_at: datetime


@dataclass(frozen=True)
class KeywordFilter:
    """Globally persisted include/exclude keyword."""

    id: int
    keyword: str
    ledger_type: LedgerType
    is_include: bool


@dataclass(frozen=True)
class ColumnHints:
    """User-supplied header names per logical column. Blank means "use defaults"."""

    date: Optional[str] = None
    item: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None
    payment: Optional[str] = None
    note: Optional[str] = None

    def get(self, column: str) -> Optional[str]:
        value = getattr(self, column)
        if value is None or not str(value).strip():
            return None
        return str(value).strip()


@dataclass(frozen=True)
class ColumnMapping:
    """Named column mapping profile owned by a user."""

    id: int
    owner: str
    name: str
    ledger_type: LedgerType
    col_date: str
    col_item: str
    col_amount: str
    col_category: Optional[str]
    col_payment: Optional[str]
    col_note: Optional[str]
    filter_exclude: Optional[str]
    filter_include: Optional[str]
    filter_mode: Optional[FilterMode]
    created_at: datetime

    def to_hints(self) -> ColumnHints:
        return ColumnHints(
            date=self.col_date,
            item=self.col_item,
            amount=self.col_amount,
            category=self.col_category,
            payment=self.col_payment,
            note=self.col_note,
        )


@dataclass(frozen=True)
class FilterConfig:
    """Per-upload filter mode and runtime keyword strings (comma separated)."""

    mode: FilterMode = FilterMode.EXCLUDE
    include: str = ""
    exclude: str = ""


@dataclass(frozen=True)
class HeaderResolution:
    """Outcome of header detection and column resolution."""

    header_index: int
    headers: tuple[str, ...]
    columns: dict[str, Optional[int]]
    searched: dict[str, tuple[str, ...]]

    @property
    def missing_required(self) -> list[str]:
        return [name for name in ("date", "item", "amount") if self.columns.get(name) is None]


@dataclass(frozen=True)
class ConfirmResult:
    """Counts reported by a confirm run."""

    confirmed: int
    discarded: int


@dataclass(frozen=True)
class SettlementAdjustment:
    """Manual settlement inputs keyed by an exact (start, end) pair."""

    start_date: date
    end_date: date
    reported_cash_sales: int = 0
    manager_rent_support: int = 0


@dataclass(frozen=True)
class SettlementReport:
    """Computed settlement for one period."""

    start_date: date
    end_date: date
    reported_cash_sales: int
    manager_rent_support: int
    card_sales: int
    cash_sales: int
    total_sales: int
    total_purchase: int
    labor_cost_to_exclude: int
    gross_profit: int
    sales_vat: int
    purchase_vat: int
    actual_vat: int
    net_profit: int


@dataclass(frozen=True)
class DailyProfit:
    """One calendar day of the period profit summary."""

    day: date
    sales: int = 0
    sales_count: int = 0
    purchase: int = 0
    purchase_count: int = 0

    @property
    def profit(self) -> int:
        return self.sales - self.purchase


@dataclass(frozen=True)
class PeriodSummary:
    """Daily confirmed sales and purchases over a date range."""

    start_date: date
    end_date: date
    days: tuple[DailyProfit, ...]

    @property
    def total_sales(self) -> int:
        return sum(day.sales for day in self.days)

    @property
    def total_purchase(self) -> int:
        return sum(day.purchase for day in self.days)

    @property
    def total_profit(self) -> int:
        return self.total_sales - self.total_purchase


@dataclass(frozen=True)
class DayDetail:
    """Confirmed rows of one day, largest amounts first."""

    day: date
    sales: tuple[LedgerRow, ...]
    purchases: tuple[LedgerRow, ...]

    @property
    def total_sales(self) -> int:
        return sum(row.amount for row in self.sales)

    @property
    def total_purchase(self) -> int:
        return sum(row.amount for row in self.purchases)


@dataclass(frozen=True)
class ItemAnalysisEntry:
    """Confirmed totals for one (item name, category) group."""

    item_name: str
    category: str
    total_amount: int
    count: int
    average_amount: int


@dataclass(frozen=True)
class Page:
    """A page of ledger rows plus pagination metadata."""

    items: tuple[LedgerRow, ...]
    total: int
    page: int
    limit: int
    total_pages: int = field(default=0)
