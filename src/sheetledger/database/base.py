"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

# Import entities directly to avoid circular import through domain/__init__.py
from sheetledger.domain.entities import (
    Category,
    ClassificationRule,
    ColumnMapping,
    FilterMode,
    KeywordFilter,
    LedgerRow,
    LedgerType,
    SettlementAdjustment,
    StagedRow,
)

T = TypeVar("T")


class Database(ABC):
    """Abstract database interface for sheetledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Unit of work
    @abstractmethod
    def run_atomic(self, fn: Callable[["Database"], T], lock_key: Optional[str] = None) -> T:
        """Run ``fn(self)`` as one transaction.

        Commits when ``fn`` returns, rolls back and re-raises when it raises.
        Callers sharing a ``lock_key`` are serialized.
        """
        pass

    # Ledger row operations
    @abstractmethod
    def insert_ledger_rows(
        self, ledger_type: LedgerType, rows: Sequence[StagedRow], confirmed: bool = False
    ) -> int:
        """Insert rows. Returns number inserted."""
        pass

    @abstractmethod
    def create_ledger_row(self, ledger_type: LedgerType, row: StagedRow, confirmed: bool = False) -> int:
        """Insert one row. Returns row ID."""
        pass

    @abstractmethod
    def get_ledger_row(self, ledger_type: LedgerType, row_id: int) -> Optional[LedgerRow]:
        """Get a ledger row by ID."""
        pass

    @abstractmethod
    def list_ledger_rows(
        self,
        ledger_type: LedgerType,
        confirmed: Optional[bool] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        dates: Optional[Iterable[datetime]] = None,
        ids: Optional[Iterable[int]] = None,
    ) -> list[LedgerRow]:
        """List ledger rows in insertion order with optional filters.

        Args:
            confirmed: Only confirmed (True) or unconfirmed (False) rows
            start: Inclusive lower bound on date
            end: Inclusive upper bound on date
            dates: Only rows whose date equals one of these
            ids: Only rows with these IDs
        """
        pass

    @abstractmethod
    def update_ledger_row(self, ledger_type: LedgerType, row_id: int, **fields: Any) -> None:
        """Update fields of a ledger row."""
        pass

    @abstractmethod
    def delete_ledger_rows(self, ledger_type: LedgerType, ids: Iterable[int]) -> int:
        """Delete rows by ID. Returns number deleted."""
        pass

    @abstractmethod
    def delete_unconfirmed_rows(self, ledger_type: LedgerType) -> int:
        """Delete every unconfirmed row of a ledger. Returns number deleted."""
        pass

    @abstractmethod
    def delete_ledger_range(
        self, ledger_type: LedgerType, start: datetime, end: datetime, only_confirmed: bool
    ) -> int:
        """Delete rows dated within [start, end]. Returns number deleted."""
        pass

    @abstractmethod
    def delete_confirmed_by_item_names(self, ledger_type: LedgerType, item_names: Iterable[str]) -> int:
        """Delete confirmed rows with the given item names. Returns number deleted."""
        pass

    @abstractmethod
    def confirm_ledger_rows(self, ledger_type: LedgerType, ids: Iterable[int]) -> int:
        """Mark rows as confirmed. Returns number updated."""
        pass

    @abstractmethod
    def sum_ledger_amounts(
        self,
        ledger_type: LedgerType,
        start: datetime,
        end: datetime,
        category_contains: Optional[str] = None,
        payment_contains: Optional[str] = None,
    ) -> int:
        """Sum confirmed amounts dated within [start, end] with optional substring filters."""
        pass

    # Classification rule operations
    @abstractmethod
    def create_classification_rule(self, item_name: str, category: str, ledger_type: LedgerType) -> int:
        """Create a classification rule. Returns rule ID."""
        pass

    @abstractmethod
    def find_classification_rule(
        self, item_name: str, category: str, ledger_type: LedgerType
    ) -> Optional[ClassificationRule]:
        """Find a rule by its natural identity."""
        pass

    @abstractmethod
    def list_classification_rules(self, ledger_type: LedgerType) -> list[ClassificationRule]:
        """List rules of a ledger type ordered by item name."""
        pass

    @abstractmethod
    def delete_classification_rule(self, rule_id: int) -> bool:
        """Delete a rule. Returns False if it did not exist."""
        pass

    @abstractmethod
    def delete_classification_rules_by_category(self, category: str, ledger_type: LedgerType) -> int:
        """Delete every rule of a category. Returns number deleted."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, ledger_type: LedgerType) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str, ledger_type: LedgerType) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self, ledger_type: LedgerType) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> bool:
        """Delete a category. Returns False if it did not exist."""
        pass

    # Keyword filter operations
    @abstractmethod
    def create_keyword_filter(self, keyword: str, ledger_type: LedgerType, is_include: bool) -> int:
        """Create a keyword filter. Returns filter ID."""
        pass

    @abstractmethod
    def find_keyword_filter(
        self, keyword: str, ledger_type: LedgerType, is_include: bool
    ) -> Optional[KeywordFilter]:
        """Find a filter by its natural identity."""
        pass

    @abstractmethod
    def list_keyword_filters(self, ledger_type: LedgerType) -> list[KeywordFilter]:
        """List filters ordered by keyword."""
        pass

    @abstractmethod
    def delete_keyword_filter(self, filter_id: int) -> bool:
        """Delete a filter. Returns False if it did not exist."""
        pass

    # Column mapping operations
    @abstractmethod
    def create_column_mapping(
        self,
        owner: str,
        name: str,
        ledger_type: LedgerType,
        col_date: str,
        col_item: str,
        col_amount: str,
        col_category: Optional[str] = None,
        col_payment: Optional[str] = None,
        col_note: Optional[str] = None,
        filter_exclude: Optional[str] = None,
        filter_include: Optional[str] = None,
        filter_mode: Optional[FilterMode] = None,
    ) -> int:
        """Create a column mapping profile. Returns mapping ID."""
        pass

    @abstractmethod
    def get_column_mapping(self, mapping_id: int) -> Optional[ColumnMapping]:
        """Get column mapping by ID."""
        pass

    @abstractmethod
    def list_column_mappings(
        self, owner: str, ledger_type: Optional[LedgerType] = None
    ) -> list[ColumnMapping]:
        """List an owner's mappings, newest first."""
        pass

    @abstractmethod
    def delete_column_mapping(self, mapping_id: int) -> bool:
        """Delete a mapping. Returns False if it did not exist."""
        pass

    # Settlement operations
    @abstractmethod
    def get_settlement(self, start_date: date, end_date: date) -> Optional[SettlementAdjustment]:
        """Get manual settlement inputs for an exact date pair."""
        pass

    @abstractmethod
    def upsert_settlement(
        self,
        start_date: date,
        end_date: date,
        reported_cash_sales: int,
        manager_rent_support: int,
    ) -> None:
        """Create or replace manual settlement inputs for an exact date pair."""
        pass
