"""Tests for database mappers."""

from datetime import datetime, date, UTC

from sheetledger.database.models import (
    Category as ORMCategory,
    ClassificationRule as ORMClassificationRule,
    ColumnMapping as ORMColumnMapping,
    ExcelFilter as ORMExcelFilter,
    PurchaseItem as ORMPurchaseItem,
    SaleItem as ORMSaleItem,
    Settlement as ORMSettlement,
)
from sheetledger.database.mappers import (
    category_to_domain,
    classification_rule_to_domain,
    column_mapping_to_domain,
    keyword_filter_to_domain,
    ledger_row_to_domain,
    settlement_to_domain,
)
from sheetledger.domain.entities import (
    Category,
    ClassificationRule,
    ColumnMapping,
    FilterMode,
    KeywordFilter,
    LedgerRow,
    LedgerType,
    SettlementAdjustment,
)


class TestLedgerRowMapper:
    """Tests for sale and purchase row mapper."""

    def test_sale_item_to_domain(self):
        """Test converting ORM SaleItem to domain LedgerRow."""
        orm_row = ORMSaleItem(
            id=1,
            date=datetime(2024, 1, 15, 12),
            item_name="Coffee",
            amount=4500,
            category="음료",
            payment_method="현금",
            note="takeout",
            confirmed=True,
            created_at=datetime.now(UTC),
        )

        row = ledger_row_to_domain(orm_row)

        assert isinstance(row, LedgerRow)
        assert row.ledger_type is LedgerType.SALES
        assert row.item_name == "Coffee"
        assert row.payment_method == "현금"
        assert row.note == "takeout"
        assert row.confirmed is True

    def test_purchase_item_to_domain(self):
        """Test that purchase rows never carry a payment method."""
        orm_row = ORMPurchaseItem(
            id=2,
            date=datetime(2024, 1, 15, 12),
            item_name="Beans",
            amount=20000,
            category="식자재",
            note="",
            confirmed=False,
            created_at=datetime.now(UTC),
        )

        row = ledger_row_to_domain(orm_row)

        assert row.ledger_type is LedgerType.PURCHASE
        assert row.payment_method is None
        assert row.amount == 20000


class TestRuleCategoryFilterMappers:
    """Tests for rule, category and keyword filter mappers."""

    def test_classification_rule_to_domain(self):
        orm_rule = ORMClassificationRule(id=1, item_name="Coffee", category="음료", ledger_type=LedgerType.SALES)
        assert classification_rule_to_domain(orm_rule) == ClassificationRule(
            id=1, item_name="Coffee", category="음료", ledger_type=LedgerType.SALES
        )

    def test_category_to_domain(self):
        created_at = datetime.now(UTC)
        orm_category = ORMCategory(id=3, name="음료", ledger_type=LedgerType.PURCHASE, created_at=created_at)
        assert category_to_domain(orm_category) == Category(
            id=3, name="음료", ledger_type=LedgerType.PURCHASE, created_at=created_at
        )

    def test_keyword_filter_to_domain(self):
        orm_filter = ORMExcelFilter(id=4, keyword="배달", ledger_type=LedgerType.SALES, is_include=False)
        assert keyword_filter_to_domain(orm_filter) == KeywordFilter(
            id=4, keyword="배달", ledger_type=LedgerType.SALES, is_include=False
        )


class TestColumnMappingMapper:
    """Tests for ColumnMapping mapper."""

    def test_column_mapping_to_domain(self):
        created_at = datetime.now(UTC)
        orm_mapping = ORMColumnMapping(
            id=5,
            owner="alice",
            name="Bank",
            ledger_type=LedgerType.SALES,
            col_date="거래일",
            col_item="Desc",
            col_amount="Deposit",
            col_category=None,
            col_payment="Channel",
            col_note=None,
            filter_exclude="interest",
            filter_include=None,
            filter_mode=FilterMode.EXCLUDE,
            created_at=created_at,
        )

        mapping = column_mapping_to_domain(orm_mapping)

        assert isinstance(mapping, ColumnMapping)
        assert mapping.owner == "alice"
        assert mapping.col_payment == "Channel"
        assert mapping.filter_exclude == "interest"
        assert mapping.filter_mode is FilterMode.EXCLUDE
        assert mapping.created_at == created_at


class TestSettlementMapper:
    """Tests for Settlement mapper."""

    def test_settlement_to_domain(self):
        orm_settlement = ORMSettlement(
            id=1,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            reported_cash_sales=100000,
            manager_rent_support=30000,
        )
        assert settlement_to_domain(orm_settlement) == SettlementAdjustment(
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
            reported_cash_sales=100000,
            manager_rent_support=30000,
        )
