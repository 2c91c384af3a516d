"""Mapper functions to convert between domain models and SQLAlchemy models."""

from sheetledger.domain import entities as domain
from sheetledger.domain.entities import LedgerType
from sheetledger.database.models import (
    Category as ORMCategory,
    ClassificationRule as ORMClassificationRule,
    ColumnMapping as ORMColumnMapping,
    ExcelFilter as ORMExcelFilter,
    LedgerColumns,
    SaleItem as ORMSaleItem,
    Settlement as ORMSettlement,
)


def ledger_row_to_domain(orm_row: LedgerColumns) -> domain.LedgerRow:
    """Convert a SaleItem or PurchaseItem model to a domain LedgerRow."""
    is_sale = isinstance(orm_row, ORMSaleItem)
    return domain.LedgerRow(
        id=orm_row.id,
        ledger_type=LedgerType.SALES if is_sale else LedgerType.PURCHASE,
        date=orm_row.date,
        item_name=orm_row.item_name,
        amount=orm_row.amount,
        category=orm_row.category,
        payment_method=orm_row.payment_method if is_sale else None,
        note=orm_row.note,
        confirmed=orm_row.confirmed,
        created_at=orm_row.created_at,
    )


def classification_rule_to_domain(orm_rule: ORMClassificationRule) -> domain.ClassificationRule:
    return domain.ClassificationRule(
        id=orm_rule.id,
        item_name=orm_rule.item_name,
        category=orm_rule.category,
        ledger_type=orm_rule.ledger_type,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        ledger_type=orm_category.ledger_type,
        created_at=orm_category.created_at,
    )


def keyword_filter_to_domain(orm_filter: ORMExcelFilter) -> domain.KeywordFilter:
    return domain.KeywordFilter(
        id=orm_filter.id,
        keyword=orm_filter.keyword,
        ledger_type=orm_filter.ledger_type,
        is_include=orm_filter.is_include,
    )


def column_mapping_to_domain(orm_mapping: ORMColumnMapping) -> domain.ColumnMapping:
    return domain.ColumnMapping(
        id=orm_mapping.id,
        owner=orm_mapping.owner,
        name=orm_mapping.name,
        ledger_type=orm_mapping.ledger_type,
        col_date=orm_mapping.col_date,
        col_item=orm_mapping.col_item,
        col_amount=orm_mapping.col_amount,
        col_category=orm_mapping.col_category,
        col_payment=orm_mapping.col_payment,
        col_note=orm_mapping.col_note,
        filter_exclude=orm_mapping.filter_exclude,
        filter_include=orm_mapping.filter_include,
        filter_mode=orm_mapping.filter_mode,
        created_at=orm_mapping.created_at,
    )


def settlement_to_domain(orm_settlement: ORMSettlement) -> domain.SettlementAdjustment:
    return domain.SettlementAdjustment(
        start_date=orm_settlement.start_date,
        end_date=orm_settlement.end_date,
        reported_cash_sales=orm_settlement.reported_cash_sales,
        manager_rent_support=orm_settlement.manager_rent_support,
    )
