"""SQLAlchemy models for the sheetledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Boolean,
    Enum,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from sheetledger.domain.constants import DEFAULT_CATEGORY, DEFAULT_UPLOAD_PAYMENT
from sheetledger.domain.entities import FilterMode, LedgerType

Base = declarative_base()

# Checked enumerations rather than free strings.
LedgerTypeColumn = Enum(LedgerType, name="ledger_type", create_constraint=True, validate_strings=True)
FilterModeColumn = Enum(FilterMode, name="filter_mode", create_constraint=True, validate_strings=True)


def _now() -> datetime:
    return datetime.now(UTC)


class LedgerColumns:
    """Columns shared by sale and purchase rows."""

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False, index=True)
    item_name = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)
    note = Column(String, nullable=False, default="")
    confirmed = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class SaleItem(LedgerColumns, Base):
    """Sales ledger row."""

    __tablename__ = "sale_items"

    payment_method = Column(String, nullable=False, default=DEFAULT_UPLOAD_PAYMENT)


class PurchaseItem(LedgerColumns, Base):
    """Purchase ledger row."""

    __tablename__ = "purchase_items"


class ClassificationRule(Base):
    """Item name to category rule."""

    __tablename__ = "classification_rules"

    id = Column(Integer, primary_key=True)
    item_name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    ledger_type = Column(LedgerTypeColumn, nullable=False)

    __table_args__ = (
        UniqueConstraint("item_name", "category", "ledger_type", name="uq_rule_item_category_type"),
    )


class Category(Base):
    """Explicit category label."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    ledger_type = Column(LedgerTypeColumn, nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    __table_args__ = (UniqueConstraint("name", "ledger_type", name="uq_category_name_type"),)


class ExcelFilter(Base):
    """Global include/exclude keyword."""

    __tablename__ = "excel_filters"

    id = Column(Integer, primary_key=True)
    keyword = Column(String, nullable=False)
    ledger_type = Column(LedgerTypeColumn, nullable=False)
    is_include = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("keyword", "ledger_type", "is_include", name="uq_filter_keyword_type_polarity"),
    )


class ColumnMapping(Base):
    """Named column mapping profile owned by a user."""

    __tablename__ = "column_mappings"

    id = Column(Integer, primary_key=True)
    owner = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    ledger_type = Column(LedgerTypeColumn, nullable=False)
    col_date = Column(String, nullable=False)
    col_item = Column(String, nullable=False)
    col_amount = Column(String, nullable=False)
    col_category = Column(String, nullable=True)
    col_payment = Column(String, nullable=True)
    col_note = Column(String, nullable=True)
    filter_exclude = Column(String, nullable=True)
    filter_include = Column(String, nullable=True)
    filter_mode = Column(FilterModeColumn, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)


class Settlement(Base):
    """Manual settlement inputs for one exact (start, end) pair."""

    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reported_cash_sales = Column(Integer, nullable=False, default=0)
    manager_rent_support = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    __table_args__ = (UniqueConstraint("start_date", "end_date", name="uq_settlement_period"),)


LEDGER_MODELS = {
    LedgerType.SALES: SaleItem,
    LedgerType.PURCHASE: PurchaseItem,
}


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
