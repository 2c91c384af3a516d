"""Ledger row maintenance domain service."""

import math
from datetime import date, datetime
from typing import Any, Iterable, Optional

from sheetledger.database.base import Database
from sheetledger.domain.constants import DEFAULT_CATEGORY, DEFAULT_MANUAL_PAYMENT
from sheetledger.domain.entities import LedgerRow, LedgerType, Page, StagedRow
from sheetledger.domain.errors import NotFoundError, ValidationError, ledger_row_not_found
from sheetledger.domain.ingestion import ledger_lock_key
from sheetledger.domain.row_filter import expand_search_keywords, ledger_row_matches
from sheetledger.utils.amount_parser import parse_manual_amount
from sheetledger.utils.date_parser import pin_time

DEFAULT_PAGE_SIZE = 20


def _required_amount(value: Any) -> int:
    try:
        amount = parse_manual_amount(value)
    except ValueError as e:
        raise ValidationError(str(e))
    if amount == 0:
        raise ValidationError("Amount must not be zero")
    return amount


def _row_date(value: date) -> datetime:
    if isinstance(value, datetime):
        value = value.date()
    return pin_time(value)


class LedgerService:
    """Service for listing and editing ledger rows by hand."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_row(
        self,
        ledger_type: LedgerType,
        row_date: date,
        item_name: str,
        amount: Any,
        category: Optional[str] = None,
        payment_method: Optional[str] = None,
        note: Optional[str] = None,
    ) -> int:
        """Add an unconfirmed row by hand.

        Args:
            ledger_type: SALES or PURCHASE
            row_date: Day of the row
            item_name: Item name
            amount: Amount, must not be zero
            category: Optional category (defaults to the generic label)
            payment_method: Optional payment method, sales only (defaults to card)
            note: Optional note

        Returns:
            Row ID

        Raises:
            ValidationError: If item name is blank or amount is invalid
        """
        ledger_type = LedgerType(ledger_type)
        item_name = (item_name or "").strip()
        if not item_name:
            raise ValidationError("Item name is required")

        payment = None
        if ledger_type is LedgerType.SALES:
            payment = (payment_method or "").strip() or DEFAULT_MANUAL_PAYMENT

        row = StagedRow(
            date=_row_date(row_date),
            item_name=item_name,
            amount=_required_amount(amount),
            category=(category or "").strip() or DEFAULT_CATEGORY,
            payment_method=payment,
            note=(note or "").strip(),
        )
        return self.db.create_ledger_row(ledger_type, row, confirmed=False)

    def get_row(self, ledger_type: LedgerType, row_id: int) -> LedgerRow:
        """Get a row by ID.

        Raises:
            NotFoundError: If the row doesn't exist
        """
        row = self.db.get_ledger_row(LedgerType(ledger_type), row_id)
        if row is None:
            raise NotFoundError(ledger_row_not_found(row_id))
        return row

    def list_unconfirmed(
        self,
        ledger_type: LedgerType,
        keywords: Optional[Iterable[str]] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Page:
        """List unconfirmed rows, newest date first.

        Args:
            ledger_type: SALES or PURCHASE
            keywords: Only rows matching any keyword in any width
            page: 1-based page number
            limit: Rows per page

        Returns:
            Page of rows with total count
        """
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")

        rows = self.db.list_ledger_rows(LedgerType(ledger_type), confirmed=False)
        variants = expand_search_keywords(keywords or ())
        if variants:
            rows = [row for row in rows if ledger_row_matches(row, variants)]
        rows.sort(key=lambda row: (row.date, row.id), reverse=True)

        offset = (page - 1) * limit
        return Page(
            items=tuple(rows[offset:offset + limit]),
            total=len(rows),
            page=page,
            limit=limit,
            total_pages=math.ceil(len(rows) / limit),
        )

    def update_row(
        self,
        ledger_type: LedgerType,
        row_id: int,
        row_date: Optional[date] = None,
        item_name: Optional[str] = None,
        amount: Any = None,
        category: Optional[str] = None,
        payment_method: Optional[str] = None,
        note: Optional[str] = None,
    ) -> LedgerRow:
        """Update the given fields of a row.

        Returns:
            The updated row

        Raises:
            NotFoundError: If the row doesn't exist
            ValidationError: If a value is invalid
        """
        ledger_type = LedgerType(ledger_type)
        self.get_row(ledger_type, row_id)

        fields: dict[str, Any] = {}
        if row_date is not None:
            fields["date"] = _row_date(row_date)
        if item_name is not None:
            if not item_name.strip():
                raise ValidationError("Item name is required")
            fields["item_name"] = item_name.strip()
        if amount is not None:
            fields["amount"] = _required_amount(amount)
        if category is not None:
            fields["category"] = category.strip() or DEFAULT_CATEGORY
        if payment_method is not None:
            if ledger_type is not LedgerType.SALES:
                raise ValidationError("Only sales rows have a payment method")
            fields["payment_method"] = payment_method.strip() or DEFAULT_MANUAL_PAYMENT
        if note is not None:
            fields["note"] = note.strip()

        if fields:
            self.db.update_ledger_row(ledger_type, row_id, **fields)
        return self.get_row(ledger_type, row_id)

    def delete_rows(self, ledger_type: LedgerType, ids: Iterable[int]) -> int:
        """Delete rows by ID. Returns number deleted."""
        return self.db.delete_ledger_rows(LedgerType(ledger_type), ids)

    def delete_unconfirmed_except(self, ledger_type: LedgerType, keywords: Iterable[str]) -> int:
        """Delete every unconfirmed row that matches none of the keywords.

        Raises:
            ValidationError: If no keyword is given
        """
        ledger_type = LedgerType(ledger_type)
        variants = expand_search_keywords(keywords)
        if not variants:
            raise ValidationError("No keywords provided for exclusion delete")

        def prune(db: Database) -> int:
            rows = db.list_ledger_rows(ledger_type, confirmed=False)
            doomed = [row.id for row in rows if not ledger_row_matches(row, variants)]
            return db.delete_ledger_rows(ledger_type, doomed)

        return self.db.run_atomic(prune, lock_key=ledger_lock_key(ledger_type))

    def delete_confirmed_items(self, ledger_type: LedgerType, item_names: Iterable[str]) -> int:
        """Delete confirmed rows with the given item names. Returns number deleted."""
        names = [name for name in item_names if name]
        return self.db.delete_confirmed_by_item_names(LedgerType(ledger_type), names)
