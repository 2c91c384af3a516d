"""Column mapping profile domain service."""

from typing import Optional

from sheetledger.database.base import Database
from sheetledger.domain.entities import ColumnMapping, FilterMode, LedgerType
from sheetledger.domain.errors import NotFoundError, ValidationError, mapping_not_found


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ColumnMappingService:
    """Service for managing per-user column mapping profiles."""

    def __init__(self, db: Database):
        """Initialize column mapping service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_mapping(
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
        """Create a column mapping profile.

        Args:
            owner: Owning user
            name: Profile name
            ledger_type: SALES or PURCHASE
            col_date: Header name of the date column
            col_item: Header name of the item column
            col_amount: Header name of the amount column
            col_category: Optional header name of the category column
            col_payment: Optional header name of the payment column (sales)
            col_note: Optional header name of the note column
            filter_exclude: Optional comma separated exclude keywords
            filter_include: Optional comma separated include keywords
            filter_mode: Optional filter mode used with the keywords

        Returns:
            Mapping ID

        Raises:
            ValidationError: If name or a required column is blank
        """
        name = _clean(name)
        if not name:
            raise ValidationError("Mapping name is required")
        required = {"date": _clean(col_date), "item": _clean(col_item), "amount": _clean(col_amount)}
        blank = [column for column, value in required.items() if value is None]
        if blank:
            raise ValidationError(f"Column names are required for: {', '.join(blank)}")

        ledger_type = LedgerType(ledger_type)
        return self.db.create_column_mapping(
            owner=owner,
            name=name,
            ledger_type=ledger_type,
            col_date=required["date"],
            col_item=required["item"],
            col_amount=required["amount"],
            col_category=_clean(col_category),
            col_payment=_clean(col_payment) if ledger_type is LedgerType.SALES else None,
            col_note=_clean(col_note),
            filter_exclude=_clean(filter_exclude),
            filter_include=_clean(filter_include),
            filter_mode=FilterMode(filter_mode) if filter_mode is not None else None,
        )

    def get_mapping(self, mapping_id: int, owner: Optional[str]) -> ColumnMapping:
        """Get a mapping owned by ``owner``.

        Raises:
            NotFoundError: If the mapping doesn't exist or belongs to someone else
        """
        mapping = self.db.get_column_mapping(mapping_id)
        if mapping is None or mapping.owner != owner:
            raise NotFoundError(mapping_not_found(mapping_id))
        return mapping

    def list_mappings(self, owner: str, ledger_type: Optional[LedgerType] = None) -> list[ColumnMapping]:
        """List an owner's mappings, newest first."""
        return self.db.list_column_mappings(owner, LedgerType(ledger_type) if ledger_type else None)

    def delete_mapping(self, mapping_id: int, owner: str) -> None:
        """Delete a mapping owned by ``owner``.

        Raises:
            NotFoundError: If the mapping doesn't exist or belongs to someone else
        """
        self.get_mapping(mapping_id, owner)
        self.db.delete_column_mapping(mapping_id)
