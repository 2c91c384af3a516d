"""Spreadsheet ingestion into the unconfirmed ledger."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from sheetledger.database.base import Database
from sheetledger.domain.classifier import Classifier
from sheetledger.domain.column_mapping import ColumnMappingService
from sheetledger.domain.constants import DEFAULT_UPLOAD_PAYMENT
from sheetledger.domain.entities import (
    ColumnHints,
    FilterConfig,
    FilterMode,
    HeaderResolution,
    LedgerType,
    StagedRow,
)
from sheetledger.domain.errors import (
    EmptySheet,
    MissingRequiredColumns,
    NoFileProvided,
    NoValidRowsFound,
    ValidationError,
)
from sheetledger.domain.header_resolver import resolve_headers
from sheetledger.domain.row_filter import RowFilter, row_content
from sheetledger.utils.amount_parser import parse_currency
from sheetledger.utils.date_parser import parse_sheet_date
from sheetledger.utils.workbook import cell_text, read_first_sheet

logger = logging.getLogger(__name__)


def ledger_lock_key(ledger_type: LedgerType) -> str:
    """Lock shared by every operation that replaces or promotes unconfirmed rows."""
    return f"ledger:{ledger_type.value}"


@dataclass
class StagingResult:
    """Rows that survived staging plus why the others did not."""

    rows: list[StagedRow] = field(default_factory=list)
    skipped: Counter = field(default_factory=Counter)


@dataclass(frozen=True)
class IngestResult:
    """Outcome of a successful upload."""

    inserted: int
    replaced: int
    header_row_index: int
    skipped: dict[str, int]


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def stage_rows(
    grid: Sequence[Sequence[Any]],
    ledger_type: LedgerType,
    resolution: HeaderResolution,
    row_filter: RowFilter,
    classifier: Classifier,
) -> StagingResult:
    """Turn the data rows below the header into staged ledger rows.

    Order per row: blank check, keyword filter, date, amount, classification.
    Rows failing a step are counted in ``skipped`` and never raise.
    """
    columns = resolution.columns
    result = StagingResult()
    commas_only = ledger_type is LedgerType.PURCHASE

    for offset, row in enumerate(grid[resolution.header_index + 1:], start=resolution.header_index + 2):
        raw_item = _cell(row, columns["item"])
        raw_amount = _cell(row, columns["amount"])
        if cell_text(raw_item) == "" and cell_text(raw_amount) == "":
            result.skipped["blank"] += 1
            continue

        item_name = cell_text(raw_item)
        sheet_category = cell_text(_cell(row, columns["category"])) if columns["category"] is not None else None
        note = cell_text(_cell(row, columns["note"]))
        payment = cell_text(_cell(row, columns["payment"]))

        content = row_content(item_name, sheet_category, note, payment)
        if not row_filter.accepts(content):
            result.skipped["filtered"] += 1
            logger.debug("Row %d filtered out: %s", offset, item_name)
            continue

        try:
            row_date = parse_sheet_date(_cell(row, columns["date"]))
        except ValueError as e:
            result.skipped["invalid_date"] += 1
            logger.debug("Row %d skipped: %s", offset, e)
            continue

        amount = parse_currency(raw_amount, commas_only=commas_only)
        if amount == 0:
            result.skipped["zero_amount"] += 1
            logger.debug("Row %d skipped: zero or unparseable amount %r", offset, raw_amount)
            continue

        payment_method = None
        if ledger_type is LedgerType.SALES:
            payment_method = payment or DEFAULT_UPLOAD_PAYMENT

        result.rows.append(
            StagedRow(
                date=row_date,
                item_name=item_name,
                amount=amount,
                category=classifier.classify(item_name, sheet_category or None),
                payment_method=payment_method,
                note=note,
            )
        )

    return result


class IngestionService:
    """Service for uploading spreadsheets into the unconfirmed ledger."""

    def __init__(self, db: Database):
        """Initialize ingestion service.

        Args:
            db: Database instance
        """
        self.db = db
        self.mapping_service = ColumnMappingService(db)

    def ingest(
        self,
        ledger_type: LedgerType,
        file_bytes: Optional[bytes],
        hints: Optional[ColumnHints] = None,
        filter_config: Optional[FilterConfig] = None,
        password: Optional[str] = None,
        mapping_id: Optional[int] = None,
        owner: Optional[str] = None,
    ) -> IngestResult:
        """Replace the unconfirmed rows of a ledger with the rows of an upload.

        Args:
            ledger_type: SALES or PURCHASE
            file_bytes: Raw xlsx bytes
            hints: Inline column name hints
            filter_config: Filter mode and runtime keywords
            password: Password for protected workbooks
            mapping_id: Saved mapping profile supplying hints (and keywords,
                when ``filter_config`` is not given)
            owner: Owner of ``mapping_id``

        Returns:
            IngestResult with the inserted count

        Raises:
            IngestionError: Upload rejected; nothing was written
        """
        ledger_type = LedgerType(ledger_type)
        if not file_bytes:
            raise NoFileProvided()

        if mapping_id is not None:
            mapping = self.mapping_service.get_mapping(mapping_id, owner)
            if mapping.ledger_type is not ledger_type:
                raise ValidationError(
                    f"Column mapping '{mapping.name}' is for {mapping.ledger_type.value}, not {ledger_type.value}"
                )
            hints = hints or mapping.to_hints()
            if filter_config is None:
                filter_config = FilterConfig(
                    mode=mapping.filter_mode or FilterMode.EXCLUDE,
                    include=mapping.filter_include or "",
                    exclude=mapping.filter_exclude or "",
                )

        hints = hints or ColumnHints()
        filter_config = filter_config or FilterConfig()

        grid = read_first_sheet(file_bytes, password)
        if not grid:
            raise EmptySheet()

        resolution = resolve_headers(grid, ledger_type, hints)
        logger.info(
            "Header row %d for %s upload, columns %s",
            resolution.header_index + 1,
            ledger_type.value,
            resolution.columns,
        )
        missing = resolution.missing_required
        if missing:
            error = MissingRequiredColumns(
                missing,
                resolution.header_index,
                resolution.headers,
                {name: hints.get(name) for name in missing},
                resolution.searched,
            )
            logger.warning("Upload rejected: %s", error)
            raise error

        row_filter = RowFilter.build(filter_config, self.db.list_keyword_filters(ledger_type))
        classifier = Classifier(self.db.list_classification_rules(ledger_type))
        staged = stage_rows(grid, ledger_type, resolution, row_filter, classifier)
        if not staged.rows:
            logger.warning("Upload rejected, no valid rows (skipped: %s)", dict(staged.skipped))
            raise NoValidRowsFound()

        replaced, inserted = self.db.run_atomic(
            lambda db: self._replace_unconfirmed(db, ledger_type, staged.rows),
            lock_key=ledger_lock_key(ledger_type),
        )
        logger.info(
            "Replaced %d unconfirmed %s rows with %d new rows (skipped: %s)",
            replaced,
            ledger_type.value,
            inserted,
            dict(staged.skipped),
        )
        return IngestResult(
            inserted=inserted,
            replaced=replaced,
            header_row_index=resolution.header_index,
            skipped=dict(staged.skipped),
        )

    @staticmethod
    def _replace_unconfirmed(
        db: Database, ledger_type: LedgerType, rows: Iterable[StagedRow]
    ) -> tuple[int, int]:
        replaced = db.delete_unconfirmed_rows(ledger_type)
        inserted = db.insert_ledger_rows(ledger_type, list(rows), confirmed=False)
        return replaced, inserted
