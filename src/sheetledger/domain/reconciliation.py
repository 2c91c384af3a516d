"""Promotion of unconfirmed rows with duplicate detection."""

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from sheetledger.database.base import Database
from sheetledger.domain.entities import ConfirmResult, LedgerRow, LedgerType
from sheetledger.domain.errors import ValidationError
from sheetledger.domain.ingestion import ledger_lock_key
from sheetledger.domain.row_filter import expand_search_keywords, ledger_row_matches
from sheetledger.utils.date_parser import end_of_day, start_of_day

logger = logging.getLogger(__name__)


def split_duplicates(
    candidates: Sequence[LedgerRow], confirmed: Iterable[LedgerRow]
) -> tuple[list[int], list[int]]:
    """Split candidates into (promote_ids, discard_ids).

    A candidate whose signature matches a confirmed row, or an earlier
    candidate, is discarded. Candidates are visited in the given order.
    """
    seen = {row.signature for row in confirmed}
    promote: list[int] = []
    discard: list[int] = []
    for row in candidates:
        if row.signature in seen:
            discard.append(row.id)
        else:
            promote.append(row.id)
            seen.add(row.signature)
    return promote, discard


class ReconciliationService:
    """Service for confirming and pruning ledger rows."""

    def __init__(self, db: Database):
        """Initialize reconciliation service.

        Args:
            db: Database instance
        """
        self.db = db

    def confirm(
        self,
        ledger_type: LedgerType,
        keywords: Optional[Iterable[str]] = None,
        ids: Optional[Iterable[int]] = None,
    ) -> ConfirmResult:
        """Confirm unconfirmed rows, discarding duplicates of confirmed data.

        Args:
            ledger_type: SALES or PURCHASE
            keywords: Only confirm rows matching any keyword; all rows if empty
            ids: Only confirm these rows

        Returns:
            ConfirmResult with confirmed and discarded counts
        """
        ledger_type = LedgerType(ledger_type)
        variants = expand_search_keywords(keywords or ())
        row_ids = list(ids) if ids is not None else None

        def reconcile(db: Database) -> ConfirmResult:
            candidates = db.list_ledger_rows(ledger_type, confirmed=False, ids=row_ids)
            if variants:
                candidates = [row for row in candidates if ledger_row_matches(row, variants)]
            if not candidates:
                return ConfirmResult(confirmed=0, discarded=0)

            existing = db.list_ledger_rows(
                ledger_type, confirmed=True, dates={row.date for row in candidates}
            )
            promote, discard = split_duplicates(candidates, existing)
            db.delete_ledger_rows(ledger_type, discard)
            db.confirm_ledger_rows(ledger_type, promote)
            return ConfirmResult(confirmed=len(promote), discarded=len(discard))

        result = self.db.run_atomic(reconcile, lock_key=ledger_lock_key(ledger_type))
        logger.info(
            "Confirmed %d %s rows, discarded %d duplicates",
            result.confirmed,
            ledger_type.value,
            result.discarded,
        )
        return result

    def delete_range(
        self, ledger_type: LedgerType, start_date: date, end_date: date, only_confirmed: bool = True
    ) -> int:
        """Delete rows dated between two days, both inclusive.

        Args:
            ledger_type: SALES or PURCHASE
            start_date: First day
            end_date: Last day
            only_confirmed: Leave unconfirmed rows alone

        Returns:
            Number of rows deleted

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError("Start date must be on or before end date")
        ledger_type = LedgerType(ledger_type)
        deleted = self.db.run_atomic(
            lambda db: db.delete_ledger_range(
                ledger_type, start_of_day(start_date), end_of_day(end_date), only_confirmed
            ),
            lock_key=ledger_lock_key(ledger_type),
        )
        logger.info(
            "Deleted %d %s rows between %s and %s (only confirmed: %s)",
            deleted,
            ledger_type.value,
            start_date,
            end_date,
            only_confirmed,
        )
        return deleted
