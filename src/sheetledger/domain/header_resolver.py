"""Header row detection and column resolution.

Uploaded sheets often start with titles, account numbers or blank rows, so
the header is searched for instead of assumed. Every row within the scan
limit is scored against the known header keywords; the first row with the
best score wins. Columns are then resolved against that row, preferring the
user's hint over the default keywords.
"""

from typing import Any, Iterable, Optional, Sequence

from sheetledger.domain.constants import DEFAULT_KEYWORDS, HEADER_SCAN_LIMIT
from sheetledger.domain.entities import ColumnHints, HeaderResolution, LedgerType
from sheetledger.utils.workbook import cell_text

LOGICAL_COLUMNS = ("date", "item", "amount", "category", "payment", "note")
REQUIRED_COLUMNS = ("date", "item", "amount")
HINT_BONUS = 3


def find_column(headers: Sequence[str], keywords: Iterable[str]) -> Optional[int]:
    """Index of the first header containing any keyword, case-insensitively."""
    lowered = [k.lower() for k in keywords if k]
    if not lowered:
        return None
    for index, header in enumerate(headers):
        if not header:
            continue
        text = header.lower()
        if any(k in text for k in lowered):
            return index
    return None


def score_row(row: Sequence[str], keywords: Sequence[str], hints: ColumnHints) -> int:
    """Score one candidate header row.

    +1 per cell containing any keyword, +3 for each required column whose
    hint appears in the row.
    """
    lowered = [k.lower() for k in keywords if k]
    score = 0
    for cell in row:
        if cell and any(k in cell.lower() for k in lowered):
            score += 1
    for name in REQUIRED_COLUMNS:
        hint = hints.get(name)
        if hint and find_column(row, [hint]) is not None:
            score += HINT_BONUS
    return score


def header_keywords(
    defaults: dict[str, tuple[str, ...]], hints: ColumnHints
) -> list[str]:
    """Union of every default keyword list and every user hint, first-seen order."""
    keywords: list[str] = []
    for name in LOGICAL_COLUMNS:
        hint = hints.get(name)
        for keyword in ((hint,) if hint else ()) + tuple(defaults.get(name, ())):
            if keyword not in keywords:
                keywords.append(keyword)
    return keywords


def find_header_row(
    grid: Sequence[Sequence[Any]],
    hints: ColumnHints,
    defaults: dict[str, tuple[str, ...]],
    scan_limit: int = HEADER_SCAN_LIMIT,
) -> tuple[int, int]:
    """Return ``(row_index, score)`` of the best header candidate.

    Ties keep the earliest row. A best score of 0 falls back to row 0.
    """
    keywords = header_keywords(defaults, hints)
    best_index = 0
    best_score = 0
    for index, raw_row in enumerate(grid[:scan_limit]):
        row = [cell_text(cell) for cell in raw_row]
        score = score_row(row, keywords, hints)
        if score > best_score:
            best_score = score
            best_index = index
    return best_index, best_score


def resolve_columns(
    headers: Sequence[str],
    hints: ColumnHints,
    defaults: dict[str, tuple[str, ...]],
    columns: Iterable[str] = LOGICAL_COLUMNS,
) -> dict[str, Optional[int]]:
    """Resolve each logical column to a header index (hint first, then defaults)."""
    resolved: dict[str, Optional[int]] = {}
    for name in columns:
        index = None
        hint = hints.get(name)
        if hint:
            index = find_column(headers, [hint])
        if index is None:
            index = find_column(headers, defaults.get(name, ()))
        resolved[name] = index
    return resolved


def resolve_headers(
    grid: Sequence[Sequence[Any]],
    ledger_type: LedgerType,
    hints: Optional[ColumnHints] = None,
    defaults: Optional[dict[str, tuple[str, ...]]] = None,
    scan_limit: int = HEADER_SCAN_LIMIT,
) -> HeaderResolution:
    """Locate the header row of ``grid`` and map logical columns to indexes.

    Pure function; unresolved columns map to ``None``. Callers decide whether
    a missing required column is fatal.
    """
    hints = hints or ColumnHints()
    defaults = defaults if defaults is not None else DEFAULT_KEYWORDS[ledger_type]

    header_index, _ = find_header_row(grid, hints, defaults, scan_limit)
    headers = tuple(cell_text(cell) for cell in grid[header_index]) if grid else ()

    # Purchase rows have no payment method.
    wanted = [c for c in LOGICAL_COLUMNS if c != "payment" or ledger_type is LedgerType.SALES]
    columns = resolve_columns(headers, hints, defaults, wanted)
    if "payment" not in columns:
        columns["payment"] = None

    searched = {
        name: ((hints.get(name),) if hints.get(name) else ()) + tuple(defaults.get(name, ()))
        for name in LOGICAL_COLUMNS
    }
    return HeaderResolution(
        header_index=header_index,
        headers=headers,
        columns=columns,
        searched=searched,
    )
