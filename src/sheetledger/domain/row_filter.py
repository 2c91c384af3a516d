"""Keyword filtering of raw rows during ingestion."""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from sheetledger.domain.entities import FilterConfig, FilterMode, KeywordFilter, LedgerRow, LedgerType
from sheetledger.utils.text_normalizer import get_search_variants, normalize_for_match


def parse_keywords(raw: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated keyword string into normalized keywords."""
    if not raw:
        return ()
    keywords = []
    for part in raw.split(","):
        keyword = normalize_for_match(part.strip())
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return tuple(keywords)


def row_content(*fields: Optional[str]) -> str:
    """Normalized concatenation of the searchable fields of a row."""
    return " ".join(normalize_for_match(f or "") for f in fields)


@dataclass(frozen=True)
class RowFilter:
    """Decides whether a row survives ingestion.

    Runtime and global keywords of the same polarity are merged. INCLUDE with
    no keywords at all rejects every row.
    """

    mode: FilterMode
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()

    @classmethod
    def build(
        cls, config: FilterConfig, global_filters: Iterable[KeywordFilter] = ()
    ) -> "RowFilter":
        include = list(parse_keywords(config.include))
        exclude = list(parse_keywords(config.exclude))
        for kw_filter in global_filters:
            keyword = normalize_for_match(kw_filter.keyword.strip())
            if not keyword:
                continue
            target = include if kw_filter.is_include else exclude
            if keyword not in target:
                target.append(keyword)
        return cls(mode=FilterMode(config.mode), include=tuple(include), exclude=tuple(exclude))

    def accepts(self, content: str) -> bool:
        """``content`` must already be normalized (see ``row_content``)."""
        if self.mode is FilterMode.ALL:
            return True
        if self.mode is FilterMode.EXCLUDE:
            return not any(k in content for k in self.exclude)
        # INCLUDE
        return any(k in content for k in self.include)


def expand_search_keywords(keywords: Iterable[str]) -> tuple[str, ...]:
    """Lower-cased width variants of every non-blank keyword."""
    variants: list[str] = []
    for keyword in keywords:
        for variant in get_search_variants(keyword.strip()):
            variant = variant.lower()
            if variant not in variants:
                variants.append(variant)
    return tuple(variants)


def ledger_row_matches(row: LedgerRow, variants: Sequence[str]) -> bool:
    """True if item, category, note or (sales) payment contains any variant."""
    fields = [row.item_name, row.category, row.note]
    if row.ledger_type is LedgerType.SALES:
        fields.append(row.payment_method)
    haystacks = [(f or "").lower() for f in fields]
    return any(v in h for v in variants for h in haystacks)
