"""Item name to category classification."""

from typing import Iterable, Optional

from sheetledger.domain.constants import DEFAULT_CATEGORY
from sheetledger.domain.entities import ClassificationRule


class Classifier:
    """Exact, case-sensitive item name lookup over stored rules.

    When several rules share an item name the last one loaded wins.
    """

    def __init__(self, rules: Iterable[ClassificationRule] = (), default: str = DEFAULT_CATEGORY):
        self.default = default
        self._by_item: dict[str, str] = {}
        for rule in rules:
            self._by_item[rule.item_name] = rule.category

    def __len__(self) -> int:
        return len(self._by_item)

    def classify(self, item_name: str, sheet_category: Optional[str] = None) -> str:
        """Return the category for an item.

        Args:
            item_name: Item name as it appears in the sheet (trimmed)
            sheet_category: The sheet's own category cell, or None when the
                sheet has no category column
        """
        if item_name in self._by_item:
            return self._by_item[item_name]
        if sheet_category is not None:
            return sheet_category
        return self.default
