"""Classification rules, categories and keyword filters."""

import logging
from typing import Optional

from sheetledger.database.base import Database
from sheetledger.domain.entities import Category, ClassificationRule, KeywordFilter, LedgerType
from sheetledger.domain.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def parse_rule_lines(text: str) -> list[tuple[str, str]]:
    """Parse ``item : category`` or tab separated lines into (item, category) pairs.

    Lines missing either part are ignored.
    """
    pairs: list[tuple[str, str]] = []
    for line in text.splitlines():
        parts = line.split(":")
        if len(parts) < 2:
            parts = line.split("\t")
        if len(parts) < 2:
            continue
        item_name, category = parts[0].strip(), parts[1].strip()
        if item_name and category:
            pairs.append((item_name, category))
    return pairs


class ClassificationService:
    """Service for managing item name to category rules."""

    def __init__(self, db: Database):
        """Initialize classification service.

        Args:
            db: Database instance
        """
        self.db = db

    def import_rules(self, ledger_type: LedgerType, text: str) -> int:
        """Create rules from pasted text, one rule per line.

        Args:
            ledger_type: SALES or PURCHASE
            text: Lines of ``item : category`` or ``item<TAB>category``

        Returns:
            Number of rules created (existing rules are skipped)

        Raises:
            ValidationError: If no line could be parsed
        """
        ledger_type = LedgerType(ledger_type)
        pairs = parse_rule_lines(text or "")
        if not pairs:
            raise ValidationError("No valid rules parsed")

        def create_missing(db: Database) -> int:
            created = 0
            for item_name, category in pairs:
                if db.find_classification_rule(item_name, category, ledger_type) is None:
                    db.create_classification_rule(item_name, category, ledger_type)
                    created += 1
            return created

        created = self.db.run_atomic(create_missing)
        logger.info("Imported %d of %d %s rules", created, len(pairs), ledger_type.value)
        return created

    def list_rules(self, ledger_type: LedgerType) -> list[ClassificationRule]:
        return self.db.list_classification_rules(LedgerType(ledger_type))

    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        if not self.db.delete_classification_rule(rule_id):
            raise NotFoundError(f"Classification rule {rule_id} not found")

    def delete_rules_in_category(self, ledger_type: LedgerType, category: str) -> int:
        """Delete every rule mapping to ``category``. Returns number deleted."""
        return self.db.delete_classification_rules_by_category(category.strip(), LedgerType(ledger_type))


class CategoryService:
    """Service for managing explicit category labels."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, ledger_type: LedgerType, name: str) -> int:
        """Create a category, or return the existing one with the same name.

        Returns:
            Category ID

        Raises:
            ValidationError: If name is blank
        """
        ledger_type = LedgerType(ledger_type)
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        existing = self.db.get_category_by_name(name, ledger_type)
        if existing is not None:
            return existing.id
        return self.db.create_category(name, ledger_type)

    def list_categories(self, ledger_type: LedgerType) -> list[Category]:
        return self.db.list_categories(LedgerType(ledger_type))

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        if not self.db.delete_category(category_id):
            raise NotFoundError(f"Category {category_id} not found")

    def merged_categories(self, ledger_type: LedgerType) -> list[str]:
        """Sorted names of explicit categories and categories used by rules."""
        ledger_type = LedgerType(ledger_type)
        names = {category.name for category in self.db.list_categories(ledger_type)}
        names.update(rule.category for rule in self.db.list_classification_rules(ledger_type))
        return sorted(names)


class KeywordFilterService:
    """Service for managing keywords applied to every upload."""

    def __init__(self, db: Database):
        """Initialize keyword filter service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_filter(self, ledger_type: LedgerType, keyword: str, is_include: bool = False) -> int:
        """Add a keyword, or return the existing one.

        Returns:
            Filter ID

        Raises:
            ValidationError: If keyword is blank
        """
        ledger_type = LedgerType(ledger_type)
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("Keyword is required")
        existing = self.db.find_keyword_filter(keyword, ledger_type, is_include)
        if existing is not None:
            return existing.id
        return self.db.create_keyword_filter(keyword, ledger_type, is_include)

    def list_filters(self, ledger_type: LedgerType, is_include: Optional[bool] = None) -> list[KeywordFilter]:
        filters = self.db.list_keyword_filters(LedgerType(ledger_type))
        if is_include is None:
            return filters
        return [f for f in filters if f.is_include is is_include]

    def delete_filter(self, filter_id: int) -> None:
        """Delete a keyword filter.

        Raises:
            NotFoundError: If the filter doesn't exist
        """
        if not self.db.delete_keyword_filter(filter_id):
            raise NotFoundError(f"Keyword filter {filter_id} not found")
