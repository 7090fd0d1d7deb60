"""Category listing and authoring.

Categories are derived from component rows unless authored explicitly in the
categories table, in which case the table wins.
"""

from typing import Optional

import structlog

from vault.core.exceptions import ValidationError
from vault.models.component import CategorySummary
from vault.normalization.slug import slugify
from vault.normalization.summaries import category_description, summarize_category_names
from vault.store.base import ComponentStore, Row

logger = structlog.get_logger(__name__)


class CategoryService:
    def __init__(self, store: ComponentStore):
        self.store = store

    @staticmethod
    def _summary(row: Row, counts: dict[str, int]) -> CategorySummary:
        name = row["name"]
        return CategorySummary(
            name=name,
            slug=row.get("slug") or slugify(name),
            description=row.get("description") or category_description(name),
            count=counts.get(name.lower(), 0),
        )

    async def list_categories(self) -> list[CategorySummary]:
        """Authored categories ordered by name, or distinct component categories."""
        derived = summarize_category_names(self.store.fetch_component_categories())
        rows = self.store.fetch_categories()
        if not rows:
            return derived

        counts = {category.name: category.count for category in derived}
        return [self._summary(row, counts) for row in rows]

    async def add_category(
        self,
        name: str,
        description: Optional[str] = None,
    ) -> tuple[CategorySummary, bool]:
        """Create a category unless one with the same name exists.

        Returns:
            The category and whether it was created.

        Raises:
            ValidationError: The name is blank.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError(["name"], "Category name is required")

        counts = {
            category.name: category.count
            for category in summarize_category_names(self.store.fetch_component_categories())
        }

        existing = self.store.find_category(name)
        if existing is not None:
            return self._summary(existing, counts), False

        row = self.store.insert_category(
            {
                "name": name,
                "slug": slugify(name),
                "description": (description or "").strip() or category_description(name),
            }
        )
        logger.info("category_created", name=name, slug=row.get("slug"))
        return self._summary(row, counts), True
