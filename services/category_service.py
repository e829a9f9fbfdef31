import logging
import math
from dataclasses import replace

from models.category import Category
from storage.budget_store import BudgetStore
from utils.constants import (
    COLORS, DEFAULT_ICON, TEMPLATES,
    INCOME_CATEGORY_ID, INCOME_LABEL, UNCATEGORIZED_LABEL,
)
from utils.ids import generate_id

logger = logging.getLogger(__name__)

_UNSET = object()


class CategoryService:
    def __init__(self, store: BudgetStore):
        self._store = store

    def get_all(self) -> list[Category]:
        return self._store.get_categories()

    def get_by_id(self, category_id: str) -> Category | None:
        return self._store.get_category(category_id)

    def get_templates(self) -> list[dict]:
        return TEMPLATES

    def create(
        self,
        name: str,
        color: str | None = None,
        icon: str = DEFAULT_ICON,
        budget_limit: float | None = None,
    ) -> Category:
        name = self._validate(name)
        budget_limit = self._clean_limit(budget_limit)
        category = Category(
            id=generate_id(),
            name=name,
            color=color or self._next_color(),
            icon=icon or DEFAULT_ICON,
            budget_limit=budget_limit,
        )
        self._store.add_category(category)
        logger.info("Created category %s (%s)", category.id, category.name)
        return category

    def update(
        self,
        category_id: str,
        name: str | None = None,
        color: str | None = None,
        icon: str | None = None,
        budget_limit=_UNSET,
    ) -> Category | None:
        """Rename, recolour or change the limit. Returns None if the id is unknown.

        Pass budget_limit=None to clear the limit.
        """
        category = self._store.get_category(category_id)
        if category is None:
            logger.debug("Update of unknown category %s ignored", category_id)
            return None
        changes = {}
        if name is not None:
            changes["name"] = self._validate(name)
        if color:
            changes["color"] = color
        if icon:
            changes["icon"] = icon
        if budget_limit is not _UNSET:
            changes["budget_limit"] = self._clean_limit(budget_limit)
        updated = replace(category, **changes)
        self._store.replace_category(updated)
        return updated

    def delete(self, category_id: str) -> bool:
        """Remove the category only; transactions keep their category_id."""
        removed = self._store.remove_category(category_id)
        if removed:
            logger.info("Deleted category %s", category_id)
        else:
            logger.debug("Delete of unknown category %s ignored", category_id)
        return removed

    def find_by_name(self, name: str | None) -> Category | None:
        """Case-insensitive exact match on the category name."""
        if not name:
            return None
        wanted = name.strip().lower()
        return next((c for c in self._store.get_categories() if c.name.lower() == wanted), None)

    def create_or_reuse(self, name: str, color: str | None = None, icon: str = DEFAULT_ICON) -> Category:
        """Existing category with this name, or a new one."""
        existing = self.find_by_name(name)
        if existing is not None:
            return existing
        return self.create(name, color=color, icon=icon)

    def apply_template(self, template_id: str) -> list[Category]:
        """Replace all categories with fresh copies of a budget template's."""
        template = next((t for t in TEMPLATES if t["id"] == template_id), None)
        if template is None:
            raise ValueError(f"Unknown budget template: {template_id}")
        categories = [
            Category(id=generate_id(), name=c["name"], color=c["color"], icon=c["icon"])
            for c in template["categories"]
        ]
        self._store.set_categories(categories)
        logger.info("Applied template %s (%d categories)", template_id, len(categories))
        return categories

    def display_name(self, category_id: str) -> str:
        if category_id == INCOME_CATEGORY_ID:
            return INCOME_LABEL
        category = self._store.get_category(category_id)
        return category.name if category else UNCATEGORIZED_LABEL

    def _next_color(self) -> str:
        return COLORS[len(self._store.get_categories()) % len(COLORS)]

    def _validate(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        return name

    def _clean_limit(self, budget_limit) -> float | None:
        if budget_limit is None:
            return None
        if isinstance(budget_limit, bool):
            raise ValueError("Invalid budget limit.")
        try:
            value = float(budget_limit)
        except (TypeError, ValueError):
            raise ValueError("Invalid budget limit.") from None
        if not math.isfinite(value):
            raise ValueError("Invalid budget limit.")
        if value < 0:
            raise ValueError("Budget limit must be non-negative.")
        return value
