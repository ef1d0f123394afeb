"""Check categories and the registry that collects them.

The eight core categories use sort orders in steps of 10 so third-party
plugins can slot their own categories in between.
"""

from __future__ import annotations

import typing as t
from pydantic import BaseModel, ConfigDict, Field

from sitehealth.i18n import Translator, default_translator


class HealthCategory(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    slug: str = Field(min_length=1)
    label: str = Field(description="Plain text or a language key")
    icon: str
    sort_order: int = 50
    logo_url: str | None = None

    def to_dict(self, translator: Translator | None = None) -> dict[str, t.Any]:
        translator = translator or default_translator
        return {
            "slug": self.slug,
            "label": translator.translate(self.label),
            "icon": self.icon,
            "sortOrder": self.sort_order,
            "logoUrl": self.logo_url,
        }

    to_array = to_dict


CORE_CATEGORIES: tuple[HealthCategory, ...] = (
    HealthCategory(
        slug="system",
        label="COM_HEALTHCHECKER_CATEGORY_SYSTEM",
        icon="fa-server",
        sort_order=10,
    ),
    HealthCategory(
        slug="database",
        label="COM_HEALTHCHECKER_CATEGORY_DATABASE",
        icon="fa-database",
        sort_order=20,
    ),
    HealthCategory(
        slug="security",
        label="COM_HEALTHCHECKER_CATEGORY_SECURITY",
        icon="fa-shield-alt",
        sort_order=30,
    ),
    HealthCategory(
        slug="users",
        label="COM_HEALTHCHECKER_CATEGORY_USERS",
        icon="fa-users",
        sort_order=40,
    ),
    HealthCategory(
        slug="extensions",
        label="COM_HEALTHCHECKER_CATEGORY_EXTENSIONS",
        icon="fa-puzzle-piece",
        sort_order=50,
    ),
    HealthCategory(
        slug="performance",
        label="COM_HEALTHCHECKER_CATEGORY_PERFORMANCE",
        icon="fa-tachometer-alt",
        sort_order=60,
    ),
    HealthCategory(
        slug="seo",
        label="COM_HEALTHCHECKER_CATEGORY_SEO",
        icon="fa-search",
        sort_order=70,
    ),
    HealthCategory(
        slug="content",
        label="COM_HEALTHCHECKER_CATEGORY_CONTENT",
        icon="fa-file-alt",
        sort_order=80,
    ),
)


class CategoryRegistry:
    """Categories keyed by slug.

    Registering a slug that already exists replaces the earlier entry, so a
    plugin may override a core category's label or icon.
    """

    def __init__(self, *, seed: bool = True) -> None:
        self._seed = seed
        self._categories: dict[str, HealthCategory] = {}
        self.reset()

    def reset(self) -> None:
        self._categories.clear()
        if self._seed:
            for category in CORE_CATEGORIES:
                self.register(category)

    def register(self, category: HealthCategory) -> None:
        self._categories[category.slug] = category

    def get(self, slug: str) -> HealthCategory | None:
        return self._categories.get(slug)

    def has(self, slug: str) -> bool:
        return slug in self._categories

    def all(self) -> list[HealthCategory]:
        return sorted(
            self._categories.values(),
            key=lambda c: (c.sort_order, c.slug),
        )

    def sort_key(self, slug: str) -> int:
        """Sort order for a slug; unknown categories sort last."""
        category = self._categories.get(slug)
        return category.sort_order if category else 999

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> t.Iterator[HealthCategory]:
        return iter(self.all())

    def __contains__(self, slug: object) -> bool:
        return slug in self._categories


__all__ = ["CORE_CATEGORIES", "CategoryRegistry", "HealthCategory"]
