from __future__ import annotations

from collections.abc import Iterable

from qrmenu.domain.menu.entities import MenuItem

ALL_CATEGORIES = "all"


def _matches_category(item: MenuItem, category: str) -> bool:
    return category == ALL_CATEGORIES or item.category.lower() == category


def project_items(
    items: Iterable[MenuItem],
    category: str | None = ALL_CATEGORIES,
    search: str | None = None,
) -> list[MenuItem]:
    """Visible items for the active category and search text, in catalog order."""
    active = (category or ALL_CATEGORIES).strip().lower() or ALL_CATEGORIES
    term = (search or "").strip().lower()

    if not term:
        return [item for item in items if _matches_category(item, active)]
    return [
        item
        for item in items
        if term in item.name.lower() and _matches_category(item, active)
    ]
