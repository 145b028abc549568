from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from qrmenu.domain.common.ids import CategoryKey
from qrmenu.domain.menu.catalog import categories_from_items
from qrmenu.domain.menu.entities import Category, CategoryEntry, IconRef, IconType, MenuItem

GENERIC_ICON = "fas fa-utensils"

CATEGORY_SOURCE_BACKEND = "backend"
CATEGORY_SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class CategoryDisplay:
    name: str
    icon: str = GENERIC_ICON


def category_label(key: str, display: Mapping[str, CategoryDisplay]) -> str:
    entry = display.get(key.lower())
    return entry.name if entry is not None else key


def resolve_category_entry(
    key: str,
    category: Category | None,
    display: Mapping[str, CategoryDisplay],
) -> CategoryEntry:
    """Pick the icon and display name for one category.

    Backend data wins, then the display table, then a generic icon with the
    raw key as name.
    """
    normalized = CategoryKey(key.lower())
    table_entry = display.get(normalized)

    if category is not None and category.icon:
        icon = IconRef(kind=category.icon_type, value=category.icon)
    elif table_entry is not None:
        icon = IconRef(kind=IconType.ICON, value=table_entry.icon)
    else:
        icon = IconRef(kind=IconType.ICON, value=GENERIC_ICON)

    if category is not None and category.name:
        name = category.name
    elif table_entry is not None:
        name = table_entry.name
    else:
        name = key
    return CategoryEntry(key=normalized, name=name, icon=icon)


def build_category_index(
    categories: Sequence[Category] | None,
    items: Sequence[MenuItem],
    display: Mapping[str, CategoryDisplay],
) -> tuple[tuple[CategoryEntry, ...], str]:
    """Return the navigable categories and where they came from.

    Backend categories keep their curated order, including categories that
    currently have no items. Without them the keys present among ``items``
    are used, sorted alphabetically.
    """
    if categories:
        entries: list[CategoryEntry] = []
        seen: set[str] = set()
        for category in categories:
            key = category.key.lower()
            if key in seen:
                continue
            seen.add(key)
            entries.append(resolve_category_entry(key, category, display))
        return tuple(entries), CATEGORY_SOURCE_BACKEND

    fallback = tuple(
        resolve_category_entry(key, None, display) for key in categories_from_items(items)
    )
    return fallback, CATEGORY_SOURCE_FALLBACK
