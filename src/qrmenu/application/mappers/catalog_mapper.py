from __future__ import annotations

from collections.abc import Mapping, Sequence

from qrmenu.application.display import PRIORITY_BADGES, image_or_placeholder
from qrmenu.application.dto.cache import CachedCatalog, CachedCategory, CachedMenuItem
from qrmenu.application.dto.responses import (
    BadgeResponse,
    CategoryResponse,
    IconResponse,
    MenuItemResponse,
    MenuViewResponse,
    NoticeResponse,
)
from qrmenu.domain.common.ids import CategoryKey, MenuItemId
from qrmenu.domain.menu.catalog import CatalogSnapshot
from qrmenu.domain.menu.category_index import CategoryDisplay, category_label
from qrmenu.domain.menu.entities import Category, CategoryEntry, IconType, MenuItem, Priority


def to_cached_catalog(items: Sequence[MenuItem], categories: Sequence[Category]) -> CachedCatalog:
    return CachedCatalog(
        items=[
            CachedMenuItem(
                item_id=str(item.item_id),
                name=item.name,
                price=item.price,
                category=str(item.category),
                priority=item.priority.value,
                image_url=item.image_url,
                created_at=item.created_at,
            )
            for item in items
        ],
        categories=[
            CachedCategory(
                key=str(category.key),
                name=category.name,
                icon=category.icon,
                icon_type=category.icon_type.value,
                sort_order=category.sort_order,
                created_at=category.created_at,
            )
            for category in categories
        ],
    )


def from_cached_catalog(payload: CachedCatalog) -> tuple[list[MenuItem], list[Category]]:
    items = [
        MenuItem(
            item_id=MenuItemId(item.item_id),
            name=item.name,
            price=item.price,
            category=CategoryKey(item.category),
            created_at=item.created_at,
            priority=Priority.parse(item.priority),
            image_url=item.image_url,
        )
        for item in payload.items
    ]
    categories = [
        Category(
            key=CategoryKey(category.key),
            name=category.name,
            created_at=category.created_at,
            icon=category.icon,
            icon_type=IconType.parse(category.icon_type),
            sort_order=category.sort_order,
        )
        for category in payload.categories
    ]
    return items, categories


def to_menu_item_response(
    item: MenuItem,
    display: Mapping[str, CategoryDisplay],
) -> MenuItemResponse:
    badge = PRIORITY_BADGES.get(item.priority)
    return MenuItemResponse(
        itemId=str(item.item_id),
        name=item.name,
        price=float(item.price),
        category=str(item.category),
        categoryName=category_label(item.category, display),
        priority=item.priority.value,
        badge=BadgeResponse(label=badge.label, icon=badge.icon) if badge else None,
        imageUrl=image_or_placeholder(item.image_url),
        hasImage=bool(item.image_url),
        createdAt=item.created_at,
    )


def to_category_response(entry: CategoryEntry) -> CategoryResponse:
    return CategoryResponse(
        key=str(entry.key),
        name=entry.name,
        icon=IconResponse(type=entry.icon.kind.value, value=entry.icon.value),
    )


def to_menu_view_response(
    snapshot: CatalogSnapshot,
    visible_items: Sequence[MenuItem],
    active_category: str,
    search: str | None,
    display: Mapping[str, CategoryDisplay],
    notice: NoticeResponse | None = None,
) -> MenuViewResponse:
    return MenuViewResponse(
        activeCategory=active_category,
        search=search,
        categories=[to_category_response(entry) for entry in snapshot.categories],
        categorySource=snapshot.category_source,
        items=[to_menu_item_response(item, display) for item in visible_items],
        emptyState=not visible_items,
        notice=notice,
    )
