from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrmenu.application.display import DEFAULT_CATEGORY_DISPLAY
from qrmenu.domain.menu.catalog import CatalogSnapshot, CatalogStore, sort_catalog
from qrmenu.domain.menu.category_index import (
    CATEGORY_SOURCE_BACKEND,
    CATEGORY_SOURCE_FALLBACK,
    GENERIC_ICON,
    build_category_index,
)
from qrmenu.domain.menu.entities import IconType, MenuItem, Priority
from qrmenu.domain.menu.view import project_items


def test_priority_beats_recency(make_item) -> None:
    older_top_seller = make_item("2", priority=Priority.MOST_SELLING, minutes=1)
    newer_low = make_item("1", priority=Priority.LOW, minutes=2)

    ordered = sort_catalog([newer_low, older_top_seller])

    assert [str(item.item_id) for item in ordered] == ["2", "1"]


def test_newest_first_within_rank_and_unknown_priority_is_low(make_item) -> None:
    items = [
        make_item("a", priority=Priority.parse("mystery"), minutes=1),
        make_item("b", priority=Priority.LOW, minutes=3),
        make_item("c", priority=Priority.HIGH, minutes=0),
        make_item("d", priority=Priority.parse(None), minutes=2),
    ]

    ordered = sort_catalog(items)

    assert [str(item.item_id) for item in ordered] == ["c", "b", "d", "a"]


def test_sorting_is_idempotent(sample_items) -> None:
    once = sort_catalog(sample_items)
    assert sort_catalog(once) == once


def test_menu_item_rejects_negative_price(make_item) -> None:
    with pytest.raises(ValueError):
        make_item("1", price="-1")


def test_catalog_store_find_and_revision(sample_items) -> None:
    store = CatalogStore()
    assert store.find("1") is None
    assert store.revision == 0

    store.replace(CatalogSnapshot(items=tuple(sample_items)))

    assert store.revision == 1
    assert store.find("1").price == Decimal("250")


def test_backend_categories_keep_their_order(sample_items, sample_categories) -> None:
    entries, source = build_category_index(
        sample_categories, sample_items, DEFAULT_CATEGORY_DISPLAY
    )

    assert source == CATEGORY_SOURCE_BACKEND
    assert [entry.key for entry in entries] == ["pizza", "burger", "drinks"]
    assert entries[0].icon.value == "fas fa-pizza-slice"
    assert entries[0].name == "Pizza"
    # No backend icon or name: the display table fills both.
    assert entries[2].icon.value == DEFAULT_CATEGORY_DISPLAY["drinks"].icon
    assert entries[2].name == DEFAULT_CATEGORY_DISPLAY["drinks"].name


def test_backend_categories_are_deduplicated(make_category, sample_items) -> None:
    categories = [make_category("pizza", "Pizza"), make_category("pizza", "Pizza again")]

    entries, _ = build_category_index(categories, sample_items, {})

    assert [(entry.key, entry.name) for entry in entries] == [("pizza", "Pizza")]


def test_image_icons_are_kept(make_category) -> None:
    categories = [
        make_category("soup", "Soup", icon="https://cdn.example.com/soup.png", icon_type=IconType.IMAGE)
    ]

    entries, _ = build_category_index(categories, [], {})

    assert entries[0].icon.kind == IconType.IMAGE
    assert entries[0].icon.value == "https://cdn.example.com/soup.png"


def test_fallback_uses_sorted_item_categories(make_item) -> None:
    items = [
        make_item("1", category="pizza"),
        make_item("2", category="burger"),
        make_item("3", category="pizza"),
        make_item("4", category="ramen"),
    ]

    entries, source = build_category_index([], items, DEFAULT_CATEGORY_DISPLAY)

    assert source == CATEGORY_SOURCE_FALLBACK
    assert [entry.key for entry in entries] == ["burger", "pizza", "ramen"]
    assert entries[0].name == DEFAULT_CATEGORY_DISPLAY["burger"].name
    assert entries[2].name == "ramen"
    assert entries[2].icon.value == GENERIC_ICON


def _ids(items: list[MenuItem]) -> list[str]:
    return [str(item.item_id) for item in items]


def test_all_category_without_search_returns_everything(sample_items) -> None:
    assert _ids(project_items(sample_items)) == ["1", "2", "3", "4", "5"]


def test_category_filter_preserves_catalog_order(sample_items) -> None:
    assert _ids(project_items(sample_items, "drinks")) == ["4", "5"]


def test_search_is_case_insensitive_and_combines_with_category(sample_items) -> None:
    assert _ids(project_items(sample_items, "all", "BURGER")) == ["1", "2"]
    assert _ids(project_items(sample_items, "pizza", "burger")) == []


def test_blank_search_is_ignored(sample_items) -> None:
    assert _ids(project_items(sample_items, "burger", "   ")) == ["1", "2"]


def test_unknown_category_yields_empty_view(sample_items) -> None:
    assert project_items(sample_items, "sushi") == []


@pytest.mark.parametrize("category", ["all", "burger", "pizza", "drinks", "sushi"])
@pytest.mark.parametrize("term", ["burger", "MINT", "  coffee ", "z", "a"])
def test_search_narrows_the_unsearched_view(sample_items, category, term) -> None:
    unsearched = project_items(sample_items, category, "")

    assert unsearched == project_items(sample_items, category, None)
    searched = project_items(sample_items, category, term)
    assert set(_ids(searched)) <= set(_ids(unsearched))
    assert _ids(searched) == [item for item in _ids(unsearched) if item in _ids(searched)]
