from __future__ import annotations

import sys
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrmenu.domain.cart.selection import SelectionCart, SelectionChange, SelectionChanged
from qrmenu.domain.menu.catalog import CatalogSnapshot, CatalogStore


def _cart(items) -> SelectionCart:
    store = CatalogStore(CatalogSnapshot(items=tuple(items)))
    return SelectionCart(lookup=store.find)


def test_toggle_adds_then_removes(make_item) -> None:
    cart = _cart([make_item("1")])

    assert cart.toggle("1") is True
    assert cart.contains("1")
    assert cart.get("1").quantity == 1

    assert cart.toggle("1") is False
    assert cart.is_empty()


def test_toggle_twice_restores_previous_state(make_item) -> None:
    cart = _cart([make_item("1"), make_item("2")])
    cart.toggle("1")
    cart.change_quantity("1", +1)
    before = cart.lines

    cart.toggle("2")
    cart.toggle("2")

    assert cart.lines == before


def test_toggle_unknown_item_is_ignored(make_item) -> None:
    cart = _cart([make_item("1")])

    assert cart.toggle("missing") is False
    assert cart.is_empty()


def test_toggle_deselects_item_that_left_the_catalog(make_item) -> None:
    store = CatalogStore(CatalogSnapshot(items=(make_item("1"),)))
    cart = SelectionCart(lookup=store.find)
    cart.toggle("1")

    store.replace(CatalogSnapshot())

    assert cart.toggle("1") is False
    assert cart.is_empty()


def test_totals_follow_price_times_quantity(make_item) -> None:
    cart = _cart([make_item("1", price="100"), make_item("2", price="50")])
    cart.toggle("1")
    cart.change_quantity("1", +1)
    cart.toggle("2")

    assert cart.total() == Decimal("250")
    assert cart.item_count() == 3
    assert cart.line_count() == 2


def test_quantity_never_drops_below_one(make_item) -> None:
    cart = _cart([make_item("1")])
    cart.toggle("1")

    line = cart.change_quantity("1", -1)

    assert line is not None
    assert line.quantity == 1
    assert cart.contains("1")


def test_quantity_change_without_line_is_noop(make_item) -> None:
    cart = _cart([make_item("1")])

    assert cart.change_quantity("1", +1) is None
    assert cart.is_empty()


def test_quantity_delta_must_be_single_step(make_item) -> None:
    cart = _cart([make_item("1")])
    cart.toggle("1")

    with pytest.raises(ValueError):
        cart.change_quantity("1", 2)


def test_lines_keep_selection_order(make_item) -> None:
    cart = _cart([make_item("1"), make_item("2"), make_item("3")])
    cart.toggle("3")
    cart.toggle("1")
    cart.toggle("2")

    assert [str(line.item_id) for line in cart.lines] == ["3", "1", "2"]


def test_listeners_receive_only_real_changes(make_item) -> None:
    cart = _cart([make_item("1", price="100")])
    events: list[SelectionChanged] = []
    unsubscribe = cart.subscribe(events.append)

    cart.toggle("1")
    cart.change_quantity("1", -1)
    cart.change_quantity("1", +1)
    cart.toggle("missing")
    cart.clear()
    cart.clear()

    assert [event.change for event in events] == [
        SelectionChange.ADDED,
        SelectionChange.QUANTITY,
        SelectionChange.CLEARED,
    ]
    assert events[1].item_count == 2
    assert events[1].total == Decimal("200")

    unsubscribe()
    cart.toggle("1")
    assert len(events) == 3
