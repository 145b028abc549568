from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

from qrmenu.domain.common.ids import MenuItemId
from qrmenu.domain.menu.entities import MenuItem


class SelectionChange(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    QUANTITY = "quantity"
    CLEARED = "cleared"


@dataclass(frozen=True)
class SelectionChanged:
    change: SelectionChange
    item_id: MenuItemId | None
    item_count: int
    total: Decimal


@dataclass(frozen=True)
class CartLine:
    item: MenuItem
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def item_id(self) -> MenuItemId:
        return self.item.item_id

    @property
    def line_total(self) -> Decimal:
        return self.item.price * self.quantity


SelectionListener = Callable[[SelectionChanged], None]
ItemLookup = Callable[[str], MenuItem | None]


class SelectionCart:
    """The customer's unsubmitted selection.

    Holds at most one line per item id, in selection order. Subscribers are
    notified after every change of state; calls that change nothing are
    silent.
    """

    def __init__(self, lookup: ItemLookup) -> None:
        self._lookup = lookup
        self._lines: dict[str, CartLine] = {}
        self._listeners: list[SelectionListener] = []

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, change: SelectionChange, item_id: MenuItemId | None) -> None:
        event = SelectionChanged(
            change=change,
            item_id=item_id,
            item_count=self.item_count(),
            total=self.total(),
        )
        for listener in list(self._listeners):
            listener(event)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines.values())

    def get(self, item_id: MenuItemId | str) -> CartLine | None:
        return self._lines.get(str(item_id))

    def contains(self, item_id: MenuItemId | str) -> bool:
        return str(item_id) in self._lines

    def is_empty(self) -> bool:
        return not self._lines

    def toggle(self, item_id: MenuItemId | str) -> bool:
        """Select or deselect an item. Returns whether it is selected afterwards."""
        key = str(item_id)
        removed = self._lines.pop(key, None)
        if removed is not None:
            self._emit(SelectionChange.REMOVED, removed.item_id)
            return False

        item = self._lookup(key)
        if item is None:
            return False

        self._lines[key] = CartLine(item=item, quantity=1)
        self._emit(SelectionChange.ADDED, item.item_id)
        return True

    def change_quantity(self, item_id: MenuItemId | str, delta: int) -> CartLine | None:
        if delta not in (1, -1):
            raise ValueError("delta must be +1 or -1")

        key = str(item_id)
        line = self._lines.get(key)
        if line is None:
            return None

        quantity = max(1, line.quantity + delta)
        if quantity == line.quantity:
            return line

        updated = replace(line, quantity=quantity)
        self._lines[key] = updated
        self._emit(SelectionChange.QUANTITY, updated.item_id)
        return updated

    def clear(self) -> None:
        if not self._lines:
            return
        self._lines.clear()
        self._emit(SelectionChange.CLEARED, None)

    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def line_count(self) -> int:
        return len(self._lines)
