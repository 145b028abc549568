from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from qrmenu.domain.common.ids import CategoryKey, MenuItemId
from qrmenu.domain.menu.entities import CategoryEntry, MenuItem, Priority

DEFAULT_PRIORITY_RANKS: Mapping[Priority, int] = {
    Priority.MOST_SELLING: 1,
    Priority.HIGH: 2,
    Priority.MEDIUM: 3,
    Priority.LOW: 4,
}
UNRANKED = 4


def priority_rank(priority: Priority, ranks: Mapping[Priority, int] = DEFAULT_PRIORITY_RANKS) -> int:
    return ranks.get(priority, UNRANKED)


def sort_catalog(
    items: Iterable[MenuItem],
    ranks: Mapping[Priority, int] = DEFAULT_PRIORITY_RANKS,
) -> list[MenuItem]:
    """Order items by priority rank, newest first within a rank.

    ``sorted`` is stable, so re-sorting an already sorted list is a no-op.
    """
    return sorted(
        items,
        key=lambda item: (priority_rank(item.priority, ranks), -item.created_at.timestamp()),
    )


def categories_from_items(items: Iterable[MenuItem]) -> list[CategoryKey]:
    keys = {item.category.lower() for item in items if item.category}
    return [CategoryKey(key) for key in sorted(keys)]


@dataclass(frozen=True)
class CatalogSnapshot:
    items: tuple[MenuItem, ...] = ()
    categories: tuple[CategoryEntry, ...] = ()
    category_source: str = "backend"
    load_error: str | None = None
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.items


class CatalogStore:
    def __init__(self, snapshot: CatalogSnapshot | None = None) -> None:
        self._snapshot = snapshot or CatalogSnapshot()
        self._index = self._build_index(self._snapshot.items)
        self._revision = 0

    @staticmethod
    def _build_index(items: Sequence[MenuItem]) -> dict[str, MenuItem]:
        return {str(item.item_id): item for item in items}

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return self._snapshot.items

    @property
    def categories(self) -> tuple[CategoryEntry, ...]:
        return self._snapshot.categories

    @property
    def revision(self) -> int:
        return self._revision

    def replace(self, snapshot: CatalogSnapshot) -> None:
        self._index = self._build_index(snapshot.items)
        self._snapshot = snapshot
        self._revision += 1

    def find(self, item_id: MenuItemId | str) -> MenuItem | None:
        return self._index.get(str(item_id))
