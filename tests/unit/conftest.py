from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from qrmenu.application.ports.backend import BackendError
from qrmenu.domain.common.ids import CategoryKey, MenuItemId, OrderId
from qrmenu.domain.menu.entities import Category, IconType, MenuItem, Priority
from qrmenu.domain.order.entities import OrderRecord

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeMenuBackend:
    def __init__(
        self,
        items: list[MenuItem] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self.items = list(items or [])
        self.categories = list(categories or [])
        self.fail_items = False
        self.fail_categories = False
        self.fail_insert = False
        self.healthy = True
        self.item_fetches = 0
        self.inserted: list[OrderRecord] = []

    def fetch_items(self) -> list[MenuItem]:
        self.item_fetches += 1
        if self.fail_items:
            raise BackendError("products unavailable")
        return list(self.items)

    def fetch_categories(self) -> list[Category]:
        if self.fail_categories:
            raise BackendError("categories unavailable")
        return list(self.categories)

    def insert_order(self, order: OrderRecord) -> OrderRecord:
        if self.fail_insert:
            raise BackendError("insert rejected")
        self.inserted.append(order)
        return order.with_order_id(OrderId(str(100 + len(self.inserted))))

    def ping(self) -> bool:
        return self.healthy


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value
        self.ttls[key] = ttl_seconds

    def delete(self, key: str) -> None:
        self.values.pop(key, None)
        self.ttls.pop(key, None)


def build_item(
    item_id: str,
    name: str | None = None,
    price: str = "100",
    category: str = "burger",
    priority: Priority = Priority.LOW,
    minutes: int = 0,
    image_url: str | None = None,
) -> MenuItem:
    return MenuItem(
        item_id=MenuItemId(item_id),
        name=name or f"Item {item_id}",
        price=Decimal(price),
        category=CategoryKey(category),
        created_at=BASE_TIME + timedelta(minutes=minutes),
        priority=priority,
        image_url=image_url,
    )


def build_category(
    key: str,
    name: str | None = None,
    icon: str | None = None,
    icon_type: IconType = IconType.ICON,
    sort_order: int | None = None,
) -> Category:
    return Category(
        key=CategoryKey(key),
        name=name,
        created_at=BASE_TIME,
        icon=icon,
        icon_type=icon_type,
        sort_order=sort_order,
    )


@pytest.fixture
def make_item() -> Callable[..., MenuItem]:
    return build_item


@pytest.fixture
def make_category() -> Callable[..., Category]:
    return build_category


@pytest.fixture
def sample_items() -> list[MenuItem]:
    return [
        build_item("1", "Classic Beef Burger", "250", "burger", Priority.MOST_SELLING, minutes=1),
        build_item("2", "Chicken Burger", "220", "burger", Priority.HIGH, minutes=2),
        build_item("3", "Margherita Pizza", "450", "pizza", Priority.MEDIUM, minutes=3),
        build_item("4", "Cold Coffee", "120", "drinks", Priority.LOW, minutes=4),
        build_item("5", "Lemon Mint", "80", "drinks", Priority.LOW, minutes=5),
    ]


@pytest.fixture
def sample_categories() -> list[Category]:
    return [
        build_category("pizza", "Pizza", icon="fas fa-pizza-slice", sort_order=1),
        build_category("burger", "Burgers", sort_order=2),
        build_category("drinks", None, sort_order=None),
    ]


@pytest.fixture
def fake_backend(sample_items: list[MenuItem], sample_categories: list[Category]) -> FakeMenuBackend:
    return FakeMenuBackend(items=sample_items, categories=sample_categories)


@pytest.fixture
def fake_cache() -> FakeCacheStore:
    return FakeCacheStore()
