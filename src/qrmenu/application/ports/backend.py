from __future__ import annotations

from typing import Protocol

from qrmenu.domain.menu.entities import Category, MenuItem
from qrmenu.domain.order.entities import OrderRecord


class BackendError(Exception):
    pass


class MenuBackend(Protocol):
    def fetch_items(self) -> list[MenuItem]: ...

    def fetch_categories(self) -> list[Category]: ...

    def insert_order(self, order: OrderRecord) -> OrderRecord: ...

    def ping(self) -> bool: ...
