from __future__ import annotations

import logging
from typing import Any

import httpx

from qrmenu.application.ports.backend import BackendError, MenuBackend
from qrmenu.domain.common.ids import OrderId
from qrmenu.domain.menu.entities import Category, MenuItem
from qrmenu.domain.order.entities import OrderRecord
from qrmenu.infrastructure.supabase.client import get_supabase_client
from qrmenu.infrastructure.supabase.rows import (
    category_from_row,
    menu_item_from_row,
    order_from_row,
    order_to_row,
)

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"
CATEGORIES_TABLE = "categories"
ORDERS_TABLE = "orders"


class SupabaseRestBackend(MenuBackend):
    """Menu backend over the Supabase PostgREST API."""

    def __init__(self, client: httpx.Client | None = None, timeout_seconds: float = 5.0) -> None:
        self._client = client
        self._timeout_seconds = timeout_seconds

    def _http(self) -> httpx.Client:
        if self._client is None:
            return get_supabase_client(timeout_seconds=self._timeout_seconds)
        return self._client

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            client = self._http()
        except RuntimeError as exc:
            raise BackendError(str(exc)) from exc
        try:
            response = client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise BackendError(
                f"{method} {path} failed with status {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BackendError(f"{method} {path} failed: {exc}") from exc
        except ValueError as exc:
            raise BackendError(f"{method} {path} returned invalid JSON") from exc

    def _rows(self, method: str, path: str, **kwargs: Any) -> list[dict[str, Any]]:
        payload = self._request(method, path, **kwargs)
        if not isinstance(payload, list):
            raise BackendError(f"{method} {path} returned {type(payload).__name__}, expected list")
        return payload

    def fetch_items(self) -> list[MenuItem]:
        rows = self._rows("GET", f"/{PRODUCTS_TABLE}", params={"select": "*"})
        return [item for item in (menu_item_from_row(row) for row in rows) if item is not None]

    def fetch_categories(self) -> list[Category]:
        rows = self._rows(
            "GET",
            f"/{CATEGORIES_TABLE}",
            params={"select": "*", "order": "sort_order.asc.nullslast,created_at.asc"},
        )
        return [
            category
            for category in (category_from_row(row) for row in rows)
            if category is not None
        ]

    def insert_order(self, order: OrderRecord) -> OrderRecord:
        rows = self._rows(
            "POST",
            f"/{ORDERS_TABLE}",
            json=[order_to_row(order)],
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise BackendError("order insert returned no rows")

        row = rows[0]
        try:
            return order_from_row(row)
        except (KeyError, TypeError, ValueError):
            logger.warning("order_row_unparsed", extra={"order_id": row.get("id")})
            order_id = row.get("id")
            if order_id is None:
                return order
            return order.with_order_id(OrderId(str(order_id)))

    def ping(self) -> bool:
        try:
            self._rows("GET", f"/{CATEGORIES_TABLE}", params={"select": "key", "limit": "1"})
        except BackendError:
            return False
        return True
