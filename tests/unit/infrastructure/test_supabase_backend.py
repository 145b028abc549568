from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrmenu.application.ports.backend import BackendError
from qrmenu.domain.common.ids import MenuItemId
from qrmenu.domain.menu.entities import IconType, Priority
from qrmenu.domain.order.entities import OrderLineSnapshot, create_pending_order
from qrmenu.infrastructure.supabase.backend import SupabaseRestBackend
from qrmenu.infrastructure.supabase.client import build_client
from qrmenu.infrastructure.supabase.rows import parse_timestamp

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _backend(handler) -> SupabaseRestBackend:
    client = build_client(
        "https://project.supabase.co/",
        "anon-key",
        transport=httpx.MockTransport(handler),
    )
    return SupabaseRestBackend(client=client)


def _order():
    return create_pending_order(
        lines=[
            OrderLineSnapshot(
                item_id=MenuItemId("7"),
                name="Cold Coffee",
                price=Decimal("120"),
                quantity=2,
            ),
            OrderLineSnapshot(
                item_id=MenuItemId("9"),
                name="Brownie",
                price=Decimal("75.50"),
                quantity=1,
            ),
        ],
        table_number=3,
        customer_name="Nadia",
        now=NOW,
    )


def test_fetch_items_maps_rows_and_skips_invalid_ones() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "id": 1,
                    "name": "Beef Burger",
                    "price": 250,
                    "category": "Burger",
                    "priority": "most_selling",
                    "image_url": "",
                    "created_at": "2026-01-01T10:00:00Z",
                },
                {"id": 2, "name": "Broken", "price": "abc", "category": "burger"},
                {"id": 3, "name": "Tea", "price": "30.5", "category": "drinks", "priority": "weird"},
            ],
        )

    items = _backend(handler).fetch_items()

    assert [str(item.item_id) for item in items] == ["1", "3"]
    assert items[0].category == "burger"
    assert items[0].priority == Priority.MOST_SELLING
    assert items[0].image_url is None
    assert items[0].created_at == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert items[1].price == Decimal("30.5")
    assert items[1].priority == Priority.LOW

    request = seen[0]
    assert request.url.path == "/rest/v1/products"
    assert request.url.params["select"] == "*"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"


def test_fetch_categories_requests_curated_order() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=[
                {"id": 1, "key": "Pizza", "name": "Pizza", "icon": "https://x/p.png", "icon_type": "image"},
                {"id": 2, "key": None},
                {"id": 3, "key": "drinks", "sort_order": None},
            ],
        )

    categories = _backend(handler).fetch_categories()

    assert [category.key for category in categories] == ["pizza", "drinks"]
    assert categories[0].icon_type == IconType.IMAGE
    assert categories[1].icon is None
    assert seen[0].url.params["order"] == "sort_order.asc.nullslast,created_at.asc"


def test_malformed_category_rows_are_skipped() -> None:
    rows = [
        {"id": 1, "key": "burger", "created_at": "yesterday"},
        {"id": 2, "key": "   "},
        {"id": 3, "key": "pizza", "sort_order": "first"},
        {"id": 4, "key": 42},
        {"id": 5, "key": "drinks", "sort_order": "3", "icon_type": 1},
    ]
    backend = _backend(lambda request: httpx.Response(200, json=rows))

    categories = backend.fetch_categories()

    assert [category.key for category in categories] == ["drinks"]
    assert categories[0].sort_order == 3
    assert categories[0].icon_type == IconType.ICON


def test_malformed_item_fields_do_not_abort_the_fetch() -> None:
    rows = [
        {"id": 1, "name": "Tea", "price": 30, "category": "drinks", "priority": 1},
        {"id": 2, "name": "Mystery", "price": "NaN", "category": "drinks"},
        {"id": 3, "name": "Cake", "price": "Infinity", "category": "dessert"},
        {"id": 4, "name": "Soup", "price": 90, "category": "starters", "created_at": "soon"},
        {"id": 5, "name": "Juice", "price": [1], "category": "drinks"},
    ]
    backend = _backend(lambda request: httpx.Response(200, json=rows))

    items = backend.fetch_items()

    assert [str(item.item_id) for item in items] == ["1"]
    assert items[0].priority == Priority.LOW


def test_server_error_becomes_backend_error() -> None:
    backend = _backend(lambda request: httpx.Response(503, json={"message": "down"}))

    with pytest.raises(BackendError):
        backend.fetch_items()
    assert backend.ping() is False


def test_transport_error_becomes_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendError):
        _backend(handler).fetch_categories()


def test_insert_order_posts_row_and_returns_persisted_record() -> None:
    posted: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        posted.extend(body)
        assert request.headers["Prefer"] == "return=representation"
        return httpx.Response(201, json=[{**body[0], "id": 55}])

    persisted = _backend(handler).insert_order(_order())

    row = posted[0]
    assert row["products"] == [
        {"id": 7, "name": "Cold Coffee", "price": 120, "quantity": 2},
        {"id": 9, "name": "Brownie", "price": 75.5, "quantity": 1},
    ]
    assert row["total_price"] == 315.5
    assert row["table_number"] == 3
    assert row["customer_name"] == "Nadia"
    assert row["status"] == "pending"
    assert parse_timestamp(row["created_at"]) == NOW

    assert persisted.order_id == "55"
    assert persisted.total_price == Decimal("315.5")
    assert persisted.status.value == "pending"


def test_insert_order_rejection_raises() -> None:
    backend = _backend(lambda request: httpx.Response(400, json={"message": "invalid"}))

    with pytest.raises(BackendError):
        backend.insert_order(_order())
