from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from qrmenu.domain.common.ids import CategoryKey, MenuItemId, OrderId
from qrmenu.domain.menu.entities import Category, IconType, MenuItem, Priority
from qrmenu.domain.order.entities import OrderLineSnapshot, OrderRecord, OrderStatus

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_price(value: Any) -> Decimal:
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"invalid price: {value!r}") from exc
    if not price.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return price


def parse_sort_order(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid sort_order: {value!r}")
    return int(value)


def json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def json_id(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _optional_text(value: Any) -> str | None:
    return str(value) if value else None


def menu_item_from_row(row: Mapping[str, Any]) -> MenuItem | None:
    try:
        return MenuItem(
            item_id=MenuItemId(str(row["id"])),
            name=str(row.get("name") or ""),
            price=parse_price(row.get("price", 0)),
            category=CategoryKey(str(row.get("category") or "").lower()),
            created_at=parse_timestamp(row.get("created_at")),
            priority=Priority.parse(row.get("priority")),
            image_url=_optional_text(row.get("image_url")),
        )
    except (KeyError, TypeError, ArithmeticError, ValueError):
        logger.warning("menu_item_row_skipped", extra={"row_id": row.get("id")})
        return None


def category_from_row(row: Mapping[str, Any]) -> Category | None:
    key = row.get("key")
    try:
        if not isinstance(key, str):
            raise TypeError(f"invalid key: {key!r}")
        return Category(
            key=CategoryKey(key.strip().lower()),
            name=_optional_text(row.get("name")),
            created_at=parse_timestamp(row.get("created_at")),
            icon=_optional_text(row.get("icon")),
            icon_type=IconType.parse(row.get("icon_type")),
            sort_order=parse_sort_order(row.get("sort_order")),
        )
    except (TypeError, ValueError):
        logger.warning("category_row_skipped", extra={"row_id": row.get("id")})
        return None


def order_to_row(order: OrderRecord) -> dict[str, Any]:
    return {
        "products": [
            {
                "id": json_id(str(line.item_id)),
                "name": line.name,
                "price": json_number(line.price),
                "quantity": line.quantity,
            }
            for line in order.lines
        ],
        "total_price": json_number(order.total_price),
        "table_number": order.table_number,
        "customer_name": order.customer_name,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
    }


def order_from_row(row: Mapping[str, Any]) -> OrderRecord:
    lines = tuple(
        OrderLineSnapshot(
            item_id=MenuItemId(str(product["id"])),
            name=str(product["name"]),
            price=parse_price(product["price"]),
            quantity=int(product["quantity"]),
        )
        for product in row.get("products") or []
    )
    order_id = row.get("id")
    return OrderRecord(
        lines=lines,
        total_price=parse_price(row["total_price"]),
        table_number=int(row["table_number"]),
        status=OrderStatus(row.get("status") or OrderStatus.PENDING.value),
        created_at=parse_timestamp(row.get("created_at")),
        customer_name=row.get("customer_name"),
        order_id=OrderId(str(order_id)) if order_id is not None else None,
    )
