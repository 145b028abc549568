from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum

from qrmenu.domain.cart.selection import CartLine
from qrmenu.domain.common.ids import MenuItemId, OrderId


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    DELIVERED = "delivered"
    COMPLETED = "completed"


@dataclass(frozen=True)
class OrderLineSnapshot:
    item_id: MenuItemId
    name: str
    price: Decimal
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if self.price < 0:
            raise ValueError("price must be >= 0")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_cart_line(cls, line: CartLine) -> OrderLineSnapshot:
        return cls(
            item_id=line.item.item_id,
            name=line.item.name,
            price=line.item.price,
            quantity=line.quantity,
        )


@dataclass(frozen=True)
class OrderRecord:
    lines: tuple[OrderLineSnapshot, ...]
    total_price: Decimal
    table_number: int
    status: OrderStatus
    created_at: datetime
    customer_name: str | None = None
    order_id: OrderId | None = None

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        if self.table_number < 1:
            raise ValueError("table_number must be >= 1")
        expected_total = sum((line.line_total for line in self.lines), Decimal("0"))
        if self.total_price != expected_total:
            raise ValueError("total_price must equal sum of price * quantity")

    def with_order_id(self, order_id: OrderId) -> OrderRecord:
        return replace(self, order_id=order_id)


def create_pending_order(
    lines: list[OrderLineSnapshot],
    table_number: int,
    customer_name: str | None,
    now: datetime,
) -> OrderRecord:
    if not lines:
        raise ValueError("order must contain at least one line")

    return OrderRecord(
        lines=tuple(lines),
        total_price=sum((line.line_total for line in lines), Decimal("0")),
        table_number=table_number,
        status=OrderStatus.PENDING,
        created_at=now,
        customer_name=customer_name,
    )
