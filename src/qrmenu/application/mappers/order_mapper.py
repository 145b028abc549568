from __future__ import annotations

from qrmenu.application.dto.responses import OrderLineResponse, OrderResponse
from qrmenu.domain.order.entities import OrderRecord


def to_order_response(order: OrderRecord) -> OrderResponse:
    return OrderResponse(
        orderId=str(order.order_id) if order.order_id is not None else None,
        lines=[
            OrderLineResponse(
                itemId=str(line.item_id),
                name=line.name,
                price=float(line.price),
                quantity=line.quantity,
                lineTotal=float(line.line_total),
            )
            for line in order.lines
        ],
        totalPrice=float(order.total_price),
        tableNumber=order.table_number,
        customerName=order.customer_name,
        status=order.status.value,
        createdAt=order.created_at,
    )
