from __future__ import annotations

from rms.application.dto.responses import OrderItemResponse, OrderResponse
from rms.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.order_id),
        items=[
            OrderItemResponse(
                menuItemId=str(item.menu_item_id),
                name=item.name,
                priceAtOrder=item.price_at_order,
                quantity=item.quantity,
            )
            for item in order.items
        ],
        totalAmount=order.total_amount,
        notes=order.notes,
        status=order.status.value,
        timestamp=order.timestamp,
        createdAt=order.created_at,
        updatedAt=order.updated_at,
    )
