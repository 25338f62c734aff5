from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from rms.api.dependencies import get_order_repository
from rms.application.dto.requests import PlaceOrderRequest, UpdateOrderStatusRequest
from rms.application.dto.responses import OrderEnvelope, OrderResponse
from rms.application.ports.repositories import OrderRepository
from rms.application.use_cases.list_orders import ListOrders
from rms.application.use_cases.place_order import PlaceOrder
from rms.application.use_cases.update_order_status import UpdateOrderStatus
from rms.domain.common.ids import OrderId

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def place_order(
    request_dto: PlaceOrderRequest,
    order_repository: OrderRepository = Depends(get_order_repository),
) -> OrderEnvelope:
    order = PlaceOrder(order_repository=order_repository).execute(request_dto)
    return OrderEnvelope(message="Order placed successfully", data=order)


@router.get("", response_model=list[OrderResponse])
def list_orders(
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int | None = None,
    order_repository: OrderRepository = Depends(get_order_repository),
) -> list[OrderResponse]:
    return ListOrders(order_repository=order_repository).execute(status=status_filter, limit=limit)


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    request_dto: UpdateOrderStatusRequest,
    order_repository: OrderRepository = Depends(get_order_repository),
) -> OrderResponse:
    return UpdateOrderStatus(order_repository=order_repository).execute(
        OrderId(order_id),
        request_dto.status,
    )
