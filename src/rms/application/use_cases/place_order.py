from __future__ import annotations

import logging
from datetime import datetime, timezone

from rms.application.dto.requests import PlaceOrderRequest
from rms.application.dto.responses import OrderResponse
from rms.application.mappers.order_mapper import to_order_response
from rms.application.metrics.order_lifecycle import record_order_status, record_total_mismatch
from rms.application.ports.repositories import OrderRepository
from rms.application.use_cases.errors import InvalidOrderStatusError, OrderValidationError
from rms.domain.common.ids import MenuItemId
from rms.domain.order.entities import (
    OrderItem,
    OrderStatus,
    UnknownOrderStatusError,
    create_order,
    items_total,
    parse_status,
)

logger = logging.getLogger(__name__)


class PlaceOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, request_dto: PlaceOrderRequest) -> OrderResponse:
        if not request_dto.items:
            raise OrderValidationError("Order must contain items.")

        try:
            status = parse_status(request_dto.status) if request_dto.status else OrderStatus.PLACED
        except UnknownOrderStatusError as exc:
            raise InvalidOrderStatusError(str(exc)) from exc

        try:
            items = [
                OrderItem(
                    menu_item_id=MenuItemId(item.menu_item_id),
                    name=item.name,
                    price_at_order=item.price_at_order,
                    quantity=item.quantity,
                )
                for item in request_dto.items
            ]
        except ValueError as exc:
            raise OrderValidationError(str(exc)) from exc

        # the client-supplied total is stored as sent; it is only derived when absent
        total_amount = request_dto.total_amount
        if total_amount is None:
            total_amount = items_total(items)

        try:
            order = create_order(
                items=items,
                total_amount=total_amount,
                notes=request_dto.notes,
                status=status,
                now=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            raise OrderValidationError(str(exc)) from exc
        if not order.total_matches_items():
            record_total_mismatch()
            logger.warning(
                "order_total_mismatch",
                extra={"total_amount": order.total_amount, "computed_total": order.computed_total()},
            )

        persisted = self._order_repository.add(order)
        record_order_status(persisted)
        return to_order_response(persisted)
