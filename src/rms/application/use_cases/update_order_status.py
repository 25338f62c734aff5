from __future__ import annotations

import logging
from datetime import datetime, timezone

from rms.application.dto.responses import OrderResponse
from rms.application.mappers.order_mapper import to_order_response
from rms.application.metrics.order_lifecycle import (
    record_order_status,
    record_time_to_deliver,
    record_transition,
)
from rms.application.ports.repositories import InvalidIdentifierError, OrderRepository
from rms.application.use_cases.errors import (
    InvalidOrderIdError,
    InvalidOrderStatusError,
    InvalidOrderTransitionError,
    OrderConflictError,
    OrderNotFoundError,
)
from rms.domain.common.ids import OrderId
from rms.domain.order.entities import (
    Order,
    OrderStatus,
    OrderTransitionError,
    UnknownOrderStatusError,
    parse_status,
)

logger = logging.getLogger(__name__)


class UpdateOrderStatus:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def _load(self, order_id: OrderId) -> Order:
        try:
            order = self._order_repository.get(order_id)
        except InvalidIdentifierError as exc:
            raise InvalidOrderIdError("Invalid order ID format.") from exc
        if order is None:
            raise OrderNotFoundError("Order not found")
        return order

    def execute(self, order_id: OrderId, status: str | None) -> OrderResponse:
        if not status:
            raise InvalidOrderStatusError("Status is required.")
        try:
            target = parse_status(status)
        except UnknownOrderStatusError as exc:
            raise InvalidOrderStatusError(str(exc)) from exc

        order = self._load(order_id)
        if order.status == target:
            return to_order_response(order)

        now = datetime.now(timezone.utc)
        try:
            moved = order.transition_to(target, now=now)
        except OrderTransitionError as exc:
            raise InvalidOrderTransitionError(str(exc)) from exc

        persisted = self._order_repository.update_status(
            order_id,
            expected_status=order.status,
            new_status=moved.status,
            updated_at=moved.updated_at,
        )
        if persisted is None:
            current = self._load(order_id)
            if current.status == target:
                return to_order_response(current)
            raise OrderConflictError(f"order {order_id} status update conflict")

        logger.info(
            "order_status_changed",
            extra={"order_id": str(order_id), "from_status": order.status.value, "to_status": target.value},
        )
        record_transition(from_status=order.status, to_status=target)
        record_order_status(persisted)
        if target == OrderStatus.DELIVERED:
            record_time_to_deliver(persisted, now=now)
        return to_order_response(persisted)
