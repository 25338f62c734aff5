from __future__ import annotations

from rms.application.dto.responses import OrderResponse
from rms.application.mappers.order_mapper import to_order_response
from rms.application.ports.repositories import OrderRepository
from rms.application.use_cases.errors import InvalidOrderStatusError, OrderValidationError
from rms.domain.order.entities import UnknownOrderStatusError, parse_status

MAX_ORDER_LIMIT = 500


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, status: str | None = None, limit: int | None = None) -> list[OrderResponse]:
        try:
            status_filter = parse_status(status) if status else None
        except UnknownOrderStatusError as exc:
            raise InvalidOrderStatusError(str(exc)) from exc
        if limit is not None and (limit < 1 or limit > MAX_ORDER_LIMIT):
            raise OrderValidationError(f"limit must be between 1 and {MAX_ORDER_LIMIT}")

        orders = self._order_repository.list_orders(status=status_filter, limit=limit)
        return [to_order_response(order) for order in orders]
