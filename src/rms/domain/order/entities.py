from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum

from rms.domain.common.ids import MenuItemId, OrderId
from rms.domain.common.money import line_total, sum_amounts, to_amount


class OrderStatus(str, Enum):
    PLACED = "Placed"
    IN_PREPARATION = "In Preparation"
    READY = "Ready"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_FORWARD_SEQUENCE = (
    OrderStatus.PLACED,
    OrderStatus.IN_PREPARATION,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
)
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class OrderTransitionError(Exception):
    pass


class UnknownOrderStatusError(ValueError):
    pass


def allowed_statuses() -> list[str]:
    return [status.value for status in OrderStatus]


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError as exc:
        raise UnknownOrderStatusError(
            f"Invalid status. Allowed statuses are: {', '.join(allowed_statuses())}"
        ) from exc


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if current in TERMINAL_STATUSES:
        return False
    if target == OrderStatus.CANCELLED:
        return True
    return _FORWARD_SEQUENCE.index(target) > _FORWARD_SEQUENCE.index(current)


@dataclass(frozen=True)
class OrderItem:
    menu_item_id: MenuItemId
    name: str
    price_at_order: float
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")
        if not math.isfinite(self.price_at_order):
            raise ValueError("priceAtOrder must be a finite number")
        if self.price_at_order < 0:
            raise ValueError("priceAtOrder must be >= 0")


def items_total(items: list[OrderItem]) -> float:
    return float(sum_amounts([line_total(item.price_at_order, item.quantity) for item in items]))


@dataclass(frozen=True)
class Order:
    order_id: OrderId | None
    items: list[OrderItem]
    total_amount: float
    status: OrderStatus
    timestamp: datetime
    created_at: datetime
    notes: str | None = None
    updated_at: datetime | None = field(default=None)

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("Order must contain items.")

    def computed_total(self) -> float:
        return items_total(self.items)

    def total_matches_items(self) -> bool:
        return to_amount(self.total_amount) == to_amount(self.computed_total())

    def transition_to(self, target: OrderStatus, now: datetime) -> Order:
        if not can_transition(self.status, target):
            raise OrderTransitionError(
                f"cannot move order from status={self.status.value} to status={target.value}"
            )
        return replace(self, status=target, updated_at=now)


def create_order(
    items: list[OrderItem],
    total_amount: float,
    notes: str | None,
    status: OrderStatus,
    now: datetime,
) -> Order:
    if not items:
        raise ValueError("Order must contain items.")
    if not math.isfinite(total_amount):
        raise ValueError("totalAmount must be a finite number")
    return Order(
        order_id=None,
        items=items,
        total_amount=total_amount,
        status=status,
        timestamp=now,
        created_at=now,
        notes=notes,
    )
