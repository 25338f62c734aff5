from __future__ import annotations

from datetime import datetime, timezone

from prometheus_client import Counter, Histogram

from rms.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "rms_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "rms_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_TOTAL_MISMATCH_TOTAL = Counter(
    "rms_order_total_mismatch_total",
    "Orders whose client-supplied total differs from the item math.",
)

ORDER_TIME_TO_DELIVER_SECONDS = Histogram(
    "rms_order_time_to_deliver_seconds",
    "Time between order placement and delivery.",
)


def record_order_status(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_total_mismatch() -> None:
    ORDER_TOTAL_MISMATCH_TOTAL.inc()


def record_time_to_deliver(order: Order, now: datetime | None = None) -> None:
    current = now or datetime.now(timezone.utc)
    placed_at = order.timestamp
    if placed_at.tzinfo is None:
        placed_at = placed_at.replace(tzinfo=timezone.utc)
    ORDER_TIME_TO_DELIVER_SECONDS.observe(max((current - placed_at).total_seconds(), 0.0))
