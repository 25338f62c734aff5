"""Plain-text projections of API data for the console client.

Nothing here talks to the API or mutates state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rms.application.dto.responses import (
    MenuItemResponse,
    OrderResponse,
    SalesReportRowResponse,
    TopDishResponse,
)
from rms.client.cart import Cart
from rms.domain.common.money import to_amount

CURRENCY_SYMBOL = "₹"
ORDER_STATUS_CHOICES = ("Placed", "In Preparation", "Ready", "Delivered")


def format_currency(amount: float) -> str:
    return f"{CURRENCY_SYMBOL}{to_amount(amount):.2f}"


def join_list(values: Iterable[str] | None) -> str:
    joined = ", ".join(values or [])
    return joined or "N/A"


def format_timestamp(value: datetime) -> str:
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def render_menu_item(item: MenuItemResponse) -> str:
    return "\n".join(
        [
            f"{item.name} ({item.category})  [{item.id}]",
            f"  Price: {format_currency(item.price)}",
            f"  Ingredients: {join_list(item.ingredients)}",
            f"  Tags: {join_list(item.tags)}",
            f"  Available: {'Yes' if item.availability else 'No'}",
        ]
    )


def render_menu(items: list[MenuItemResponse]) -> str:
    if not items:
        return "No menu items available."
    return "\n".join(render_menu_item(item) for item in items)


def render_order_option(item: MenuItemResponse) -> str:
    action = f"add {item.id}" if item.availability else "Unavailable"
    return f"{item.name} ({format_currency(item.price)})  -> {action}"


def render_ordering_menu(items: list[MenuItemResponse]) -> str:
    if not items:
        return "No menu items available to order."
    return "\n".join(render_order_option(item) for item in items)


def render_cart(cart: Cart) -> str:
    if cart.is_empty():
        lines = ["Your order is empty."]
    else:
        lines = [
            f"{line.name} (x{line.quantity}) - {format_currency(line.total())}  [{line.item_id}]"
            for line in cart.lines
        ]
    lines.append(f"Total: {format_currency(cart.total())}")
    return "\n".join(lines)


def render_order(order: OrderResponse) -> str:
    lines = [
        f"Order ID: {order.id}",
        f"  Total: {format_currency(order.totalAmount)}",
        f"  Placed: {format_timestamp(order.timestamp)}",
        f"  Status: {order.status}",
    ]
    if order.notes:
        lines.append(f"  Notes: {order.notes}")
    lines.extend(
        f"  - {item.name} x {item.quantity} ({format_currency(item.priceAtOrder)} each)"
        for item in order.items
    )
    return "\n".join(lines)


def render_orders(orders: list[OrderResponse]) -> str:
    if not orders:
        return "No orders placed yet."
    return "\n".join(render_order(order) for order in orders)


def render_sales_report(rows: list[SalesReportRowResponse]) -> str:
    if not rows:
        return "No delivered orders in this period."
    return "\n".join(
        f"{row.id}: {format_currency(row.totalSales)} across {row.count} order(s)" for row in rows
    )


def render_top_dishes(rows: list[TopDishResponse]) -> str:
    if not rows:
        return "No delivered orders yet."
    lines = []
    for rank, row in enumerate(rows, start=1):
        name = row.menuItemDetails.name if row.menuItemDetails else f"(removed item {row.id})"
        lines.append(f"{rank}. {name} - {row.totalOrdered} ordered")
    return "\n".join(lines)
