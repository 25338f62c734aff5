from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rms.domain.common.money import line_total, sum_amounts

EMPTY_CART_MESSAGE = "Your order is empty. Please add items to your order."


class EmptyCartError(Exception):
    pass


@dataclass
class CartLine:
    item_id: str
    name: str
    price: float
    quantity: int = 1

    def total(self) -> float:
        return float(line_total(self.price, self.quantity))


class Cart:
    """Client-side selection of menu items, keyed by menu item id.

    Nothing here is persisted; the cart only turns into an order payload at
    checkout.
    """

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    def _find(self, item_id: str) -> CartLine | None:
        for line in self._lines:
            if line.item_id == item_id:
                return line
        return None

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def quantity_of(self, item_id: str) -> int:
        line = self._find(item_id)
        return line.quantity if line else 0

    def add(self, item_id: str, name: str, price: float) -> CartLine:
        line = self._find(item_id)
        if line is None:
            line = CartLine(item_id=item_id, name=name, price=price)
            self._lines.append(line)
        else:
            line.quantity += 1
        return line

    def remove(self, item_id: str) -> CartLine | None:
        line = self._find(item_id)
        if line is None:
            return None
        line.quantity -= 1
        if line.quantity <= 0:
            self._lines.remove(line)
        return line

    def total(self) -> float:
        return float(sum_amounts([line_total(line.price, line.quantity) for line in self._lines]))

    def clear(self) -> None:
        self._lines.clear()

    def to_order_payload(self, notes: str = "") -> dict[str, Any]:
        if self.is_empty():
            raise EmptyCartError(EMPTY_CART_MESSAGE)
        return {
            "items": [
                {
                    "menuItemId": line.item_id,
                    "name": line.name,
                    "quantity": line.quantity,
                    "priceAtOrder": line.price,
                }
                for line in self._lines
            ],
            "totalAmount": self.total(),
            "notes": notes,
            "status": "Placed",
        }
