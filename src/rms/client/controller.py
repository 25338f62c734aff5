from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from rms.application.dto.responses import MenuItemResponse, OrderResponse
from rms.client.api_client import ApiError, RestaurantApiClient
from rms.client.cart import Cart, EmptyCartError
from rms.client.rendering import (
    render_cart,
    render_menu,
    render_ordering_menu,
    render_orders,
    render_sales_report,
    render_top_dishes,
)

logger = logging.getLogger(__name__)

ORDERING_MENU_LIMIT = 100


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class MenuItemForm:
    """Raw menu item form values, as typed by the user."""

    name: str = ""
    category: str = ""
    price: str = ""
    ingredients: str = ""
    tags: str = ""
    availability: bool = True

    def to_payload(self) -> dict[str, Any]:
        try:
            price: float | None = float(self.price) if self.price.strip() else None
        except ValueError:
            price = None
        return {
            "name": self.name.strip() or None,
            "category": self.category.strip() or None,
            "price": price,
            "ingredients": _split_csv(self.ingredients),
            "tags": _split_csv(self.tags),
            "availability": self.availability,
        }

    @classmethod
    def from_item(cls, item: MenuItemResponse) -> MenuItemForm:
        return cls(
            name=item.name,
            category=item.category,
            price=f"{item.price}",
            ingredients=", ".join(item.ingredients),
            tags=", ".join(item.tags),
            availability=item.availability,
        )


class UIController:
    """Drives the API on behalf of a user and keeps the client-side state.

    ``display`` receives rendered views; ``alert`` receives messages the user
    must acknowledge. Failures are reported through them and never raised.
    """

    def __init__(
        self,
        api: RestaurantApiClient,
        display: Callable[[str], None],
        alert: Callable[[str], None],
    ) -> None:
        self._api = api
        self._display = display
        self._alert = alert
        self.cart = Cart()
        self.notes = ""
        self.editing_item_id: str | None = None
        self._menu: dict[str, MenuItemResponse] = {}

    # menu management

    def fetch_menu_items(self) -> list[MenuItemResponse]:
        try:
            items = self._api.list_menu_items()
        except ApiError as exc:
            logger.error("menu_fetch_failed", extra={"status_code": exc.status_code, "error": exc.message})
            self._display("Error loading menu items.")
            return []
        self._menu = {item.id: item for item in items}
        self._display(render_menu(items))
        return items

    def submit_menu_item(self, form: MenuItemForm) -> MenuItemResponse | None:
        editing = self.editing_item_id
        try:
            if editing:
                saved = self._api.update_menu_item(editing, form.to_payload())
            else:
                saved = self._api.create_menu_item(form.to_payload())
        except ApiError as exc:
            action = "updating" if editing else "adding"
            self._alert(f"Error {action} menu item: {exc.message}")
            return None

        self.editing_item_id = None
        self.fetch_menu_items()
        return saved

    def start_editing(self, item_id: str) -> MenuItemForm | None:
        try:
            item = self._api.get_menu_item(item_id)
        except ApiError as exc:
            self._alert(f"Error populating form for editing: {exc.message}")
            return None
        self.editing_item_id = item_id
        return MenuItemForm.from_item(item)

    def cancel_editing(self) -> None:
        self.editing_item_id = None

    def delete_menu_item(self, item_id: str, confirm: Callable[[str], bool]) -> bool:
        if not confirm("Are you sure you want to delete this item?"):
            return False
        try:
            self._api.delete_menu_item(item_id)
        except ApiError as exc:
            self._alert(f"Error deleting item: {exc.message}")
            return False
        self.fetch_menu_items()
        return True

    # ordering

    def fetch_menu_items_for_ordering(self) -> list[MenuItemResponse]:
        try:
            items = self._api.list_menu_items(limit=ORDERING_MENU_LIMIT)
        except ApiError as exc:
            logger.error(
                "ordering_menu_fetch_failed",
                extra={"status_code": exc.status_code, "error": exc.message},
            )
            self._display("Error loading menu items.")
            return []
        self._menu = {item.id: item for item in items}
        self._display(render_ordering_menu(items))
        return items

    def add_to_cart(self, item_id: str, name: str, price: float) -> None:
        self.cart.add(item_id, name, price)
        self._display(render_cart(self.cart))

    def add_menu_item_to_cart(self, item_id: str) -> bool:
        item = self._menu.get(item_id)
        if item is None:
            self._alert(f"Unknown menu item: {item_id}")
            return False
        if not item.availability:
            self._alert(f"{item.name} is unavailable.")
            return False
        self.add_to_cart(item.id, item.name, item.price)
        return True

    def remove_from_cart(self, item_id: str) -> None:
        self.cart.remove(item_id)
        self._display(render_cart(self.cart))

    def checkout(self) -> OrderResponse | None:
        try:
            payload = self.cart.to_order_payload(notes=self.notes)
        except EmptyCartError as exc:
            self._alert(str(exc))
            return None

        try:
            order = self._api.place_order(payload)
        except ApiError as exc:
            self._alert(f"Error placing order: {exc.message}")
            return None

        self._alert("Order placed successfully!")
        self.cart.clear()
        self.notes = ""
        self._display(render_cart(self.cart))
        self.fetch_orders()
        return order

    # order tracking

    def fetch_orders(self) -> list[OrderResponse]:
        try:
            orders = self._api.list_orders()
        except ApiError as exc:
            logger.error("orders_fetch_failed", extra={"status_code": exc.status_code, "error": exc.message})
            self._display("Error loading orders.")
            return []
        self._display(render_orders(orders))
        return orders

    def change_order_status(self, order_id: str, status: str) -> OrderResponse | None:
        try:
            updated = self._api.update_order_status(order_id, status)
        except ApiError as exc:
            self._alert(f"Failed to update order status: {exc.message}")
            self.fetch_orders()
            return None
        self._display(f"Order {updated.id}: {updated.status}")
        return updated

    # reports

    def show_sales_report(self, days: int = 7) -> None:
        try:
            rows = self._api.sales_report(days=days)
        except ApiError as exc:
            self._alert(f"Error loading sales report: {exc.message}")
            return
        self._display(render_sales_report(rows))

    def show_top_dishes(self, limit: int = 10) -> None:
        try:
            rows = self._api.most_ordered_dishes(limit=limit)
        except ApiError as exc:
            self._alert(f"Error loading most ordered dishes: {exc.message}")
            return
        self._display(render_top_dishes(rows))
