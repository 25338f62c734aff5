from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from rms.application.dto.responses import MenuItemResponse, OrderItemResponse, OrderResponse
from rms.client.api_client import ApiError
from rms.client.cart import EMPTY_CART_MESSAGE
from rms.client.controller import MenuItemForm, UIController

STAMP = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _menu_item(item_id: str, name: str, price: float, availability: bool = True) -> MenuItemResponse:
    return MenuItemResponse(
        id=item_id,
        name=name,
        category="Mains",
        price=price,
        ingredients=["Rice"],
        tags=["veg"],
        availability=availability,
        createdAt=STAMP,
        updatedAt=STAMP,
    )


def _order(payload: dict[str, Any], status: str = "Placed") -> OrderResponse:
    return OrderResponse(
        id="ord_001",
        items=[OrderItemResponse(**item) for item in payload["items"]],
        totalAmount=payload["totalAmount"],
        notes=payload["notes"],
        status=status,
        timestamp=STAMP,
        createdAt=STAMP,
    )


class FakeApi:
    def __init__(self) -> None:
        self.menu = [
            _menu_item("itm_001", "Veg Biryani", 220.0),
            _menu_item("itm_002", "Mutton Rogan Josh", 420.0, availability=False),
        ]
        self.placed: list[dict[str, Any]] = []
        self.created: list[dict[str, Any]] = []
        self.updated: list[tuple[str, dict[str, Any]]] = []
        self.deleted: list[str] = []
        self.orders: list[OrderResponse] = []
        self.fail_with: ApiError | None = None
        self.list_orders_calls = 0

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def list_menu_items(self, limit=None, category=None, tag=None):
        self._maybe_fail()
        return list(self.menu)

    def get_menu_item(self, item_id: str) -> MenuItemResponse:
        self._maybe_fail()
        return next(item for item in self.menu if item.id == item_id)

    def create_menu_item(self, payload):
        self._maybe_fail()
        self.created.append(payload)
        return _menu_item("itm_new", payload["name"], payload["price"])

    def update_menu_item(self, item_id, payload):
        self._maybe_fail()
        self.updated.append((item_id, payload))
        return _menu_item(item_id, payload["name"], payload["price"])

    def delete_menu_item(self, item_id):
        self._maybe_fail()
        self.deleted.append(item_id)
        return "Menu item deleted successfully"

    def place_order(self, payload):
        self._maybe_fail()
        self.placed.append(payload)
        order = _order(payload)
        self.orders.append(order)
        return order

    def list_orders(self):
        self.list_orders_calls += 1
        return list(self.orders)

    def update_order_status(self, order_id, status):
        self._maybe_fail()
        return self.orders[0].model_copy(update={"status": status})

    def sales_report(self, days=7):
        return []

    def most_ordered_dishes(self, limit=10):
        return []


def _controller(api: FakeApi) -> tuple[UIController, list[str], list[str]]:
    displayed: list[str] = []
    alerts: list[str] = []
    return UIController(api, display=displayed.append, alert=alerts.append), displayed, alerts


def test_checkout_with_empty_cart_alerts_and_posts_nothing() -> None:
    api = FakeApi()
    controller, _, alerts = _controller(api)

    assert controller.checkout() is None
    assert alerts == [EMPTY_CART_MESSAGE]
    assert api.placed == []


def test_checkout_posts_cart_then_clears_it_and_refreshes_orders() -> None:
    api = FakeApi()
    controller, displayed, alerts = _controller(api)
    controller.fetch_menu_items_for_ordering()
    controller.add_menu_item_to_cart("itm_001")
    controller.add_menu_item_to_cart("itm_001")
    controller.notes = "no onions"

    order = controller.checkout()

    assert order is not None
    assert api.placed == [
        {
            "items": [
                {"menuItemId": "itm_001", "name": "Veg Biryani", "quantity": 2, "priceAtOrder": 220.0}
            ],
            "totalAmount": 440.0,
            "notes": "no onions",
            "status": "Placed",
        }
    ]
    assert alerts == ["Order placed successfully!"]
    assert controller.cart.is_empty()
    assert controller.notes == ""
    assert api.list_orders_calls == 1
    assert "Order ID: ord_001" in displayed[-1]


def test_failed_checkout_keeps_the_cart() -> None:
    api = FakeApi()
    api.fail_with = ApiError("Order must contain items.", status_code=400)
    controller, _, alerts = _controller(api)
    controller.add_to_cart("itm_001", "Veg Biryani", 220.0)

    assert controller.checkout() is None
    assert alerts == ["Error placing order: Order must contain items."]
    assert controller.cart.quantity_of("itm_001") == 1


def test_unavailable_items_cannot_be_added_to_cart() -> None:
    api = FakeApi()
    controller, _, alerts = _controller(api)
    controller.fetch_menu_items_for_ordering()

    assert controller.add_menu_item_to_cart("itm_002") is False
    assert alerts == ["Mutton Rogan Josh is unavailable."]
    assert controller.cart.is_empty()


def test_failed_status_change_alerts_and_refetches_orders() -> None:
    api = FakeApi()
    controller, _, alerts = _controller(api)
    api.fail_with = ApiError("Order not found", status_code=404)

    assert controller.change_order_status("ord_404", "Ready") is None
    assert alerts == ["Failed to update order status: Order not found"]
    assert api.list_orders_calls == 1


def test_failed_menu_fetch_logs_event_with_status_code(caplog) -> None:
    api = FakeApi()
    api.fail_with = ApiError("Error accessing the data store", status_code=500)
    controller, displayed, _ = _controller(api)

    with caplog.at_level(logging.ERROR, logger="rms.client.controller"):
        assert controller.fetch_menu_items() == []

    assert displayed == ["Error loading menu items."]
    record = next(r for r in caplog.records if r.getMessage() == "menu_fetch_failed")
    assert record.status_code == 500
    assert record.error == "Error accessing the data store"


def test_submit_creates_or_updates_depending_on_editing_state() -> None:
    api = FakeApi()
    controller, _, _ = _controller(api)

    controller.submit_menu_item(
        MenuItemForm(name="Idli", category="Breakfast", price="60", ingredients="Rice, Urad dal")
    )
    form = controller.start_editing("itm_001")
    assert form is not None
    assert controller.editing_item_id == "itm_001"
    form.price = "240"
    controller.submit_menu_item(form)

    assert api.created == [
        {
            "name": "Idli",
            "category": "Breakfast",
            "price": 60.0,
            "ingredients": ["Rice", "Urad dal"],
            "tags": [],
            "availability": True,
        }
    ]
    assert api.updated[0][0] == "itm_001"
    assert api.updated[0][1]["price"] == 240.0
    assert controller.editing_item_id is None


def test_form_with_blank_price_sends_no_price() -> None:
    assert MenuItemForm(name="Idli", category="Breakfast", price=" ").to_payload()["price"] is None
    assert MenuItemForm(name="Idli", category="Breakfast", price="abc").to_payload()["price"] is None


def test_delete_requires_confirmation() -> None:
    api = FakeApi()
    controller, _, _ = _controller(api)

    assert controller.delete_menu_item("itm_001", confirm=lambda question: False) is False
    assert controller.delete_menu_item("itm_001", confirm=lambda question: True) is True
    assert api.deleted == ["itm_001"]
