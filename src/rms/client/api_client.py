"""HTTP client for the restaurant management REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from rms.application.dto.responses import (
    MenuItemResponse,
    OrderResponse,
    SalesReportRowResponse,
    TopDishResponse,
)

logger = logging.getLogger(__name__)

_MENU_ITEMS = TypeAdapter(list[MenuItemResponse])
_ORDERS = TypeAdapter(list[OrderResponse])
_SALES_ROWS = TypeAdapter(list[SalesReportRowResponse])
_TOP_DISHES = TypeAdapter(list[TopDishResponse])


class ApiError(Exception):
    """A failed API call, carrying the message the server sent back."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    fallback = f"HTTP error! status: {response.status_code}"
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback
    return response.text or fallback


class RestaurantApiClient:
    """Synchronous client over the menu, order and analytics endpoints.

    Every method raises ApiError when the server answers with a non-2xx
    status or cannot be reached.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root URL of the API (e.g., "http://localhost:9193")
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> RestaurantApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.error("api_request_failed", extra={"method": method, "path": path, "error": str(exc)})
            raise ApiError(str(exc)) from exc

        if response.is_error:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response.json()

    def list_menu_items(
        self,
        limit: int | None = None,
        category: str | None = None,
        tag: str | None = None,
    ) -> list[MenuItemResponse]:
        params = {
            key: value
            for key, value in {"limit": limit, "category": category, "tag": tag}.items()
            if value is not None
        }
        body = self._request("GET", "/api/menu", params=params)
        return _MENU_ITEMS.validate_python(body.get("data", []))

    def get_menu_item(self, item_id: str) -> MenuItemResponse:
        body = self._request("GET", f"/api/menu/{item_id}")
        return MenuItemResponse.model_validate(body.get("data", body))

    def create_menu_item(self, payload: dict[str, Any]) -> MenuItemResponse:
        body = self._request("POST", "/api/menu", json=payload)
        return MenuItemResponse.model_validate(body["data"])

    def update_menu_item(self, item_id: str, payload: dict[str, Any]) -> MenuItemResponse:
        body = self._request("PUT", f"/api/menu/{item_id}", json=payload)
        return MenuItemResponse.model_validate(body["data"])

    def delete_menu_item(self, item_id: str) -> str:
        body = self._request("DELETE", f"/api/menu/{item_id}")
        return str(body.get("message", ""))

    def place_order(self, payload: dict[str, Any]) -> OrderResponse:
        body = self._request("POST", "/api/orders", json=payload)
        return OrderResponse.model_validate(body["data"])

    def list_orders(self) -> list[OrderResponse]:
        return _ORDERS.validate_python(self._request("GET", "/api/orders"))

    def update_order_status(self, order_id: str, status: str) -> OrderResponse:
        body = self._request("PUT", f"/api/orders/{order_id}/status", json={"status": status})
        return OrderResponse.model_validate(body)

    def sales_report(self, days: int = 7) -> list[SalesReportRowResponse]:
        body = self._request("GET", "/api/analytics/sales-report", params={"days": days})
        return _SALES_ROWS.validate_python(body)

    def most_ordered_dishes(self, limit: int = 10) -> list[TopDishResponse]:
        body = self._request("GET", "/api/analytics/most-ordered-dishes", params={"limit": limit})
        return _TOP_DISHES.validate_python(body)
