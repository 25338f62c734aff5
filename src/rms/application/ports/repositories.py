from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from rms.domain.common.ids import MenuItemId, OrderId
from rms.domain.menu.entities import MenuItem
from rms.domain.order.entities import Order, OrderStatus


@dataclass(frozen=True)
class MenuQuery:
    category: str | None = None
    tag: str | None = None
    available: bool | None = None
    limit: int | None = None
    skip: int = 0


class MenuRepository(Protocol):
    def add(self, item: MenuItem) -> MenuItem: ...

    def get(self, item_id: MenuItemId) -> MenuItem | None: ...

    def list_items(self, query: MenuQuery) -> list[MenuItem]: ...

    def update(
        self,
        item_id: MenuItemId,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> MenuItem | None: ...

    def delete(self, item_id: MenuItemId) -> bool: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> Order: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_orders(self, status: OrderStatus | None, limit: int | None) -> list[Order]: ...

    def update_status(
        self,
        order_id: OrderId,
        expected_status: OrderStatus,
        new_status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None: ...


class AnalyticsRepository(Protocol):
    def sales_by_day(self, since: datetime) -> list[SalesDayData]: ...

    def top_dishes(self, limit: int) -> list[TopDishData]: ...


class InvalidIdentifierError(Exception):
    pass


class StoreError(Exception):
    pass


@dataclass(frozen=True)
class SalesDayData:
    day: str
    total_sales: float
    count: int


@dataclass(frozen=True)
class TopDishData:
    menu_item_id: str
    total_ordered: int
    menu_item: MenuItem | None
