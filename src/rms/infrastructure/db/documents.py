from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from rms.domain.common.ids import MenuItemId, OrderId
from rms.domain.menu.entities import MenuItem
from rms.domain.order.entities import Order, OrderItem, OrderStatus


def _utc(value: datetime | None, fallback: datetime) -> datetime:
    if value is None:
        return fallback
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def menu_item_to_document(item: MenuItem) -> dict[str, Any]:
    return {
        "name": item.name,
        "category": item.category,
        "price": item.price,
        "ingredients": list(item.ingredients),
        "tags": list(item.tags),
        "availability": item.availability,
        "createdAt": item.created_at,
        "updatedAt": item.updated_at,
    }


def menu_item_from_document(document: dict[str, Any]) -> MenuItem:
    generated_at = document["_id"].generation_time
    created_at = _utc(document.get("createdAt"), generated_at)
    return MenuItem(
        item_id=MenuItemId(str(document["_id"])),
        name=document["name"],
        category=document["category"],
        price=float(document["price"]),
        ingredients=list(document.get("ingredients") or []),
        tags=list(document.get("tags") or []),
        availability=bool(document.get("availability", True)),
        created_at=created_at,
        updated_at=_utc(document.get("updatedAt"), created_at),
    )


def order_to_document(order: Order) -> dict[str, Any]:
    document: dict[str, Any] = {
        "items": [
            {
                "menuItemId": str(item.menu_item_id),
                "name": item.name,
                "priceAtOrder": item.price_at_order,
                "quantity": item.quantity,
            }
            for item in order.items
        ],
        "totalAmount": order.total_amount,
        "notes": order.notes,
        "status": order.status.value,
        "timestamp": order.timestamp,
        "createdAt": order.created_at,
    }
    if order.updated_at is not None:
        document["updatedAt"] = order.updated_at
    return document


class UnreadableDocumentError(ValueError):
    pass


def order_from_document(document: dict[str, Any]) -> Order:
    try:
        return _order_from_document(document)
    except (KeyError, TypeError, ValueError) as exc:
        raise UnreadableDocumentError(
            f"unreadable order document {document.get('_id')}: {exc}"
        ) from exc


def _order_from_document(document: dict[str, Any]) -> Order:
    generated_at = document["_id"].generation_time
    created_at = _utc(document.get("createdAt"), generated_at)
    updated_at = document.get("updatedAt")
    return Order(
        order_id=OrderId(str(document["_id"])),
        items=[
            OrderItem(
                menu_item_id=MenuItemId(str(item.get("menuItemId") or item.get("itemId") or "")),
                name=item.get("name", ""),
                # older documents carry the snapshot price as "price"
                price_at_order=float(item.get("priceAtOrder", item.get("price", 0))),
                quantity=int(item["quantity"]),
            )
            for item in document.get("items", [])
        ],
        total_amount=float(document.get("totalAmount") or 0),
        notes=document.get("notes"),
        status=OrderStatus(document.get("status") or OrderStatus.PLACED.value),
        timestamp=_utc(document.get("timestamp"), created_at),
        created_at=created_at,
        updated_at=_utc(updated_at, created_at) if updated_at is not None else None,
    )
