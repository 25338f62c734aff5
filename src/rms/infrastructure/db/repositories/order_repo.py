from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from rms.application.ports.repositories import OrderRepository, StoreError
from rms.domain.common.ids import OrderId
from rms.domain.order.entities import Order, OrderStatus
from rms.infrastructure.db.client import ORDERS_COLLECTION
from rms.infrastructure.db.documents import (
    UnreadableDocumentError,
    order_from_document,
    order_to_document,
)
from rms.infrastructure.db.errors import store_errors, to_object_id

logger = logging.getLogger(__name__)


def _decode(document: dict[str, Any]) -> Order:
    try:
        return order_from_document(document)
    except UnreadableDocumentError as exc:
        raise StoreError(str(exc)) from exc


class MongoOrderRepository(OrderRepository):
    def __init__(self, database: Database) -> None:
        self._collection = database[ORDERS_COLLECTION]

    def add(self, order: Order) -> Order:
        with store_errors("insert order"):
            result = self._collection.insert_one(order_to_document(order))
        return replace(order, order_id=OrderId(str(result.inserted_id)))

    def get(self, order_id: OrderId) -> Order | None:
        object_id = to_object_id(order_id)
        with store_errors("find order"):
            document = self._collection.find_one({"_id": object_id})
        if document is None:
            return None
        return _decode(document)

    def list_orders(self, status: OrderStatus | None, limit: int | None) -> list[Order]:
        criteria: dict[str, Any] = {}
        if status is not None:
            criteria["status"] = status.value

        with store_errors("list orders"):
            cursor = self._collection.find(criteria).sort(
                [("timestamp", DESCENDING), ("_id", DESCENDING)]
            )
            if limit is not None:
                cursor = cursor.limit(limit)
            documents = list(cursor)
        orders = []
        for document in documents:
            try:
                orders.append(order_from_document(document))
            except UnreadableDocumentError:
                logger.warning("order_document_skipped", extra={"order_id": str(document.get("_id"))})
        return orders

    def update_status(
        self,
        order_id: OrderId,
        expected_status: OrderStatus,
        new_status: OrderStatus,
        updated_at: datetime,
    ) -> Order | None:
        object_id = to_object_id(order_id)
        with store_errors("update order status"):
            document = self._collection.find_one_and_update(
                {"_id": object_id, "status": expected_status.value},
                {"$set": {"status": new_status.value, "updatedAt": updated_at}},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            return None
        return _decode(document)
