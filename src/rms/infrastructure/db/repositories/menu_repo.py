from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database

from rms.application.ports.repositories import MenuQuery, MenuRepository
from rms.domain.common.ids import MenuItemId
from rms.domain.menu.entities import MenuItem
from rms.infrastructure.db.client import MENU_COLLECTION
from rms.infrastructure.db.documents import menu_item_from_document, menu_item_to_document
from rms.infrastructure.db.errors import store_errors, to_object_id


class MongoMenuRepository(MenuRepository):
    def __init__(self, database: Database) -> None:
        self._collection = database[MENU_COLLECTION]

    def add(self, item: MenuItem) -> MenuItem:
        with store_errors("insert menu item"):
            result = self._collection.insert_one(menu_item_to_document(item))
        return replace(item, item_id=MenuItemId(str(result.inserted_id)))

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        object_id = to_object_id(item_id)
        with store_errors("find menu item"):
            document = self._collection.find_one({"_id": object_id})
        if document is None:
            return None
        return menu_item_from_document(document)

    def list_items(self, query: MenuQuery) -> list[MenuItem]:
        criteria: dict[str, Any] = {}
        if query.category is not None:
            criteria["category"] = query.category
        if query.tag is not None:
            criteria["tags"] = query.tag
        if query.available is not None:
            criteria["availability"] = query.available

        with store_errors("list menu items"):
            cursor = self._collection.find(criteria).sort("_id", ASCENDING).skip(query.skip)
            if query.limit is not None:
                cursor = cursor.limit(query.limit)
            documents = list(cursor)
        return [menu_item_from_document(document) for document in documents]

    def update(
        self,
        item_id: MenuItemId,
        changes: dict[str, Any],
        updated_at: datetime,
    ) -> MenuItem | None:
        object_id = to_object_id(item_id)
        with store_errors("update menu item"):
            document = self._collection.find_one_and_update(
                {"_id": object_id},
                {"$set": {**changes, "updatedAt": updated_at}},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            return None
        return menu_item_from_document(document)

    def delete(self, item_id: MenuItemId) -> bool:
        object_id = to_object_id(item_id)
        with store_errors("delete menu item"):
            result = self._collection.delete_one({"_id": object_id})
        return result.deleted_count > 0
