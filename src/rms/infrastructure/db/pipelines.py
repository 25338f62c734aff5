from __future__ import annotations

from datetime import datetime
from typing import Any

from rms.domain.order.entities import OrderStatus
from rms.infrastructure.db.client import MENU_COLLECTION


def sales_report_pipeline(since: datetime) -> list[dict[str, Any]]:
    return [
        {"$match": {"timestamp": {"$gte": since}, "status": OrderStatus.DELIVERED.value}},
        {
            "$group": {
                "_id": {"$dateToString": {"format": "%Y-%m-%d", "date": "$timestamp"}},
                "totalSales": {"$sum": "$totalAmount"},
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id": 1}},
    ]


def top_dishes_pipeline(limit: int) -> list[dict[str, Any]]:
    return [
        {"$match": {"status": OrderStatus.DELIVERED.value}},
        {"$unwind": "$items"},
        {
            "$group": {
                # older order lines carry the menu id as "itemId"
                "_id": {"$ifNull": ["$items.menuItemId", "$items.itemId"]},
                "totalOrdered": {"$sum": "$items.quantity"},
            }
        },
        {"$sort": {"totalOrdered": -1, "_id": 1}},
        {"$limit": limit},
        # order lines keep the menu id as a string; ids that are not ObjectIds join nothing
        {
            "$addFields": {
                "menuObjectId": {
                    "$convert": {
                        "input": "$_id",
                        "to": "objectId",
                        "onError": None,
                        "onNull": None,
                    }
                }
            }
        },
        {
            "$lookup": {
                "from": MENU_COLLECTION,
                "localField": "menuObjectId",
                "foreignField": "_id",
                "as": "menuItemDetails",
            }
        },
        {"$unwind": {"path": "$menuItemDetails", "preserveNullAndEmptyArrays": True}},
        {"$project": {"menuObjectId": 0}},
    ]
