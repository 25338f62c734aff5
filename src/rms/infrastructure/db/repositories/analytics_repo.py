from __future__ import annotations

from datetime import datetime

from pymongo.database import Database

from rms.application.ports.repositories import AnalyticsRepository, SalesDayData, TopDishData
from rms.infrastructure.db.client import ORDERS_COLLECTION
from rms.infrastructure.db.documents import menu_item_from_document
from rms.infrastructure.db.errors import store_errors
from rms.infrastructure.db.pipelines import sales_report_pipeline, top_dishes_pipeline


class MongoAnalyticsRepository(AnalyticsRepository):
    def __init__(self, database: Database) -> None:
        self._orders = database[ORDERS_COLLECTION]

    def sales_by_day(self, since: datetime) -> list[SalesDayData]:
        with store_errors("aggregate sales report"):
            rows = list(self._orders.aggregate(sales_report_pipeline(since)))
        return [
            SalesDayData(
                day=str(row["_id"]),
                total_sales=float(row.get("totalSales") or 0),
                count=int(row["count"]),
            )
            for row in rows
        ]

    def top_dishes(self, limit: int) -> list[TopDishData]:
        with store_errors("aggregate most ordered dishes"):
            rows = list(self._orders.aggregate(top_dishes_pipeline(limit)))
        return [
            TopDishData(
                menu_item_id=str(row["_id"]),
                total_ordered=int(row.get("totalOrdered") or 0),
                menu_item=(
                    menu_item_from_document(row["menuItemDetails"])
                    if row.get("menuItemDetails")
                    else None
                ),
            )
            for row in rows
        ]
