from __future__ import annotations

from rms.application.dto.responses import SalesReportRowResponse, TopDishResponse
from rms.application.mappers.menu_mapper import to_menu_item_response
from rms.application.ports.repositories import SalesDayData, TopDishData


def to_sales_report_row(row: SalesDayData) -> SalesReportRowResponse:
    return SalesReportRowResponse(id=row.day, totalSales=row.total_sales, count=row.count)


def to_top_dish_response(row: TopDishData) -> TopDishResponse:
    return TopDishResponse(
        id=row.menu_item_id,
        totalOrdered=row.total_ordered,
        menuItemDetails=to_menu_item_response(row.menu_item) if row.menu_item else None,
    )
