from __future__ import annotations

from fastapi import APIRouter, Depends

from rms.api.dependencies import get_analytics_repository
from rms.application.dto.responses import SalesReportRowResponse, TopDishResponse
from rms.application.ports.repositories import AnalyticsRepository
from rms.application.use_cases.sales_report import SalesReport
from rms.application.use_cases.top_dishes import TopDishes

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/sales-report", response_model=list[SalesReportRowResponse])
def sales_report(
    days: int = 7,
    analytics_repository: AnalyticsRepository = Depends(get_analytics_repository),
) -> list[SalesReportRowResponse]:
    return SalesReport(analytics_repository=analytics_repository).execute(window_days=days)


@router.get("/most-ordered-dishes", response_model=list[TopDishResponse])
def most_ordered_dishes(
    limit: int = 10,
    analytics_repository: AnalyticsRepository = Depends(get_analytics_repository),
) -> list[TopDishResponse]:
    return TopDishes(analytics_repository=analytics_repository).execute(limit=limit)
