from __future__ import annotations

from datetime import datetime, timedelta, timezone

from rms.application.dto.responses import SalesReportRowResponse
from rms.application.mappers.analytics_mapper import to_sales_report_row
from rms.application.ports.repositories import AnalyticsRepository
from rms.application.use_cases.errors import InvalidReportParameterError

MAX_WINDOW_DAYS = 366


class SalesReport:
    """Daily totals of delivered orders over a trailing window."""

    def __init__(self, analytics_repository: AnalyticsRepository) -> None:
        self._analytics_repository = analytics_repository

    def execute(
        self,
        window_days: int = 7,
        now: datetime | None = None,
    ) -> list[SalesReportRowResponse]:
        if window_days < 1 or window_days > MAX_WINDOW_DAYS:
            raise InvalidReportParameterError(f"days must be between 1 and {MAX_WINDOW_DAYS}")

        current = now or datetime.now(timezone.utc)
        rows = self._analytics_repository.sales_by_day(since=current - timedelta(days=window_days))
        return [to_sales_report_row(row) for row in rows]
