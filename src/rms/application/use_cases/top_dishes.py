from __future__ import annotations

from rms.application.dto.responses import TopDishResponse
from rms.application.mappers.analytics_mapper import to_top_dish_response
from rms.application.ports.repositories import AnalyticsRepository
from rms.application.use_cases.errors import InvalidReportParameterError

MAX_TOP_DISHES = 100


class TopDishes:
    """Most ordered dishes across delivered orders.

    Ties on the ordered quantity are broken by ascending menu item id.
    """

    def __init__(self, analytics_repository: AnalyticsRepository) -> None:
        self._analytics_repository = analytics_repository

    def execute(self, limit: int = 10) -> list[TopDishResponse]:
        if limit < 1 or limit > MAX_TOP_DISHES:
            raise InvalidReportParameterError(f"limit must be between 1 and {MAX_TOP_DISHES}")

        rows = self._analytics_repository.top_dishes(limit=limit)
        return [to_top_dish_response(row) for row in rows]
