from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from rms.api.dependencies import get_analytics_repository
from rms.api.main import app
from rms.application.ports.repositories import SalesDayData, TopDishData


class FakeAnalyticsRepository:
    def __init__(self) -> None:
        self.since: datetime | None = None

    def sales_by_day(self, since: datetime) -> list[SalesDayData]:
        self.since = since
        return [SalesDayData(day="2024-05-06", total_sales=1137.0, count=2)]

    def top_dishes(self, limit: int) -> list[TopDishData]:
        return [TopDishData(menu_item_id="665f1c2e9b1e8a0012345678", total_ordered=4, menu_item=None)]


@pytest.fixture
def repository() -> Iterator[FakeAnalyticsRepository]:
    fake = FakeAnalyticsRepository()
    app.dependency_overrides[get_analytics_repository] = lambda: fake
    yield fake
    app.dependency_overrides.clear()


def test_sales_report_defaults_to_seven_days(repository: FakeAnalyticsRepository) -> None:
    response = TestClient(app).get("/api/analytics/sales-report")

    assert response.status_code == 200
    assert response.json() == [{"_id": "2024-05-06", "totalSales": 1137.0, "count": 2}]
    assert repository.since is not None
    window = datetime.now(timezone.utc) - repository.since
    assert timedelta(days=7) <= window < timedelta(days=7, minutes=1)


def test_sales_report_rejects_bad_window(repository: FakeAnalyticsRepository) -> None:
    response = TestClient(app).get("/api/analytics/sales-report", params={"days": 0})

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_REPORT_PARAMETER"


def test_most_ordered_dishes_keeps_rows_for_deleted_items(repository: FakeAnalyticsRepository) -> None:
    response = TestClient(app).get("/api/analytics/most-ordered-dishes", params={"limit": 5})

    assert response.status_code == 200
    assert response.json() == [
        {"_id": "665f1c2e9b1e8a0012345678", "totalOrdered": 4, "menuItemDetails": None}
    ]


def test_most_ordered_dishes_rejects_non_numeric_limit(repository: FakeAnalyticsRepository) -> None:
    response = TestClient(app).get("/api/analytics/most-ordered-dishes", params={"limit": "lots"})

    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_REQUEST"
