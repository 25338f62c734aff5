from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
import redis
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import rms.api.routes.health as health_route
from rms.api.main import app
from rms.application.ports.cache import NullCacheStore
from rms.infrastructure.cache.redis_cache import RedisCacheStore


class FakeRedis:
    def __init__(self, healthy: bool) -> None:
        self.healthy = healthy

    def ping(self) -> bool:
        if not self.healthy:
            raise redis.ConnectionError("connection refused")
        return True


@pytest.fixture
def app_state() -> Iterator[object]:
    client = object()
    app.state.mongo_client = client
    app.state.cache_store = NullCacheStore()
    yield client
    del app.state.mongo_client
    del app.state.cache_store


def test_root_reports_running() -> None:
    response = TestClient(app).get("/")

    assert response.status_code == 200
    assert response.text == "Restaurant App Backend is running!"


def test_live_health_endpoint() -> None:
    client = TestClient(app)
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch, app_state) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda client: client is app_state)
    app.state.cache_store = RedisCacheStore(FakeRedis(healthy=True))

    response = TestClient(app).get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_without_redis_configured_skips_cache_check(monkeypatch, app_state) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda client: True)

    response = TestClient(app).get("/health/ready")

    assert response.status_code == 200


def test_ready_reports_unreachable_redis(monkeypatch, app_state) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda client: True)
    app.state.cache_store = RedisCacheStore(FakeRedis(healthy=False))

    response = TestClient(app).get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"] == {"mongodb": True, "redis": False}


def test_ready_reports_unavailable_store(monkeypatch, app_state) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda client: False)

    response = TestClient(app).get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {
        "status": "unavailable",
        "checks": {"mongodb": False, "redis": "disabled"},
    }


def test_metrics_endpoint_exposes_request_metrics() -> None:
    client = TestClient(app)
    client.get("/health/live")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_request_duration_seconds" in response.text
    assert 'path="/health/live"' in response.text
