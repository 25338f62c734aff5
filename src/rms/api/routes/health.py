from __future__ import annotations

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from rms.infrastructure.cache.redis_cache import RedisCacheStore
from rms.infrastructure.db.client import ping_database

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Restaurant App Backend is running!"


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(request: Request, response: Response) -> dict[str, object]:
    state = request.app.state
    client = getattr(state, "mongo_client", None)
    mongo_ready = client is not None and ping_database(client)

    # the menu cache is optional; only a configured Redis can make the service unready
    cache_store = getattr(state, "cache_store", None)
    redis_ready: bool | str = (
        cache_store.ping() if isinstance(cache_store, RedisCacheStore) else "disabled"
    )

    if mongo_ready and redis_ready:
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"mongodb": mongo_ready, "redis": redis_ready},
    }
