from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from rms.api.error_handling import register_exception_handlers
from rms.api.middleware.access_log import AccessLogMiddleware
from rms.api.middleware.request_id import RequestIDMiddleware
from rms.api.routes.analytics import router as analytics_router
from rms.api.routes.health import router as health_router
from rms.api.routes.menu import router as menu_router
from rms.api.routes.metrics import router as metrics_router
from rms.api.routes.orders import router as orders_router
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.infrastructure.cache.redis_cache import (
    RedisCacheStore,
    build_cache_store,
    menu_cache_ttl_seconds,
)
from rms.infrastructure.db.client import create_client, ensure_indexes, get_database
from rms.infrastructure.observability.logging_config import configure_logging
from rms.infrastructure.observability.otel import configure_otel, flush_traces

logger = logging.getLogger(__name__)


def _cors_allow_origins() -> list[str]:
    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    origins = [origin.strip() for origin in raw_value.split(",") if origin.strip()]
    return origins or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_client()
    database = get_database(client)
    try:
        await run_in_threadpool(ensure_indexes, database)
    except Exception:
        logger.exception("store_startup_failed", extra={"database": database.name})
        client.close()
        raise

    cache_store = build_cache_store()
    app.state.mongo_client = client
    app.state.database = database
    app.state.cache_store = cache_store
    app.state.menu_cache = MenuListingCache(cache_store, ttl_seconds=menu_cache_ttl_seconds())
    logger.info("store_connected", extra={"database": database.name})
    try:
        yield
    finally:
        if isinstance(cache_store, RedisCacheStore):
            cache_store.close()
        client.close()
        flush_traces()
        logger.info("store_closed", extra={"database": database.name})


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Restaurant Management API", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(menu_router)
    app.include_router(orders_router)
    app.include_router(analytics_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "rms.api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "9193")),
        log_config=None,
    )
