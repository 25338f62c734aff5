from __future__ import annotations

from fastapi import Depends, Request
from pymongo.database import Database

from rms.application.ports.repositories import (
    AnalyticsRepository,
    MenuRepository,
    OrderRepository,
)
from rms.application.use_cases.menu_cache import MenuListingCache
from rms.infrastructure.db.repositories.analytics_repo import MongoAnalyticsRepository
from rms.infrastructure.db.repositories.menu_repo import MongoMenuRepository
from rms.infrastructure.db.repositories.order_repo import MongoOrderRepository


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_menu_listing_cache(request: Request) -> MenuListingCache:
    return request.app.state.menu_cache


def get_menu_repository(database: Database = Depends(get_database)) -> MenuRepository:
    return MongoMenuRepository(database)


def get_order_repository(database: Database = Depends(get_database)) -> OrderRepository:
    return MongoOrderRepository(database)


def get_analytics_repository(database: Database = Depends(get_database)) -> AnalyticsRepository:
    return MongoAnalyticsRepository(database)
