from __future__ import annotations

import logging
import os

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

MENU_COLLECTION = "menu"
ORDERS_COLLECTION = "orders"

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_DATABASE = "restaurantDB"


def _mongodb_uri() -> str:
    return os.getenv("MONGODB_URI", DEFAULT_MONGODB_URI)


def _database_name() -> str:
    return os.getenv("MONGODB_DATABASE", DEFAULT_DATABASE)


def _timeout_ms() -> int:
    return int(os.getenv("MONGODB_TIMEOUT_MS", "2000"))


def create_client(uri: str | None = None, timeout_ms: int | None = None) -> MongoClient:
    timeout = timeout_ms if timeout_ms is not None else _timeout_ms()
    return MongoClient(
        uri or _mongodb_uri(),
        tz_aware=True,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
    )


def get_database(client: MongoClient, name: str | None = None) -> Database:
    return client[name or _database_name()]


def ensure_indexes(database: Database) -> None:
    menu = database[MENU_COLLECTION]
    menu.create_index([("name", ASCENDING)])
    menu.create_index([("category", ASCENDING)])
    menu.create_index([("tags", ASCENDING)])

    orders = database[ORDERS_COLLECTION]
    orders.create_index([("timestamp", DESCENDING)])
    orders.create_index([("status", ASCENDING)])
    logger.info("indexes_ensured", extra={"database": database.name})


def ping_database(client: MongoClient) -> bool:
    try:
        client.admin.command("ping")
        return True
    except PyMongoError:
        return False
