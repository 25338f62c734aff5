from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator
from uuid import uuid4

import pytest
from pymongo.database import Database
from pymongo.errors import PyMongoError

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from rms.infrastructure.db.client import (
    MENU_COLLECTION,
    ORDERS_COLLECTION,
    create_client,
    ensure_indexes,
    get_database,
)

MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")


@pytest.fixture(scope="session")
def database_name() -> str:
    return f"rms_test_{uuid4().hex[:8]}"


@pytest.fixture(scope="session")
def database(database_name: str) -> Iterator[Database]:
    client = create_client(MONGODB_URI, timeout_ms=500)
    try:
        client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"MongoDB is not reachable at {MONGODB_URI}")

    os.environ["MONGODB_URI"] = MONGODB_URI
    os.environ["MONGODB_DATABASE"] = database_name
    os.environ.pop("REDIS_URL", None)
    os.environ.setdefault("OTEL_SERVICE_NAME", "rms-api-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    db = get_database(client, database_name)
    ensure_indexes(db)
    yield db
    client.drop_database(database_name)
    client.close()


@pytest.fixture(autouse=True)
def clean_collections(database: Database) -> Iterator[None]:
    database[MENU_COLLECTION].delete_many({})
    database[ORDERS_COLLECTION].delete_many({})
    yield
