from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from bson import ObjectId
from pymongo.errors import PyMongoError

from rms.application.ports.repositories import InvalidIdentifierError, StoreError

logger = logging.getLogger(__name__)


def to_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise InvalidIdentifierError(f"invalid identifier: {value!r}")
    return ObjectId(value)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        logger.exception("store_operation_failed", extra={"operation": operation})
        raise StoreError(f"{operation} failed: {exc}") from exc
