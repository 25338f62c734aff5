from __future__ import annotations

import logging
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rms.api.middleware.request_id import get_request_id
from rms.application.ports.repositories import StoreError
from rms.application.use_cases.errors import (
    InvalidMenuItemIdError,
    InvalidMenuQueryError,
    InvalidOrderIdError,
    InvalidOrderStatusError,
    InvalidOrderTransitionError,
    InvalidReportParameterError,
    MenuItemNotFoundError,
    MenuItemValidationError,
    OrderConflictError,
    OrderNotFoundError,
    OrderValidationError,
)

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "Error accessing the data store"


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {
        "message": message,
        "error": code,
        "requestId": get_request_id(),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _store_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        status_code=500,
        code="STORE_ERROR",
        message=STORE_ERROR_MESSAGE,
        details={"reason": str(exc)},
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 405:
        code = "METHOD_NOT_ALLOWED"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


def _without_input(errors: Any) -> list[dict[str, Any]]:
    # rejected inputs may be NaN or Infinity, which JSON responses cannot carry
    return [{key: value for key, value in error.items() if key != "input"} for error in errors]


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": jsonable_encoder(_without_input(validation_exc.errors()))},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(
        "unhandled_exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={"method": request.method, "path": request.url.path},
    )
    return PlainTextResponse("Something broke!", status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (MenuItemValidationError, 400, "MENU_ITEM_INVALID"),
        (InvalidMenuItemIdError, 400, "INVALID_MENU_ITEM_ID"),
        (InvalidMenuQueryError, 400, "INVALID_MENU_QUERY"),
        (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
        (OrderValidationError, 400, "ORDER_INVALID"),
        (InvalidOrderIdError, 400, "INVALID_ORDER_ID"),
        (InvalidOrderStatusError, 400, "INVALID_ORDER_STATUS"),
        (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
        (InvalidOrderTransitionError, 409, "INVALID_ORDER_TRANSITION"),
        (OrderConflictError, 409, "CONFLICT"),
        (InvalidReportParameterError, 400, "INVALID_REPORT_PARAMETER"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StoreError, _store_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
