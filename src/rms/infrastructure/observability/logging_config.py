from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from opentelemetry import trace

from rms.api.middleware.request_id import get_request_id

_LOGGING_CONFIGURED = False

# structured fields callers pass through ``extra=``
_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "operation",
    "database",
    "order_id",
    "from_status",
    "to_status",
    "total_amount",
    "computed_total",
    "error",
)

# driver and transport loggers that drown application output below WARNING
_CHATTY_LOGGERS = ("pymongo", "httpx", "httpcore")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def _span_ids() -> dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, correlated with the request and active span."""

    def __init__(self, service_name: str | None = None) -> None:
        super().__init__()
        self.service_name = service_name or os.getenv("OTEL_SERVICE_NAME", "rms-api")

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id
        payload.update(_span_ids())

        payload.update(
            {
                key: getattr(record, key)
                for key in _EXTRA_FIELDS
                if getattr(record, key, None) is not None
            }
        )

        if record.exc_info:
            payload["exception_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging(
    level: str | None = None,
    stream: TextIO | None = None,
    log_format: str | None = None,
) -> None:
    """Install a single root handler.

    ``LOG_FORMAT=text`` switches to a human readable line format; the API
    defaults to JSON. Later calls are ignored.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    resolved_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved_format = (log_format or os.getenv("LOG_FORMAT", "json")).lower()

    handler = logging.StreamHandler(stream or sys.stdout)
    if resolved_format == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)

    if resolved_level != "DEBUG":
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
