from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace

from qrmenu.infrastructure.observability.context import current_request_id

# Attributes passed through ``extra=`` that make it into the JSON line.
STRUCTURED_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "session_id",
    "table_number",
    "table_param",
    "max_tables",
    "order_id",
    "item_count",
    "category_count",
    "category_source",
    "evicted",
    "row_id",
)

_configured_level: str | None = None


def _span_ids() -> dict[str, str | None]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {"trace_id": None, "span_id": None}
    return {
        "trace_id": format(span_context.trace_id, "032x"),
        "span_id": format(span_context.span_id, "016x"),
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per line, correlated by request id and OTel span."""

    def __init__(self, fields: Iterable[str] = STRUCTURED_FIELDS) -> None:
        super().__init__()
        self._fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": current_request_id(),
            **_span_ids(),
        }
        payload.update(
            (field, getattr(record, field))
            for field in self._fields
            if getattr(record, field, None) is not None
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(level: str | None = None) -> None:
    """Install the JSON handler on the root logger.

    Repeated calls only adjust the level, so building several apps in one
    process does not stack handlers.
    """
    global _configured_level
    resolved = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root_logger = logging.getLogger()

    if _configured_level is None:
        root_logger.handlers.clear()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        root_logger.addHandler(handler)
        # Access lines come from the request middleware.
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    root_logger.setLevel(resolved)
    _configured_level = resolved
