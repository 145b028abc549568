from __future__ import annotations

import logging
import time
from uuid import uuid4

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from qrmenu.infrastructure.observability.context import request_scope

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID_LENGTH = 128

logger = logging.getLogger("qrmenu.api.access")

HTTP_REQUESTS_TOTAL = Counter(
    "qrmenu_http_requests_total",
    "HTTP requests by route template and status.",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "qrmenu_http_request_duration_seconds",
    "HTTP request latency by route template.",
    ["method", "route"],
)


def _request_id_for(request: Request) -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LENGTH:
        return candidate
    return uuid4().hex


def _route_template(request: Request) -> str:
    # Templates keep session ids out of metric labels.
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request id propagation plus one access log line and metric sample per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id_for(request)
        request.state.request_id = request_id
        started = time.perf_counter()

        with request_scope(request_id):
            try:
                response = await call_next(request)
            except Exception:
                self._observe(request, 500, started, failed=True)
                raise
            self._observe(request, response.status_code, started)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _observe(request: Request, status_code: int, started: float, failed: bool = False) -> None:
        route = _route_template(request)
        elapsed = time.perf_counter() - started
        HTTP_REQUESTS_TOTAL.labels(
            method=request.method,
            route=route,
            status_code=str(status_code),
        ).inc()
        HTTP_REQUEST_SECONDS.labels(method=request.method, route=route).observe(elapsed)

        extra = {
            "method": request.method,
            "path": route,
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 2),
        }
        if failed:
            logger.exception("request_error", extra=extra)
        else:
            logger.info("request_complete", extra=extra)
