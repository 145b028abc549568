from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from qrmenu.application.session.registry import SessionNotFoundError
from qrmenu.application.session.state import SubmissionInProgressError
from qrmenu.application.use_cases.submit_order import (
    EmptyCartError,
    InvalidTableNumberError,
    MissingTableNumberError,
    SubmissionFailedError,
)
from qrmenu.infrastructure.observability.context import current_request_id

# Application failures surfaced to the menu page, with their HTTP status and code.
ERROR_STATUS: dict[type[Exception], tuple[int, str]] = {
    SessionNotFoundError: (404, "SESSION_NOT_FOUND"),
    EmptyCartError: (400, "EMPTY_CART"),
    MissingTableNumberError: (400, "MISSING_TABLE_NUMBER"),
    InvalidTableNumberError: (400, "INVALID_TABLE_NUMBER"),
    SubmissionInProgressError: (409, "SUBMISSION_IN_PROGRESS"),
    SubmissionFailedError: (502, "SUBMISSION_FAILED"),
}

_HTTP_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "error": {"code": code, "message": message, "details": details or {}},
        "requestId": current_request_id(),
    }


async def _application_error_handler(_: Request, exc: Exception) -> JSONResponse:
    status_code, code = next(
        ERROR_STATUS[cls] for cls in type(exc).__mro__ if cls in ERROR_STATUS
    )
    details = getattr(exc, "details", None)
    return JSONResponse(
        status_code=status_code,
        content=error_body(code, str(exc), details if isinstance(details, dict) else None),
    )


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content=error_body(
            _HTTP_CODES.get(http_exc.status_code, "HTTP_ERROR"),
            str(http_exc.detail) if http_exc.detail else "request failed",
        ),
        headers=getattr(http_exc, "headers", None),
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    errors = cast(RequestValidationError, exc).errors()
    return JSONResponse(
        status_code=400,
        content=error_body(
            "INVALID_REQUEST",
            "request validation failed",
            {
                "fields": [
                    {
                        "location": ".".join(str(part) for part in error.get("loc", ())),
                        "message": error.get("msg", ""),
                    }
                    for error in errors
                ]
            },
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    for exc_cls in ERROR_STATUS:
        app.add_exception_handler(exc_cls, _application_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
