"""Error body utilities and global exception handlers.

Every failure leaves the API as `{"error": "<message>"}`. This module is the
single place that maps domain errors to HTTP statuses.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workwithme.logic.errors import (
    AuthError,
    CatalogError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[CatalogError], int] = {
    ValidationError: 400,
    AuthError: 401,
    NotFoundError: 404,
    ConflictError: 409,
}

GENERIC_INTERNAL_MESSAGE = "Internal server error"
BASIC_CHALLENGE = {"WWW-Authenticate": 'Basic realm="Backoffice Administration"'}


def error_response(message: str, status_code: int, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


def status_for(exc: CatalogError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    status_code = status_for(exc)
    headers = BASIC_CHALLENGE if isinstance(exc, AuthError) else None
    logger.info(
        "domain_error path=%s status=%s type=%s message=%s",
        request.url.path,
        status_code,
        type(exc).__name__,
        exc.message,
    )
    return error_response(exc.message, status_code, headers)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail: Any = getattr(exc, "detail", None)
    message = detail if isinstance(detail, str) and detail else "Request failed"
    headers = dict(exc.headers) if getattr(exc, "headers", None) else None
    return error_response(message, int(exc.status_code), headers)


def _describe_validation_errors(errors: list[dict]) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid request: malformed JSON body"
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = str(first.get("msg", "invalid value"))
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    message = _describe_validation_errors(errors)
    logger.info("request_validation_failed path=%s errors=%s", request.url.path, len(errors))
    return error_response(message, 400)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error path=%s method=%s", request.url.path, request.method, exc_info=exc)
    return error_response(GENERIC_INTERNAL_MESSAGE, 500)


__all__ = [
    "ERROR_STATUS",
    "GENERIC_INTERNAL_MESSAGE",
    "error_response",
    "status_for",
    "handle_catalog_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
