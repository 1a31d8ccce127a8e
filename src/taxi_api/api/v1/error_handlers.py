"""
FastAPI exception handlers: every error leaves the API in the same envelope.

    {
      "timestamp": "2025-01-01T12:00:00.000000+00:00",
      "status": 409,
      "error": "Conflict",
      "message": "Passenger with email 'ana@example.com' already exists.",
      "validationErrors": {"email": "..."}      # only for 400 validation failures
    }

`translate_exception` decides status and message; the handlers only log and render.
Status codes come from the exception classes (RepositoryError.http_status()).
5xx responses never carry the exception text.
"""
import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taxi_api.exceptions.base import RepositoryError, IntegrityViolationError

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Request validation failed."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

# First loc element FastAPI adds to say where the value came from
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Error"


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    """Map each failing field (wire name, e.g. licenseNumber) to its message(s)."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if len(loc) > 1 and loc[0] in _LOC_SOURCES:
            loc = loc[1:]
        field = ".".join(loc) or "request"
        message = error.get("msg", "Invalid value")
        errors[field] = f"{errors[field]}; {message}" if field in errors else message
    return errors


def translate_exception(exc: Exception) -> tuple[int, str, dict[str, str] | None]:
    """
    Pure mapping: exception -> (status, client-safe message, validation errors or None).
    """
    if isinstance(exc, RequestValidationError):
        return 400, VALIDATION_FAILED_MESSAGE, _field_errors(exc)

    if isinstance(exc, RepositoryError):
        status = exc.http_status()
        if status >= 500:
            return status, INTERNAL_ERROR_MESSAGE, None
        return status, exc.message, None

    if isinstance(exc, IntegrityError):
        return 409, IntegrityViolationError().message, None

    if isinstance(exc, StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else _reason_phrase(exc.status_code)
        return exc.status_code, message, None

    return 500, INTERNAL_ERROR_MESSAGE, None


def build_error_body(status: int, message: str, validation_errors: dict[str, str] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": status,
        "error": _reason_phrase(status),
        "message": message,
    }
    if validation_errors:
        body["validationErrors"] = validation_errors
    return body


async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    status, message, validation_errors = translate_exception(exc)

    if status >= 500:
        logger.error(
            "Unhandled error for %s %s", request.method, request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        # Expected client errors: no stack trace
        logger.info(
            "%s for %s %s -> %s", type(exc).__name__, request.method, request.url.path, status,
            extra={"fields": getattr(exc, "fields", None) or (list(validation_errors) if validation_errors else None)},
        )

    headers = getattr(exc, "headers", None) if isinstance(exc, StarletteHTTPException) else None
    return JSONResponse(
        status_code=status,
        content=build_error_body(status, message, validation_errors),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Call from the app factory."""
    app.add_exception_handler(RequestValidationError, api_exception_handler)
    app.add_exception_handler(RepositoryError, api_exception_handler)
    app.add_exception_handler(IntegrityError, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, api_exception_handler)
    app.add_exception_handler(Exception, api_exception_handler)
