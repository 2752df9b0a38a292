"""Centralized exception handlers for the FastAPI app.

Every error leaves the API in one envelope:
{"error": CODE, "message": str, "details": ...}. Register with
register_exception_handlers(app).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from cuisine.core.config import get_settings
from cuisine.domain.exceptions import CuisineException
from cuisine.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

# error_code -> HTTP status; unlisted codes are client errors (400).
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_CURSOR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "RETRIEVAL_FAILED": 503,
}


def _envelope(
    status_code: int,
    error: str,
    message: Any,
    details: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _cuisine_exception_handler(request: Request, exc: CuisineException) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.details)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 listing each invalid parameter as {"field", "message"}."""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "query"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return _envelope(422, "VALIDATION_ERROR", "Request validation failed", details)


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 in the common envelope; clients back off for the limit window."""
    logger.info("Rate limit hit on %s: %s", request.url.path, exc.detail)
    return _envelope(
        429,
        "RATE_LIMITED",
        f"Too many requests: {exc.detail}",
        headers={"Retry-After": "60"},
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _envelope(exc.status_code, "HTTP_ERROR", exc.detail, headers=exc.headers)


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is only exposed in debug, the trace id always."""
    trace_id = get_trace_id()
    logger.exception("Unhandled exception on %s (trace %s): %s", request.url.path, trace_id, exc)
    message = str(exc) if get_settings().debug else "Internal server error"
    details = {"trace_id": trace_id} if trace_id else None
    return _envelope(500, "INTERNAL_ERROR", message, details)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app.
    """
    app.add_exception_handler(CuisineException, _cuisine_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
