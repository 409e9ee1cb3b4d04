"""Application errors and the handlers that render them as the error envelope."""

import traceback
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.keylight.core.config import get_settings
from src.keylight.core.logging import get_logger
from src.keylight.models.base import utc_now

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.error
        super().__init__(self.message)


class ValidationError(AppError):
    """Input violated one or more rules. ``details`` lists every violation."""

    status_code = 400
    error = "Validation error"

    def __init__(self, message: str = "Validation failed", details: list[str] | None = None):
        super().__init__(message)
        self.details = details or []


class NotFoundError(AppError):
    status_code = 404
    error = "Not found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class DuplicateError(AppError):
    status_code = 409
    error = "Duplicate entry"


class UnauthorizedError(AppError):
    status_code = 401
    error = "Unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class StoreError(AppError):
    """Wraps any failure raised while talking to the relational store.

    Attributes:
        code: SQLSTATE of the underlying failure when one is known.
        original: The driver or SQLAlchemy exception that was wrapped.
    """

    status_code = 500
    error = "Database error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        original: BaseException | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.original = original


class StoreUnavailableError(StoreError):
    """Store could not be reached, or no pooled connection freed up in time."""

    status_code = 503
    error = "Service unavailable"


# SQLSTATE -> (status, category message)
STORE_ERROR_RESPONSES: dict[str, tuple[int, str]] = {
    "23505": (409, "Duplicate entry"),
    "23503": (400, "Referenced record not found"),
    "23502": (400, "Required field missing"),
    "42P01": (500, "Database table not found"),
}


def classify_store_error(exc: StoreError) -> tuple[int, str]:
    """Map a store error to the status code and category shown to clients."""
    if exc.code in STORE_ERROR_RESPONSES:
        return STORE_ERROR_RESPONSES[exc.code]
    return exc.status_code, exc.error


def error_envelope(request: Request, error: str, message: str, **extra: Any) -> dict[str, Any]:
    """Build the standard error body."""
    body: dict[str, Any] = {
        "error": error,
        "message": message,
        "timestamp": utc_now().isoformat() + "Z",
        "path": request.url.path,
        "method": request.method,
        "request_id": correlation_id.get(),
    }
    body.update(extra)
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the error envelope."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, exc.error, exc.message, details=exc.details),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        status_code, category = classify_store_error(exc)
        logger.error(
            "Store error",
            code=exc.code,
            status_code=status_code,
            error=exc.message,
        )
        message = exc.message if get_settings().is_development else category
        return JSONResponse(
            status_code=status_code,
            content=error_envelope(request, category, message),
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, exc.error, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            details.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
        return JSONResponse(
            status_code=400,
            content=error_envelope(request, "Validation error", "Invalid request", details=details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            error, message = "Route not found", f"No route for {request.method} {request.url.path}"
        else:
            error, message = str(exc.detail), str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(request, error, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception", exc_info=exc)
        if get_settings().is_development:
            content = error_envelope(
                request,
                "Internal server error",
                str(exc),
                stack=traceback.format_exception(exc),
            )
        else:
            content = error_envelope(request, "Internal server error", "Something went wrong")
        return JSONResponse(status_code=500, content=content)
