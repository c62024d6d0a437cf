"""Error Handlers — global exception handlers for the tasktrack API.

Invariants:
    - TaskTrackError → structured JSON with error code, message, severity
    - RequestValidationError → same envelope, with a {field: message} map
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (TaskTrackError), validation (Pydantic), catch-all
    - Pydantic locations are reduced to the client-facing field name
      (("body", "email") → "email", ("path", "task_id") → "task_id")
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from tasktrack.core.errors import TaskTrackError, ErrorSeverity, ErrorCategory

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TaskTrackError)
    async def tasktrack_error_handler(request: Request, exc: TaskTrackError):
        """Handle all tasktrack domain errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"TaskTrackError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def field_name_from_loc(loc: tuple | list) -> str:
    """Reduce a pydantic error location to the field the client sent."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:] or parts
    return ".".join(parts)


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    fields: dict[str, str] = {}
    for e in exc.errors():
        fields.setdefault(field_name_from_loc(e["loc"]), e["msg"])
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Validation failed. Please check the errors below.",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "fields": fields,
            "details": [f"{name}: {msg}" for name, msg in fields.items()],
        },
    }
