"""Error Handlers - every failure leaves the API as the same error envelope.

Invariants:
    - Body shape is always {"error": {code, message, category, severity, ...}}
    - MediaTrackerError keeps its own http_status; 5xx logs at ERROR with the failed
      workflow step, 4xx at WARNING
    - Request validation failures answer 400 VALIDATION_ERROR, one detail per field,
      with the "body" location prefix dropped
    - Unexpected exceptions answer 500 INTERNAL_ERROR and never echo the exception
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from media_tracker.core.errors import (
    ErrorCategory, ErrorSeverity, MediaTrackerError, SaveUniquenessError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MediaTrackerError, handle_media_tracker_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_media_tracker_error(
    request: Request, exc: MediaTrackerError,
) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{exc.code} on {request.method} {request.url.path}: {exc}",
        extra=_error_log_fields(request, exc),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": _field_path(e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request to {request.url.path}: "
        f"{', '.join(d['field'] for d in details)}",
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _error_log_fields(request: Request, exc: MediaTrackerError) -> dict:
    fields = {
        "error_code": exc.code,
        "path": request.url.path,
        "user_id": request.path_params.get("user_id"),
        "category_id": request.path_params.get("category_id"),
    }
    debug_info = exc.context.debug_info or {}
    if "failed_step" in debug_info:
        fields["failed_step"] = debug_info["failed_step"]
        fields["completed_steps"] = debug_info.get("completed_steps", [])
    if isinstance(exc, SaveUniquenessError):
        fields["duplicate_ids"] = [str(i) for i in exc.duplicate_ids]
    return fields


def _field_path(loc) -> str:
    parts = [str(part) for part in loc]
    if len(parts) > 1 and parts[0] == "body":
        parts = parts[1:]
    return ".".join(parts)


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details=None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}
