"""Error Handlers - global exception handlers for the Expense Tracker API.

Invariants:
    - ExpenseTrackerError (< 500) -> structured JSON with error code, message, severity
    - CommandValidationError and RequestValidationError -> 400 with field-level details
    - ExpenseTrackerError (>= 500) and any other Exception -> problem+json
      {type, title, status, detail, traceId}, logged once with exc_info
    - Problem responses repeat traceId in X-Request-ID: they are rendered outside
      the trace-id middleware, which never sees them
    - Unexpected exceptions never leak internal details in `detail`

Design Decisions:
    - Three-layer handler: domain (ExpenseTrackerError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py: keeps the app module to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from expense_tracker.core.errors import ExpenseTrackerError, ErrorSeverity
from expense_tracker.infrastructure.observability import (
    TRACE_ID_HEADER, current_trace_id, new_trace_id,
)

logger = logging.getLogger(__name__)

PROBLEM_TYPE = "https://httpstatuses.com/500"
PROBLEM_TITLE = "An unexpected error occurred."
PROBLEM_MEDIA_TYPE = "application/problem+json"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register Expense Tracker domain/infrastructure error handler."""

    @app.exception_handler(ExpenseTrackerError)
    async def expense_tracker_error_handler(
        request: Request, exc: ExpenseTrackerError,
    ):
        if exc.http_status >= 500:
            logger.error(
                f"ExpenseTrackerError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
                exc_info=exc,
            )
            return build_problem_response(request, exc.message)
        logger.warning(
            f"ExpenseTrackerError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return build_problem_response(request, PROBLEM_TITLE)


def resolve_trace_id(request: Request) -> str:
    """Trace id bound by the middleware, else the request state, else a fresh one."""
    return (
        current_trace_id()
        or getattr(request.state, "trace_id", None)
        or new_trace_id()
    )


def build_problem_response(request: Request, detail: str) -> JSONResponse:
    """Uniform 500 body; the trace id goes in the body and the X-Request-ID header."""
    trace_id = resolve_trace_id(request)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "type": PROBLEM_TYPE,
            "title": PROBLEM_TITLE,
            "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": detail,
            "traceId": trace_id,
        },
        media_type=PROBLEM_MEDIA_TYPE,
        headers={TRACE_ID_HEADER: trace_id},
    )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
