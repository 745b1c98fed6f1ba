"""Error Hierarchy - typed, categorized exceptions for every Expense Tracker failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ExpenseTrackerError base: one FastAPI handler catches all
    - Not-found is raised only by the route layer when rendering a Failure result;
      handlers themselves never raise it
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldFailure:
    """One violated field rule."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class ErrorContext:
    """When the error was raised; rendered as the envelope timestamp."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ExpenseTrackerError(Exception):
    """Base exception for all Expense Tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CommandValidationError(ExpenseTrackerError):
    """One or more field rules rejected a request before its handler ran."""
    def __init__(
        self,
        failures: list[FieldFailure],
        request_type: str = "",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{request_type or 'Request'} failed validation "
            f"({len(failures)} error(s))",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.failures = list(failures)
        self.request_type = request_type

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [f.to_dict() for f in self.failures]
        return response


class RouteMismatchError(ExpenseTrackerError):
    """Body id conflicts with the id bound from the route."""
    def __init__(self, route_id: str, body_id: str, context: ErrorContext | None = None):
        super().__init__(
            "Route expense_id does not match body id.",
            "ROUTE_ID_MISMATCH", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.route_id = route_id
        self.body_id = body_id

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [FieldFailure(
            "id", f"Body id {self.body_id} does not match route id {self.route_id}.",
        ).to_dict()]
        return response


class ResourceNotFoundError(ExpenseTrackerError):
    """Requested resource does not exist (or belongs to another owner)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message,
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UnknownRequestError(ExpenseTrackerError):
    """Dispatch received a request type with no registered handler."""
    def __init__(self, request_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"No handler registered for {request_type}",
            "UNKNOWN_REQUEST", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.request_type = request_type


class DatabaseError(ExpenseTrackerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
