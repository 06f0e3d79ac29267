"""Error Hierarchy - typed, categorized exceptions for every media tracker failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries free-form details (often the wrapped lower-level error)
    - with_details() returns a new error of the same kind, the original is never mutated
    - to_response() produces the REST envelope

Design Decisions:
    - Single hierarchy with MediaTrackerError base: the FastAPI global handler catches all
    - Controllers pass a pre-built error describing the business intent ("Category does not
      exist for given user"); store failures only ever travel as details of such an error
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable
from datetime import datetime, timezone
from uuid import UUID


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: UUID | None = None
    category_id: UUID | None = None
    debug_info: dict[str, Any] | None = None


class MediaTrackerError(Exception):
    """Base exception for all media tracker errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: Any = None,
    ):
        super().__init__(
            f"{message}: {details}" if details is not None else message,
        )
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details

    def with_details(self, details: Any) -> "MediaTrackerError":
        """Copy of this error with new details."""
        return type(self)(details, context=replace(self.context))

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": (
                    str(self.details) if self.details is not None else None
                ),
                "context": {
                    "user_id": _str_or_none(self.context.user_id),
                    "category_id": _str_or_none(self.context.category_id),
                },
            }
        }


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


# ─── Store and Precondition Errors ──────────────────────────────

class FindError(MediaTrackerError):
    """Store read failed, or a find-one matched more than one record."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "Database find query returned an error",
            "FIND_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 500, details,
        )


class SaveError(MediaTrackerError):
    """Store write failed, an update targeted a missing record, or a precondition failed."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "Database save query returned an error",
            "SAVE_ERROR", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400, details,
        )


class SaveUniquenessError(MediaTrackerError):
    """A uniqueness check found records with the same values."""
    def __init__(
        self,
        details: Any = None,
        context: ErrorContext | None = None,
        duplicate_ids: Iterable[UUID] = (),
    ):
        self.duplicate_ids = list(duplicate_ids)
        super().__init__(
            "Cannot save element because one or more field values are already present",
            "SAVE_UNIQUENESS_ERROR", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
            details if details is not None else _format_duplicates(self.duplicate_ids),
        )

    def with_details(self, details: Any) -> "SaveUniquenessError":
        return SaveUniquenessError(
            details, replace(self.context), self.duplicate_ids,
        )


def _format_duplicates(duplicate_ids: list[UUID]) -> str | None:
    if not duplicate_ids:
        return None
    return "Duplicates: " + ", ".join(str(i) for i in duplicate_ids)


class DeleteError(MediaTrackerError):
    """Store delete failed or targeted a missing record."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "Database delete query returned an error",
            "DELETE_ERROR", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400, details,
        )


class DeleteNotEmptyError(MediaTrackerError):
    """A non-forced delete was refused because dependents exist."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "The entity that is being deleted contains sub-items",
            "DELETE_NOT_EMPTY", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409, details,
        )


class GenericError(MediaTrackerError):
    """Programmer or contract error, never a normal user-facing outcome."""
    def __init__(self, details: Any = None, context: ErrorContext | None = None):
        super().__init__(
            "Generic application error",
            "GENERIC", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500, details,
        )


class ResourceNotFoundError(MediaTrackerError):
    """Requested resource does not exist (HTTP layer)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id

    def with_details(self, details: Any) -> "ResourceNotFoundError":
        error = ResourceNotFoundError(
            self.resource_type, self.resource_id, replace(self.context),
        )
        error.details = details
        return error


# ─── Infrastructure Errors ──────────────────────────────────────

class DatabaseError(MediaTrackerError):
    """Database session operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.reason = message
        self.operation = operation

    def with_details(self, details: Any) -> "DatabaseError":
        error = DatabaseError(self.reason, self.operation, replace(self.context))
        error.details = details
        return error
