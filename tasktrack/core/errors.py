"""Error Hierarchy — typed, categorized exceptions for all tasktrack failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All domain errors are 400-level and recoverable by the caller
    - A raised domain error guarantees the store was left in its prior state
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with TaskTrackError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Nothing here is retried — validation and guard failures are deterministic
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    current_status: str | None = None
    hint: str | None = None
    field_errors: dict[str, str] | None = None
    debug_info: dict[str, Any] | None = None


class TaskTrackError(Exception):
    """Base exception for all tasktrack errors."""

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
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "resource_type": self.context.resource_type,
                "resource_id": self.context.resource_id,
                "current_status": self.context.current_status,
                "hint": self.context.hint,
            },
        }
        if self.context.field_errors is not None:
            body["fields"] = dict(self.context.field_errors)
            body["details"] = [
                f"{name}: {msg}" for name, msg in self.context.field_errors.items()
            ]
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(TaskTrackError):
    """One or more fields failed validation. Nothing was written."""
    def __init__(
        self, field_errors: dict[str, str], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_errors = dict(field_errors)
        super().__init__(
            "Validation failed. Please check the errors below.",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_errors = dict(field_errors)


class ResourceNotFoundError(TaskTrackError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found with id: {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class LockedStateError(TaskTrackError):
    """Mutation attempted against a completed task."""
    def __init__(
        self, message: str, task_id: str, hint: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = "Task"
        ctx.resource_id = task_id
        ctx.current_status = "completed"
        ctx.hint = hint
        super().__init__(
            message, "TASK_LOCKED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 403,
        )


class IllegalTransitionError(TaskTrackError):
    """Reopen attempted on a task that is not completed."""
    def __init__(
        self, message: str, task_id: str, current_status: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = "Task"
        ctx.resource_id = task_id
        ctx.current_status = current_status
        super().__init__(
            message, "NOTHING_TO_REOPEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.current_status = current_status


class DuplicateConstraintError(TaskTrackError):
    """Uniqueness constraint violated on a secondary record (e.g. user email)."""
    def __init__(
        self, resource_type: str, field_name: str, message: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.field_errors = {field_name: message}
        super().__init__(
            message, "DUPLICATE_CONSTRAINT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.field_name = field_name
