"""Task Validation Engine — sanitizes raw input and collects every field violation.

Invariants:
    - validate_task_input is PURE: no IO, never raises for bad input
    - Fail-complete: every violated field is reported, one message per field
    - Unknown fields are hard failures, reported under their own name
    - JSON null is treated as "field not provided"
    - "now" is injected by the caller — the engine never reads the clock itself

Design Decisions:
    - Pydantic models hold the per-field rules; field order matters because the
      dueDate check reads the already-validated priority from info.data
    - Cross-field "high priority needs a dueDate" is checked on the raw input so it
      still fires when unrelated fields fail (pydantic skips model validators then)
    - Tagged result over exceptions: the service decides how to surface failures
"""

import html
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta, timezone
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator,
)
from pydantic_core import PydanticCustomError

from tasktrack.core.domain_types import TaskPriority, TaskStatus, ValidationMode


ALLOWED_FIELDS: tuple[str, ...] = (
    "title", "description", "status", "priority", "dueDate",
)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
HIGH_PRIORITY_WINDOW_DAYS = 7
MAX_DUE_DATE_YEARS = 5

TITLE_PATTERN = re.compile(r"[a-zA-Z0-9\s\-_,.!?()]+")
_WHITESPACE_RUN = re.compile(r"\s+")

MSG_TITLE_REQUIRED = "Title is required and cannot be empty"
MSG_EMPTY_UPDATE = (
    "At least one field must be provided for update. "
    f"Allowed fields: {', '.join(ALLOWED_FIELDS)}"
)
MSG_DUE_INVALID = (
    "Due date must be a valid ISO 8601 date format (e.g., 2026-12-31T10:00:00Z)"
)
MSG_DUE_PAST = "Due date cannot be in the past. Please select a future date."
MSG_DUE_TOO_FAR = (
    f"Due date cannot be more than {MAX_DUE_DATE_YEARS} years in the future."
)
MSG_HIGH_PRIORITY_TOO_FAR = (
    "High priority tasks must have a due date within "
    f"{HIGH_PRIORITY_WINDOW_DAYS} days from today."
)
MSG_HIGH_PRIORITY_DUE_REQUIRED = (
    "Due date is required for high priority tasks and must be within "
    f"{HIGH_PRIORITY_WINDOW_DAYS} days."
)


def unexpected_field_message(name: str) -> str:
    return (
        f"Unexpected field '{name}'. "
        f"Allowed fields are: {', '.join(ALLOWED_FIELDS)}"
    )


# ─── Due date window ────────────────────────────────────────────

@dataclass(frozen=True)
class DueDateWindow:
    """Acceptable dueDate bounds relative to a validation instant."""
    earliest: datetime
    latest: datetime
    high_priority_latest: datetime


def due_date_window(now: datetime) -> DueDateWindow:
    """Start of today, five years out, and the end of the 7th day (all UTC)."""
    now = _as_utc(now)
    start_of_today = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
    last_urgent_day = (now + timedelta(days=HIGH_PRIORITY_WINDOW_DAYS)).date()
    return DueDateWindow(
        earliest=start_of_today,
        latest=_add_years(now, MAX_DUE_DATE_YEARS),
        high_priority_latest=datetime.combine(
            last_urgent_day, time.max, tzinfo=timezone.utc,
        ),
    )


def parse_due_date(value: Any) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime. Naive input is UTC."""
    if not isinstance(value, (datetime, str)):
        raise PydanticCustomError("due_date_format", MSG_DUE_INVALID)
    try:
        parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value.strip())
        return _as_utc(parsed)
    except (ValueError, OverflowError):
        # offsets near year 1 or 9999 overflow on conversion to UTC
        raise PydanticCustomError("due_date_format", MSG_DUE_INVALID)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _add_years(value: datetime, years: int) -> datetime:
    try:
        return value.replace(year=value.year + years)
    except ValueError:  # Feb 29 -> Feb 28
        return value.replace(year=value.year + years, day=28)


# ─── Field rules ────────────────────────────────────────────────

def _require_str(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", f"{label} must be a string")
    return value


def _normalize_choice(value: Any, choices: type[Enum], label: str) -> str:
    allowed = [member.value for member in choices]
    normalized = value.strip().lower() if isinstance(value, str) else value
    if normalized not in allowed:
        raise PydanticCustomError(
            "invalid_choice", f"{label} must be one of: {', '.join(allowed)}",
        )
    return normalized


class TaskFields(BaseModel):
    """Update-mode rule set: every field optional."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = Field(None, alias="dueDate")

    @field_validator("title", mode="before")
    @classmethod
    def sanitize_title(cls, v: Any) -> str:
        v = html.escape(_require_str(v, "Title").strip())
        if not v:
            raise PydanticCustomError("title_empty", MSG_TITLE_REQUIRED)
        if not TITLE_MIN_LENGTH <= len(v) <= TITLE_MAX_LENGTH:
            raise PydanticCustomError(
                "title_length",
                f"Title must be between {TITLE_MIN_LENGTH} and "
                f"{TITLE_MAX_LENGTH} characters",
            )
        if not TITLE_PATTERN.fullmatch(v):
            raise PydanticCustomError(
                "title_charset",
                "Title can only contain letters, numbers, spaces, and basic "
                "punctuation (- _ , . ! ? ( ))",
            )
        return _WHITESPACE_RUN.sub(" ", v)

    @field_validator("description", mode="before")
    @classmethod
    def sanitize_description(cls, v: Any) -> str:
        v = html.escape(_require_str(v, "Description").strip())
        if len(v) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description_length",
                f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
            )
        return _WHITESPACE_RUN.sub(" ", v).strip()

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> str:
        return _normalize_choice(v, TaskStatus, "Status")

    @field_validator("priority", mode="before")
    @classmethod
    def normalize_priority(cls, v: Any) -> str:
        return _normalize_choice(v, TaskPriority, "Priority")

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due(cls, v: Any) -> datetime:
        return parse_due_date(v)

    @field_validator("due_date")
    @classmethod
    def check_due_window(
        cls, v: datetime | None, info: ValidationInfo,
    ) -> datetime | None:
        if v is None:
            return v
        now = (info.context or {}).get("now") or datetime.now(timezone.utc)
        window = due_date_window(now)
        if v < window.earliest:
            raise PydanticCustomError("due_date_past", MSG_DUE_PAST)
        if v > window.latest:
            raise PydanticCustomError("due_date_too_far", MSG_DUE_TOO_FAR)
        if (
            info.data.get("priority") == TaskPriority.HIGH
            and v > window.high_priority_latest
        ):
            raise PydanticCustomError(
                "high_priority_due_date", MSG_HIGH_PRIORITY_TOO_FAR,
            )
        return v


class TaskCreateFields(TaskFields):
    """Create-mode rule set: title is required."""
    title: str


_RULE_SETS: dict[ValidationMode, type[TaskFields]] = {
    ValidationMode.CREATE: TaskCreateFields,
    ValidationMode.UPDATE: TaskFields,
}

_MISSING_MESSAGES: dict[str, str] = {"title": MSG_TITLE_REQUIRED}


# ─── Engine ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TaskValidationResult:
    """Either a sanitized patch (keyed by Task attribute) or a field-error set."""
    patch: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_task_input(
    raw: Any, mode: ValidationMode, now: datetime,
) -> TaskValidationResult:
    """Run the create or update rule set over an untyped field map. Pure."""
    if not isinstance(raw, Mapping):
        return TaskValidationResult(
            errors={"body": "Request body must be a JSON object"},
        )

    errors: dict[str, str] = {}
    for name in raw:
        if name not in ALLOWED_FIELDS:
            errors[str(name)] = unexpected_field_message(str(name))

    provided = {
        k: v for k, v in raw.items() if k in ALLOWED_FIELDS and v is not None
    }
    if mode == ValidationMode.UPDATE and not provided:
        errors.setdefault("body", MSG_EMPTY_UPDATE)

    patch: dict[str, Any] = {}
    try:
        fields = _RULE_SETS[mode].model_validate(provided, context={"now": now})
        patch = fields.model_dump(exclude_unset=True)
    except ValidationError as exc:
        for name, message in collect_field_errors(exc, _MISSING_MESSAGES).items():
            errors.setdefault(name, message)

    _check_high_priority_has_due_date(provided, errors)

    if errors:
        return TaskValidationResult(errors=errors)
    return TaskValidationResult(patch=patch)


def collect_field_errors(
    exc: ValidationError, missing_messages: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Fold a pydantic ValidationError into {field: first message}."""
    missing_messages = missing_messages or {}
    errors: dict[str, str] = {}
    for err in exc.errors():
        name = str(err["loc"][0]) if err["loc"] else "body"
        message = err["msg"]
        if err["type"] == "missing":
            message = missing_messages.get(name, f"{name} is required")
        errors.setdefault(name, message)
    return errors


def _check_high_priority_has_due_date(
    provided: Mapping[str, Any], errors: dict[str, str],
) -> None:
    priority = provided.get("priority")
    if not isinstance(priority, str):
        return
    if priority.strip().lower() == TaskPriority.HIGH.value and "dueDate" not in provided:
        errors.setdefault("dueDate", MSG_HIGH_PRIORITY_DUE_REQUIRED)
