"""Task Record — immutable value type for a single task.

Invariants:
    - Task is frozen: updates produce a new Task, never mutate in place
    - created_at is set once; updated_at advances on every successful mutation
    - All timestamps are timezone-aware UTC
    - id is assigned by the store at creation, never by the caller

Design Decisions:
    - Frozen dataclass over dict: field typos fail loudly, equality is structural
    - merge() is pure: the store decides when to call it and what "now" is
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any
from uuid import uuid4

from tasktrack.core.domain_types import (
    TaskId, TaskStatus, TaskPriority, DEFAULT_STATUS, DEFAULT_PRIORITY,
)


PATCHABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "status", "priority", "due_date"},
)


@dataclass(frozen=True)
class Task:
    """A single task record."""
    id: TaskId
    title: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    priority: TaskPriority | None = DEFAULT_PRIORITY
    due_date: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @classmethod
    def create(cls, patch: dict[str, Any], now: datetime) -> "Task":
        """Build a fresh task from a validated create patch."""
        return cls(
            id=TaskId(uuid4()),
            title=patch["title"],
            description=patch.get("description"),
            status=patch.get("status") or DEFAULT_STATUS,
            priority=patch.get("priority") or DEFAULT_PRIORITY,
            due_date=patch.get("due_date"),
            created_at=now,
            updated_at=now,
        )

    def merge(self, patch: dict[str, Any], now: datetime) -> "Task":
        """Overwrite the fields present in patch, keep the rest, bump updated_at."""
        changes = {k: v for k, v in patch.items() if k in PATCHABLE_FIELDS}
        return replace(self, **changes, updated_at=now)
