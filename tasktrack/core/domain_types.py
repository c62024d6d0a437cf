"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId, UserId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - PRIORITY_RANK is the single source of truth for priority ordering

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states. COMPLETED is locked until reopened."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority. HIGH requires a due date within the urgency window."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskOperation(str, Enum):
    """Mutating operations gated by the lifecycle guard."""
    UPDATE = "update"
    DELETE = "delete"
    REOPEN = "reopen"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    CUSTOMER = "customer"


class ValidationMode(str, Enum):
    """Rule set selector for the task validation engine."""
    CREATE = "create"
    UPDATE = "update"


# ─── Defaults & Ordering ─────────────────────────────────────────

DEFAULT_STATUS = TaskStatus.PENDING
DEFAULT_PRIORITY = TaskPriority.MEDIUM
DEFAULT_ROLE = UserRole.CUSTOMER

PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}
