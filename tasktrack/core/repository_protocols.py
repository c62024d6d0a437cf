"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Storage accessed through Protocol types, implementations injected by the
      composition root
    - Absence is a normal outcome: get/update return None, delete returns False

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Sync methods: storage is in-process; a durable backend must keep the same
      atomicity contract behind these signatures
"""

from datetime import datetime
from typing import Any, Protocol

from tasktrack.core.domain_types import TaskId, TaskPriority, TaskStatus, UserId
from tasktrack.core.task_record import Task
from tasktrack.core.user_record import User


class TaskRepository(Protocol):
    """Contract for task storage — implemented by shell."""
    def create(self, patch: dict[str, Any], now: datetime) -> Task: ...
    def get(self, task_id: TaskId) -> Task | None: ...
    def update(
        self, task_id: TaskId, patch: dict[str, Any], now: datetime,
    ) -> Task | None: ...
    def delete(self, task_id: TaskId) -> bool: ...
    def list_all(
        self,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]: ...
    def list_by_status(self, status: TaskStatus) -> list[Task]: ...
    def count(self) -> int: ...


class UserRepository(Protocol):
    """Contract for user storage — implemented by shell."""
    def create(self, patch: dict[str, Any], now: datetime) -> User: ...
    def get(self, user_id: UserId) -> User | None: ...
    def get_by_email(self, email: str) -> User | None: ...
    def update(
        self, user_id: UserId, patch: dict[str, Any], now: datetime,
    ) -> User | None: ...
    def delete(self, user_id: UserId) -> bool: ...
    def list_all(self) -> list[User]: ...
    def count(self) -> int: ...
