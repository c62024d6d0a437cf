"""Task Service — orchestrates validation, lifecycle guard and store per operation.

Invariants:
    - Mutation pipeline: validate_task_input → check_operation → store, in that order
    - Reads and every check-existence → guard → apply sequence run under one
      lock, so no operation observes or leaves a half-applied mutation
    - Any raised TaskTrackError means the store was not touched
    - Validation runs before the existence lookup: malformed input is rejected
      even for unknown ids
    - The clock is injected; validation and timestamps share one "now" per call

Design Decisions:
    - Pure core, imperative shell: core functions return descriptors, this
      class turns denials into typed errors for the global error handler
    - Global lock over per-record locks: modest scale, and a reopen racing a
      delete is impossible by construction
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from tasktrack.core.domain_types import (
    TaskId, TaskOperation, TaskPriority, TaskStatus, ValidationMode,
)
from tasktrack.core.enforce_lifecycle import check_operation
from tasktrack.core.errors import (
    IllegalTransitionError, LockedStateError, ResourceNotFoundError,
    ValidationFailedError,
)
from tasktrack.core.repository_protocols import TaskRepository
from tasktrack.core.task_record import Task
from tasktrack.core.validate_task import validate_task_input

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """Core task operations exposed to the HTTP boundary."""

    def __init__(self, store: TaskRepository, clock: Clock = utc_now):
        self._store = store
        self._clock = clock
        self._lock = threading.Lock()

    # ─── Reads ───────────────────────────────────────────────────

    def get_task(self, task_id: TaskId) -> Task:
        with self._lock:
            return self._require(task_id)

    def list_tasks(
        self,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]:
        with self._lock:
            return self._store.list_all(status=status, priority=priority)

    def count_tasks(self) -> int:
        with self._lock:
            return self._store.count()

    def tasks_by_status(self) -> dict[TaskStatus, list[Task]]:
        with self._lock:
            return {status: self._store.list_by_status(status) for status in TaskStatus}

    # ─── Mutations ───────────────────────────────────────────────

    def create_task(self, raw: Any) -> Task:
        now = self._clock()
        result = validate_task_input(raw, ValidationMode.CREATE, now)
        if not result.ok:
            logger.warning(
                f"Task creation rejected: {sorted(result.errors)}",
                extra={"error_code": "VALIDATION_ERROR"},
            )
            raise ValidationFailedError(result.errors)
        with self._lock:
            task = self._store.create(result.patch, now)
        logger.info(f"Task created: {task.id}", extra={"task_id": str(task.id)})
        return task

    def update_task(self, task_id: TaskId, raw: Any) -> Task:
        now = self._clock()
        result = validate_task_input(raw, ValidationMode.UPDATE, now)
        if not result.ok:
            logger.warning(
                f"Task update rejected: {sorted(result.errors)}",
                extra={"error_code": "VALIDATION_ERROR", "task_id": str(task_id)},
            )
            raise ValidationFailedError(result.errors)
        with self._lock:
            current = self._require(task_id)
            self._guard(current, TaskOperation.UPDATE)
            task = self._store.update(task_id, result.patch, now)
        logger.info(f"Task updated: {task_id}", extra={"task_id": str(task_id)})
        return task

    def delete_task(self, task_id: TaskId) -> bool:
        with self._lock:
            current = self._require(task_id)
            self._guard(current, TaskOperation.DELETE)
            deleted = self._store.delete(task_id)
        logger.info(f"Task deleted: {task_id}", extra={"task_id": str(task_id)})
        return deleted

    def reopen_task(self, task_id: TaskId) -> Task:
        with self._lock:
            current = self._require(task_id)
            transition = self._guard(current, TaskOperation.REOPEN)
            task = self._store.update(
                task_id, {"status": transition.next_status}, self._clock(),
            )
        logger.info(f"Task reopened: {task_id}", extra={"task_id": str(task_id)})
        return task

    # ─── Helpers ─────────────────────────────────────────────────

    def _require(self, task_id: TaskId) -> Task:
        task = self._store.get(task_id)
        if task is None:
            raise ResourceNotFoundError("Task", str(task_id))
        return task

    def _guard(self, task: Task, operation: TaskOperation):
        transition = check_operation(task, operation)
        if transition.allowed:
            return transition
        logger.warning(
            f"Lifecycle guard denied {operation.value} on task {task.id}",
            extra={"error_code": transition.error_code, "task_id": str(task.id)},
        )
        if operation == TaskOperation.REOPEN:
            raise IllegalTransitionError(
                transition.message, str(task.id), task.status.value,
            )
        raise LockedStateError(transition.message, str(task.id), transition.hint)
