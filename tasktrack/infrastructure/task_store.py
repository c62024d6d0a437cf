"""In-Memory Task Store — keyed collection of immutable Task records.

Invariants:
    - Keyed by TaskId; ids come from Task.create (uuid4), never from the caller
    - update is a pure merge: present fields overwrite, absent fields kept,
      updated_at always refreshed
    - Unknown ids return None / False — absence never raises
    - list_all filters before sorting (core/sort_tasks)

Design Decisions:
    - Dict over DB: records live for the process lifetime only
    - No locking here: TaskService serializes check → guard → apply sequences
    - Constructed by the composition root, no module-level instance
"""

from datetime import datetime
from typing import Any

from tasktrack.core.domain_types import TaskId, TaskPriority, TaskStatus
from tasktrack.core.sort_tasks import filter_tasks, group_by_status, sort_tasks
from tasktrack.core.task_record import Task


class InMemoryTaskStore:
    """Process-local TaskRepository implementation."""

    def __init__(self) -> None:
        self._tasks: dict[TaskId, Task] = {}

    def create(self, patch: dict[str, Any], now: datetime) -> Task:
        task = Task.create(patch, now)
        self._tasks[task.id] = task
        return task

    def get(self, task_id: TaskId) -> Task | None:
        return self._tasks.get(task_id)

    def update(
        self, task_id: TaskId, patch: dict[str, Any], now: datetime,
    ) -> Task | None:
        current = self._tasks.get(task_id)
        if current is None:
            return None
        updated = current.merge(patch, now)
        self._tasks[task_id] = updated
        return updated

    def delete(self, task_id: TaskId) -> bool:
        return self._tasks.pop(task_id, None) is not None

    def list_all(
        self,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> list[Task]:
        return sort_tasks(filter_tasks(self._tasks.values(), status, priority))

    def list_by_status(self, status: TaskStatus) -> list[Task]:
        return group_by_status(self._tasks.values())[status]

    def count(self) -> int:
        return len(self._tasks)
