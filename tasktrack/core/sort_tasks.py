"""List/Sort Policy — deterministic ordering, filtering and grouping of tasks.

Invariants:
    - Total order: dated before undated, earlier dueDate first, then priority rank
      (high < medium < low, missing = medium), then newest createdAt first,
      then id — never storage iteration order
    - Filters are equality-only and applied before sorting
    - group_by_status always returns all three statuses, each group sorted
"""

from collections.abc import Iterable

from tasktrack.core.domain_types import (
    DEFAULT_PRIORITY, PRIORITY_RANK, TaskPriority, TaskStatus,
)
from tasktrack.core.task_record import Task


def task_sort_key(task: Task) -> tuple:
    """Sort key implementing the list ordering rules."""
    tie_break = (-task.created_at.timestamp(), str(task.id))
    if task.due_date is not None:
        return (0, task.due_date.timestamp(), 0) + tie_break
    rank = PRIORITY_RANK[task.priority or DEFAULT_PRIORITY]
    return (1, 0.0, rank) + tie_break


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=task_sort_key)


def filter_tasks(
    tasks: Iterable[Task],
    status: TaskStatus | None = None,
    priority: TaskPriority | None = None,
) -> list[Task]:
    return [
        t for t in tasks
        if (status is None or t.status == status)
        and (priority is None or t.priority == priority)
    ]


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    groups: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        groups[task.status].append(task)
    return {status: sort_tasks(group) for status, group in groups.items()}
