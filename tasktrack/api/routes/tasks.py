"""Task Routes — HTTP boundary for the task lifecycle core.

Invariants:
    - Handlers own no business rules: they parse, call TaskService, serialize
    - Request bodies pass to the core as raw JSON so unknown fields are reported
    - Path ids must be UUIDs (FastAPI rejects others with 400 via error handler)
    - /stats/* registered before /{task_id}

Design Decisions:
    - Domain failures propagate as TaskTrackError to the global handler
      (400 validation, 403 locked, 404 not found, 400 nothing to reopen)
"""

import logging
from enum import Enum
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query, status

from tasktrack.api.dependencies import get_task_service
from tasktrack.core.domain_types import TaskId, TaskPriority, TaskStatus
from tasktrack.core.errors import ValidationFailedError
from tasktrack.schemas.task import serialize_task, serialize_tasks
from tasktrack.services.task_service import TaskService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _parse_filter(value: str | None, choices: type[Enum], name: str):
    if value is None or not value.strip():
        return None
    normalized = value.strip().lower()
    allowed = [member.value for member in choices]
    if normalized not in allowed:
        raise ValidationFailedError(
            {name: f"{name.capitalize()} must be one of: {', '.join(allowed)}"},
        )
    return choices(normalized)


@router.get("/stats/count")
async def count_tasks(service: TaskService = Depends(get_task_service)):
    """Total number of tasks."""
    return {"success": True, "count": service.count_tasks()}


@router.get("/stats/status")
async def tasks_by_status(service: TaskService = Depends(get_task_service)):
    """Tasks grouped by status, each group in list order."""
    groups = service.tasks_by_status()
    keys = {
        TaskStatus.PENDING: "pending",
        TaskStatus.IN_PROGRESS: "inProgress",
        TaskStatus.COMPLETED: "completed",
    }
    return {
        "success": True,
        "data": {
            keys[s]: {"count": len(tasks), "tasks": serialize_tasks(tasks)}
            for s, tasks in groups.items()
        },
    }


@router.get("")
async def list_tasks(
    status_filter: str | None = Query(None, alias="status"),
    priority_filter: str | None = Query(None, alias="priority"),
    service: TaskService = Depends(get_task_service),
):
    """List tasks, optionally filtered by status and/or priority."""
    tasks = service.list_tasks(
        status=_parse_filter(status_filter, TaskStatus, "status"),
        priority=_parse_filter(priority_filter, TaskPriority, "priority"),
    )
    return {"success": True, "count": len(tasks), "data": serialize_tasks(tasks)}


@router.get("/{task_id}")
async def get_task(
    task_id: UUID, service: TaskService = Depends(get_task_service),
):
    return {"success": True, "data": serialize_task(service.get_task(TaskId(task_id)))}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
):
    task = service.create_task(payload)
    return {
        "success": True,
        "message": "Task created successfully",
        "data": serialize_task(task),
    }


@router.put("/{task_id}")
async def update_task(
    task_id: UUID,
    payload: Any = Body(None),
    service: TaskService = Depends(get_task_service),
):
    task = service.update_task(TaskId(task_id), payload)
    return {
        "success": True,
        "message": "Task updated successfully",
        "data": serialize_task(task),
    }


@router.delete("/{task_id}")
async def delete_task(
    task_id: UUID, service: TaskService = Depends(get_task_service),
):
    service.delete_task(TaskId(task_id))
    return {"success": True, "message": "Task deleted successfully"}


@router.post("/{task_id}/reopen")
async def reopen_task(
    task_id: UUID, service: TaskService = Depends(get_task_service),
):
    """Move a completed task back to in-progress so it can be edited."""
    task = service.reopen_task(TaskId(task_id))
    return {
        "success": True,
        "message": "Task reopened successfully. You can now edit this task.",
        "data": serialize_task(task),
    }
