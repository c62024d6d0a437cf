"""Task Schemas — wire representation of Task records.

Invariants:
    - Keys are camelCase on the wire (dueDate, createdAt, updatedAt)
    - Timestamps serialize as ISO-8601 strings
    - Request bodies are NOT modelled here: they reach the core as raw maps so the
      validation engine can report unknown fields and every violation at once
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tasktrack.core.task_record import Task


class TaskResponse(BaseModel):
    """Task response — public-facing task data."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    description: str | None = None
    status: str
    priority: str | None = None
    due_date: datetime | None = Field(None, alias="dueDate")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            priority=task.priority.value if task.priority else None,
            due_date=task.due_date,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


def serialize_task(task: Task) -> dict:
    return TaskResponse.from_task(task).model_dump(by_alias=True, mode="json")


def serialize_tasks(tasks: list[Task]) -> list[dict]:
    return [serialize_task(t) for t in tasks]
