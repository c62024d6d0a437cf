"""Task Record — creation defaults and merge semantics."""

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from tasktrack.core.domain_types import TaskPriority, TaskStatus
from tasktrack.core.task_record import Task


def test_create_applies_defaults(now):
    task = Task.create({"title": "New task"}, now)
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM
    assert task.description is None
    assert task.due_date is None
    assert task.created_at == task.updated_at == now


def test_create_assigns_fresh_ids(now):
    ids = {Task.create({"title": "Same"}, now).id for _ in range(50)}
    assert len(ids) == 50


def test_merge_overwrites_present_fields_only(now):
    task = Task.create({"title": "Original", "description": "keep me"}, now)
    later = now + timedelta(minutes=5)
    merged = task.merge({"title": "Renamed"}, later)
    assert merged.title == "Renamed"
    assert merged.description == "keep me"
    assert merged.id == task.id
    assert merged.created_at == now
    assert merged.updated_at == later


def test_merge_ignores_identity_and_timestamps(now):
    task = Task.create({"title": "Original"}, now)
    merged = task.merge({"id": "other", "created_at": None}, now + timedelta(seconds=1))
    assert merged.id == task.id
    assert merged.created_at == now


def test_task_is_immutable(now):
    task = Task.create({"title": "Frozen"}, now)
    with pytest.raises(FrozenInstanceError):
        task.title = "changed"


def test_is_completed(now):
    assert Task.create({"title": "Done", "status": TaskStatus.COMPLETED}, now).is_completed
    assert not Task.create({"title": "Open"}, now).is_completed
