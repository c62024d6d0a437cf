"""List/Sort Policy — tests for the deterministic task ordering.

Tests cover:
    - dated before undated, earlier due first
    - undated ordered by priority rank, missing priority ranks as medium
    - createdAt descending tie-break, id as final tie-break
    - order independent of input order
    - filter and group_by_status
"""

import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from tasktrack.core.domain_types import TaskPriority, TaskStatus
from tasktrack.core.sort_tasks import filter_tasks, group_by_status, sort_tasks
from tasktrack.core.task_record import Task


def _task(title, now, **fields) -> Task:
    return Task.create({"title": title, **fields}, now)


def test_documented_order(now):
    a = _task("A", now, due_date=datetime(2026, 1, 1, tzinfo=timezone.utc))
    b = _task("B", now, due_date=datetime(2026, 1, 5, tzinfo=timezone.utc))
    c = _task("C", now, priority=TaskPriority.HIGH)
    d = _task("D", now, priority=TaskPriority.LOW)
    assert [t.title for t in sort_tasks([d, c, b, a])] == ["A", "B", "C", "D"]


def test_dated_task_beats_high_priority_undated(now):
    dated_low = _task("dated", now, priority=TaskPriority.LOW, due_date=now + timedelta(days=30))
    undated_high = _task("undated", now, priority=TaskPriority.HIGH)
    assert sort_tasks([undated_high, dated_low])[0].title == "dated"


def test_priority_rank_for_undated(now):
    low = _task("low", now, priority=TaskPriority.LOW)
    medium = _task("medium", now, priority=TaskPriority.MEDIUM)
    high = _task("high", now, priority=TaskPriority.HIGH)
    assert [t.title for t in sort_tasks([low, medium, high])] == ["high", "medium", "low"]


def test_missing_priority_ranks_as_medium(now):
    none = replace(_task("none", now), priority=None, created_at=now - timedelta(hours=1))
    medium = _task("medium", now, priority=TaskPriority.MEDIUM)
    low = _task("low", now, priority=TaskPriority.LOW)
    # medium ties with none on rank; newer createdAt first
    assert [t.title for t in sort_tasks([low, none, medium])] == ["medium", "none", "low"]


def test_newest_first_within_same_priority(now):
    old = _task("old", now - timedelta(days=2))
    new = _task("new", now)
    assert [t.title for t in sort_tasks([old, new])] == ["new", "old"]


def test_order_is_independent_of_input_order(now):
    tasks = [_task(f"T{i}", now) for i in range(10)]
    tasks += [_task(f"D{i}", now, due_date=now + timedelta(days=i % 3)) for i in range(6)]
    expected = sort_tasks(tasks)
    for seed in range(5):
        shuffled = tasks[:]
        random.Random(seed).shuffle(shuffled)
        assert sort_tasks(shuffled) == expected


def test_filter_by_status_and_priority(now):
    tasks = [
        _task("p-high", now, status=TaskStatus.PENDING, priority=TaskPriority.HIGH),
        _task("p-low", now, status=TaskStatus.PENDING, priority=TaskPriority.LOW),
        _task("c-high", now, status=TaskStatus.COMPLETED, priority=TaskPriority.HIGH),
    ]
    assert {t.title for t in filter_tasks(tasks, status=TaskStatus.PENDING)} == {"p-high", "p-low"}
    assert {t.title for t in filter_tasks(tasks, priority=TaskPriority.HIGH)} == {"p-high", "c-high"}
    assert [t.title for t in filter_tasks(tasks, TaskStatus.PENDING, TaskPriority.HIGH)] == ["p-high"]
    assert len(filter_tasks(tasks)) == 3


def test_group_by_status_has_every_status(now):
    groups = group_by_status([_task("only", now, status=TaskStatus.IN_PROGRESS)])
    assert set(groups) == set(TaskStatus)
    assert groups[TaskStatus.PENDING] == []
    assert [t.title for t in groups[TaskStatus.IN_PROGRESS]] == ["only"]


def test_group_by_status_sorts_each_group(now):
    late = _task("late", now, due_date=now + timedelta(days=5))
    soon = _task("soon", now, due_date=now + timedelta(days=1))
    groups = group_by_status([late, soon])
    assert [t.title for t in groups[TaskStatus.PENDING]] == ["soon", "late"]
