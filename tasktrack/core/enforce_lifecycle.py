"""Lifecycle Guard — explicit state × operation table for task mutations.

Invariants:
    - check_operation is PURE and stateless: it reads the record it is given,
      keeps no transition history
    - COMPLETED tasks are locked: update and delete are denied
    - REOPEN is the only way out of COMPLETED and always lands on IN_PROGRESS
    - REOPEN on a non-completed task is denied and names the current state
    - Every other (state, operation) pair is allowed; entry into COMPLETED
      through an ordinary update is unrestricted

Design Decisions:
    - One table over scattered `if status == completed` checks: the rules live in
      a single place and the test-suite walks every cell of it
    - Returns a Transition descriptor (not an exception): the service shell maps
      denials to LockedStateError / IllegalTransitionError
"""

from dataclasses import dataclass
from itertools import product

from tasktrack.core.domain_types import TaskOperation, TaskStatus
from tasktrack.core.task_record import Task


@dataclass(frozen=True)
class Transition:
    """Outcome of a guard check for one (state, operation) cell."""
    allowed: bool
    next_status: TaskStatus | None = None
    error_code: str | None = None
    message: str | None = None
    hint: str | None = None


_ALLOW = Transition(allowed=True)

LOCKED_UPDATE = Transition(
    allowed=False,
    error_code="TASK_LOCKED",
    message=(
        "Cannot update a completed task. "
        "Completed tasks are locked and cannot be modified."
    ),
    hint="Reopen the task first; a reopened task can be edited again.",
)

LOCKED_DELETE = Transition(
    allowed=False,
    error_code="TASK_LOCKED",
    message=(
        "Cannot delete a completed task. "
        "Completed tasks are archived and cannot be removed."
    ),
    hint="Completed tasks are kept for record-keeping purposes. Reopen it to delete.",
)

REOPEN = Transition(allowed=True, next_status=TaskStatus.IN_PROGRESS)


def _nothing_to_reopen(status: TaskStatus) -> Transition:
    return Transition(
        allowed=False,
        error_code="NOTHING_TO_REOPEN",
        message=(
            "Only completed tasks can be reopened. "
            f"Current status: {status.value}."
        ),
    )


LIFECYCLE_TABLE: dict[tuple[TaskStatus, TaskOperation], Transition] = {
    (status, operation): _ALLOW
    for status, operation in product(TaskStatus, TaskOperation)
}
LIFECYCLE_TABLE.update({
    (TaskStatus.COMPLETED, TaskOperation.UPDATE): LOCKED_UPDATE,
    (TaskStatus.COMPLETED, TaskOperation.DELETE): LOCKED_DELETE,
    (TaskStatus.COMPLETED, TaskOperation.REOPEN): REOPEN,
    (TaskStatus.PENDING, TaskOperation.REOPEN): _nothing_to_reopen(TaskStatus.PENDING),
    (TaskStatus.IN_PROGRESS, TaskOperation.REOPEN): _nothing_to_reopen(
        TaskStatus.IN_PROGRESS,
    ),
})


def check_transition(status: TaskStatus, operation: TaskOperation) -> Transition:
    """Look up the table cell for a status and an operation."""
    return LIFECYCLE_TABLE[(status, operation)]


def check_operation(task: Task, operation: TaskOperation) -> Transition:
    """Guard a mutation against the task's current status. Pure."""
    return check_transition(task.status, operation)
