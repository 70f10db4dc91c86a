"""Task domain entity and its status machine.

Represents the business concept of a task, independent of persistence.
Status only ever advances one step forward; generic edits never touch status,
owner or creation time.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import InvalidTransitionException, ValidationException

# current status → the only status it may advance to
ALLOWED_TRANSITIONS: dict[TaskStatus, TaskStatus] = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
}

EDITABLE_FIELDS = frozenset({"title", "description", "priority", "due_date", "remarks"})

TITLE_MAX_LENGTH = 500
REMARKS_MAX_LENGTH = 1000


def can_transition(current: TaskStatus | str, target: TaskStatus | str) -> bool:
    """Return True if target is the single legal forward step from current."""
    try:
        current_status = TaskStatus(current)
        target_status = TaskStatus(target)
    except ValueError:
        return False
    return ALLOWED_TRANSITIONS.get(current_status) is target_status


def ensure_transition(
    current: TaskStatus | str,
    target: TaskStatus | str,
    task_id: str | None = None,
) -> TaskStatus:
    """Return target as TaskStatus, or raise InvalidTransitionException."""
    if not can_transition(current, target):
        raise InvalidTransitionException(
            current=str(getattr(current, "value", current)),
            target=str(getattr(target, "value", target)),
            task_id=task_id,
        )
    return TaskStatus(target)


def next_status(current: TaskStatus | str) -> TaskStatus | None:
    """Return the status a task in current can advance to, or None if final."""
    return ALLOWED_TRANSITIONS.get(TaskStatus(current))


def validate_title(title: str | None) -> str:
    """Return the stripped title; raise ValidationException if blank or too long."""
    if title is None or not title.strip():
        raise ValidationException("Task title is required", field="title")
    stripped = title.strip()
    if len(stripped) > TITLE_MAX_LENGTH:
        raise ValidationException(
            f"Task title must not exceed {TITLE_MAX_LENGTH} characters", field="title"
        )
    return stripped


def validate_patch(patch: dict[str, Any]) -> dict[str, Any]:
    """Validate a generic field patch and return the normalized copy.

    Only title, description, priority, due_date and remarks may change here.
    Status changes go through advance_status; user_id and created_at never change.
    """
    if "status" in patch:
        raise ValidationException(
            "Status cannot be edited directly; advance the task instead",
            field="status",
        )
    unknown = sorted(set(patch) - EDITABLE_FIELDS)
    if unknown:
        raise ValidationException(
            f"Field(s) not editable: {', '.join(unknown)}", field=unknown[0]
        )
    normalized = dict(patch)
    if "title" in normalized:
        normalized["title"] = validate_title(normalized["title"])
    if "priority" in normalized:
        try:
            normalized["priority"] = TaskPriority(normalized["priority"])
        except ValueError as e:
            raise ValidationException(str(e), field="priority") from e
    remarks = normalized.get("remarks")
    if remarks is not None and len(remarks) > REMARKS_MAX_LENGTH:
        raise ValidationException(
            f"Remarks must not exceed {REMARKS_MAX_LENGTH} characters", field="remarks"
        )
    return normalized


@dataclass
class TaskEntity:
    """Domain entity for a task (business rules separate from persistence).

    Validation runs on construction.
    """

    id: str
    user_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    description: str | None = None
    due_date: date | None = None
    remarks: str | None = None

    def __post_init__(self) -> None:
        self.status = TaskStatus(self.status)
        self.priority = TaskPriority(self.priority)
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        if not self.user_id:
            raise ValidationException("Task must belong to a user", field="user_id")
        self.title = validate_title(self.title)

    def advance_status(self, target: TaskStatus | str) -> TaskStatus:
        """Move to target if it is the next step; status is unchanged on failure.

        Returns:
            The status the task was in before advancing.

        Raises:
            InvalidTransitionException: target is not the next step.
        """
        new_status = ensure_transition(self.status, target, task_id=self.id)
        previous = self.status
        self.status = new_status
        return previous

    def apply_patch(self, patch: dict[str, Any]) -> dict[str, Any]:
        """Apply an editable-field patch in place and return the normalized patch."""
        normalized = validate_patch(patch)
        for key, value in normalized.items():
            setattr(self, key, value)
        return normalized
