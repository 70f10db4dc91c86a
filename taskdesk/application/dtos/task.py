"""DTOs for tasks (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import date, datetime

from taskdesk.domain.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskResult:
    """Task read-model returned by repositories and use cases."""

    id: str
    user_id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    description: str | None = None
    due_date: date | None = None
    remarks: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TaskCreate:
    """Fields for a new task. Status is always pending on creation."""

    user_id: str
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    description: str | None = None
    due_date: date | None = None
    remarks: str | None = None


@dataclass(frozen=True)
class TaskWithOwner:
    """Task joined with its owner's profile (admin listings and reports)."""

    task: TaskResult
    owner_first_name: str | None = None
    owner_department: str | None = None


@dataclass(frozen=True)
class TaskCounts:
    """Task totals by status."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


@dataclass(frozen=True)
class DashboardResult:
    """Counts, latest tasks and the visible announcement for one user."""

    counts: TaskCounts
    latest: list[TaskResult] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    announcement: str | None = None


@dataclass(frozen=True)
class DeletionTicket:
    """Short-lived confirmation token that must accompany a delete call."""

    task_id: str
    token: str
    expires_at: datetime
