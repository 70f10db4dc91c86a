"""Task API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from taskdesk.domain.enums import TaskPriority, TaskStatus


class TaskCreateRequest(BaseModel):
    """Request body for creating a task. Status always starts at pending."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: date | None = None
    remarks: str | None = Field(default=None, max_length=1000)
    user_id: str | None = Field(
        default=None, description="Owner (admins only; defaults to the caller)"
    )


class TaskUpdateRequest(BaseModel):
    """Partial edit. Status, owner and creation time cannot be set here.

    status is accepted only so that sending it yields a clear 400 from the
    domain instead of being silently dropped.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: date | None = None
    remarks: str | None = Field(default=None, max_length=1000)
    status: TaskStatus | None = None


class TaskStatusRequest(BaseModel):
    """Request body for advancing a task to its next status."""

    status: TaskStatus


class TaskDeleteRequest(BaseModel):
    confirmation: str = Field(..., min_length=1)


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: date | None = None
    remarks: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class TaskWithOwnerResponse(BaseModel):
    """Admin listing row: task plus owner name and department."""

    model_config = ConfigDict(from_attributes=True)

    task: TaskResponse
    owner_first_name: str | None = None
    owner_department: str | None = None


class TaskCountsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    pending: int
    in_progress: int
    completed: int


class DashboardResponse(BaseModel):
    counts: TaskCountsResponse
    latest: list[TaskResponse]
    total: int
    has_more: bool
    announcement: str | None = None


class DeletionTicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_id: str
    token: str
    expires_at: datetime
