"""Admin API: every user's tasks, the global summary, users and departments.

All routes require an Admin profile; the role is re-read on every request.
"""

from datetime import tzinfo
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from taskdesk.api.v1.dependencies import (
    get_admin_caller,
    get_dashboard_service,
    get_task_reader,
    get_timezone,
)
from taskdesk.application.dtos.session import Caller
from taskdesk.application.services.task_query import FilterPredicates
from taskdesk.application.use_cases.dashboard import DashboardService
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.schemas.profile import UserListItemResponse
from taskdesk.schemas.task import TaskCountsResponse, TaskWithOwnerResponse

router = APIRouter()


@router.get("/tasks", response_model=list[TaskWithOwnerResponse])
async def list_users_tasks(
    caller: Annotated[Caller, Depends(get_admin_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_reader)],
    tz: Annotated[tzinfo, Depends(get_timezone)],
    date: str | None = None,
    priority: str | None = None,
    status: str | None = None,
    user_id: str | None = None,
    department: str | None = None,
):
    """Tasks across all users with owner name and department."""
    predicates = FilterPredicates.from_params(
        day=date,
        priority=priority,
        status=status,
        user_id=user_id,
        department=department,
    )
    items = await task_svc.list_tasks_with_owner(caller, predicates, tz=tz)
    return [TaskWithOwnerResponse.model_validate(item) for item in items]


@router.get("/task-summary", response_model=TaskCountsResponse)
async def task_summary(
    _: Annotated[Caller, Depends(get_admin_caller)],
    dashboard_svc: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Counts by status across all users."""
    counts = await dashboard_svc.get_task_summary()
    return TaskCountsResponse.model_validate(counts)


@router.get("/users", response_model=list[UserListItemResponse])
async def list_users(
    _: Annotated[Caller, Depends(get_admin_caller)],
    dashboard_svc: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    users = await dashboard_svc.list_users()
    return [UserListItemResponse.model_validate(u) for u in users]


@router.get("/departments", response_model=list[str])
async def list_departments(
    _: Annotated[Caller, Depends(get_admin_caller)],
    dashboard_svc: Annotated[DashboardService, Depends(get_dashboard_service)],
    limit: Annotated[int | None, Query(ge=1)] = None,
):
    departments = await dashboard_svc.list_departments()
    return departments[:limit] if limit else departments
