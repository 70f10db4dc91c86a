"""Task API: thin routes delegating to TaskService.

Non-admin callers only ever see their own tasks; a task that is not
visible to the caller reads as 404.
"""

from dataclasses import asdict
from datetime import tzinfo
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from taskdesk.api.v1.dependencies import (
    get_caller,
    get_task_reader,
    get_task_writer,
    get_timezone,
)
from taskdesk.application.dtos.session import Caller
from taskdesk.application.services.task_query import FilterPredicates
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.core.limiter import limit_writes
from taskdesk.schemas.task import (
    DeletionTicketResponse,
    TaskCreateRequest,
    TaskDeleteRequest,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_reader)],
    tz: Annotated[tzinfo, Depends(get_timezone)],
    date: Annotated[str | None, Query(description="YYYY-MM-DD in the caller's zone, or 'all'")] = None,
    priority: Annotated[str | None, Query(description="high, medium, low or 'all'")] = None,
    status: Annotated[str | None, Query(description="pending, in-progress, completed or 'all'")] = None,
    user_id: Annotated[str | None, Query(description="Admins with view_all only")] = None,
    department: Annotated[str | None, Query(description="Admins with view_all only")] = None,
    view_all: bool = False,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List tasks, newest first, filtered by day, priority and status."""
    predicates = FilterPredicates.from_params(
        day=date,
        priority=priority,
        status=status,
        user_id=user_id,
        department=department,
    )
    tasks = await task_svc.list_tasks(
        caller, predicates, view_all=view_all, tz=tz, limit=limit, offset=offset
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_writer)],
):
    """Create a pending task (admins may assign it to another user)."""
    task = await task_svc.create_task(
        caller,
        title=body.title,
        priority=body.priority,
        description=body.description,
        due_date=body.due_date,
        remarks=body.remarks,
        user_id=body.user_id,
    )
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_reader)],
):
    task = await task_svc.get_task(caller, task_id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_writer)],
):
    """Edit task fields. Status changes go through POST /{task_id}/status."""
    task = await task_svc.update_fields(caller, task_id, body.model_dump(exclude_unset=True))
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def advance_status(
    request: Request,
    task_id: str,
    body: TaskStatusRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_writer)],
):
    """Advance pending -> in-progress -> completed; anything else is 409."""
    task = await task_svc.advance_status(caller, task_id, body.status)
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/delete-confirmation", response_model=DeletionTicketResponse)
@limit_writes
async def request_deletion(
    request: Request,
    task_id: str,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_reader)],
):
    """Issue the short-lived token that DELETE /{task_id} requires."""
    ticket = await task_svc.request_deletion(caller, task_id)
    return DeletionTicketResponse(**asdict(ticket))


@router.delete("/{task_id}", status_code=204)
@limit_writes
async def delete_task(
    request: Request,
    task_id: str,
    body: TaskDeleteRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    task_svc: Annotated[TaskService, Depends(get_task_writer)],
) -> Response:
    """Delete the task permanently (confirmation token required)."""
    await task_svc.delete_task(caller, task_id, body.confirmation)
    return Response(status_code=204)
