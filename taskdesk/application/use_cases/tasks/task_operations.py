"""Task operations: create, read, list, advance status, edit, delete."""

from __future__ import annotations

import logging
from datetime import UTC, date, tzinfo
from typing import TYPE_CHECKING, Any

from taskdesk.application.dtos.session import Caller
from taskdesk.application.dtos.task import (
    DeletionTicket,
    TaskCreate,
    TaskResult,
    TaskWithOwner,
)
from taskdesk.application.services.task_query import BaseScope, FilterPredicates, compose
from taskdesk.domain.entities.task import TaskEntity, validate_patch, validate_title
from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from taskdesk.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import IProfileRepository, ITaskRepository
    from taskdesk.application.interfaces.services import IConfirmationTokens

logger = logging.getLogger(__name__)


def to_entity(task: TaskResult) -> TaskEntity:
    return TaskEntity(
        id=task.id,
        user_id=task.user_id,
        title=task.title,
        status=task.status,
        priority=task.priority,
        created_at=task.created_at,
        description=task.description,
        due_date=task.due_date,
        remarks=task.remarks,
    )


class TaskService:
    """Task use cases for one caller. Owners and admins may mutate a task."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        confirmations: IConfirmationTokens | None = None,
        profile_repo: IProfileRepository | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.confirmations = confirmations
        self.profile_repo = profile_repo

    async def _require_user(self, user_id: str) -> None:
        if self.profile_repo is None:
            raise RuntimeError("TaskService has no profile repository")
        if await self.profile_repo.get_by_id(user_id) is None:
            raise ResourceNotFoundException("user", user_id)

    @traced("task.create")
    async def create_task(
        self,
        caller: Caller,
        title: str,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        description: str | None = None,
        due_date: date | None = None,
        remarks: str | None = None,
        user_id: str | None = None,
    ) -> TaskResult:
        """Create a pending task owned by the caller.

        Admins may pass user_id to create on behalf of another user; an
        unknown user_id is ResourceNotFoundException, checked before the insert.
        """
        if user_id and user_id != caller.user_id and not caller.is_admin:
            raise AuthorizationException(resource="task", action="create for another user")
        owner = user_id or caller.user_id
        fields = validate_patch(
            {
                "title": title,
                "priority": priority,
                "description": description,
                "due_date": due_date,
                "remarks": remarks,
            }
        )
        if owner != caller.user_id:
            await self._require_user(owner)
        task = await self.task_repo.create(
            TaskCreate(
                user_id=owner,
                title=validate_title(title),
                priority=fields["priority"],
                description=description,
                due_date=due_date,
                remarks=remarks,
            )
        )
        logger.info("Task %s created for user %s", task.id, task.user_id)
        return task

    async def get_task(self, caller: Caller, task_id: str) -> TaskResult:
        """Return the task if caller owns it or is an admin; otherwise NotFound."""
        task = await self.task_repo.get_by_id(task_id)
        if task is None or not (caller.is_admin or task.user_id == caller.user_id):
            raise ResourceNotFoundException("task", task_id)
        return task

    async def list_tasks(
        self,
        caller: Caller,
        predicates: FilterPredicates | None = None,
        view_all: bool = False,
        tz: tzinfo = UTC,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[TaskResult]:
        """Return the caller's tasks (or everyone's, for an admin asking for all)."""
        scope = BaseScope.for_caller(caller.user_id, caller.is_admin, view_all)
        spec = compose(predicates or FilterPredicates(), scope, tz=tz)
        return await self.task_repo.list_tasks(spec, limit=limit, offset=offset)

    async def list_tasks_with_owner(
        self,
        caller: Caller,
        predicates: FilterPredicates | None = None,
        tz: tzinfo = UTC,
    ) -> list[TaskWithOwner]:
        """Admin listing across users, joined with owner name and department."""
        if not caller.is_admin:
            raise AuthorizationException(resource="task", action="list all users")
        spec = compose(predicates or FilterPredicates(), BaseScope.all_users(caller.user_id), tz=tz)
        return await self.task_repo.list_with_owner(spec)

    @traced("task.advance_status")
    async def advance_status(
        self, caller: Caller, task_id: str, target: TaskStatus | str
    ) -> TaskResult:
        """Move the task one step forward.

        The step is validated before anything is written; the repository
        re-checks it with a compare-and-set so a concurrent change cannot
        slip a second transition through.
        """
        task = await self.get_task(caller, task_id)
        entity = to_entity(task)
        previous = entity.advance_status(target)
        updated = await self.task_repo.update_status(
            task_id, expected=previous, target=entity.status
        )
        logger.info(
            "Task %s advanced %s -> %s", task_id, previous.value, entity.status.value
        )
        return updated

    @traced("task.update_fields")
    async def update_fields(
        self, caller: Caller, task_id: str, patch: dict[str, Any]
    ) -> TaskResult:
        """Edit title, description, priority, due_date or remarks."""
        task = await self.get_task(caller, task_id)
        normalized = to_entity(task).apply_patch(patch)
        if not normalized:
            return task
        return await self.task_repo.update_fields(task_id, normalized)

    async def request_deletion(self, caller: Caller, task_id: str) -> DeletionTicket:
        """Issue the confirmation token that delete_task requires."""
        await self.get_task(caller, task_id)
        if self.confirmations is None:
            raise RuntimeError("TaskService has no confirmation token issuer")
        return self.confirmations.issue(task_id, caller.user_id)

    @traced("task.delete")
    async def delete_task(self, caller: Caller, task_id: str, confirmation: str | None) -> None:
        """Delete the task permanently once the confirmation token checks out."""
        await self.get_task(caller, task_id)
        if not confirmation:
            raise ValidationException(
                "Deletion must be confirmed; request a confirmation token first",
                field="confirmation",
            )
        if self.confirmations is None:
            raise RuntimeError("TaskService has no confirmation token issuer")
        self.confirmations.verify(confirmation, task_id, caller.user_id)
        if not await self.task_repo.delete(task_id):
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task %s deleted by user %s", task_id, caller.user_id)
