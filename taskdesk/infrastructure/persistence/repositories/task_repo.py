"""Task repository. Applies QuerySpec filters in SQL and guards status changes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.task import (
    TaskCounts,
    TaskCreate,
    TaskResult,
    TaskWithOwner,
)
from taskdesk.application.services.task_query import QuerySpec
from taskdesk.domain.entities.task import can_transition
from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import (
    InvalidTransitionException,
    ResourceNotFoundException,
)
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.models.task import Task
from taskdesk.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)
from taskdesk.shared.utils.datetime import ensure_utc

# Columns a QuerySpec may reference.
_FILTERABLE = {
    "user_id": Task.user_id,
    "status": Task.status,
    "priority": Task.priority,
    "created_at": Task.created_at,
    "due_date": Task.due_date,
}


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        user_id=t.user_id,
        title=t.title,
        status=TaskStatus(t.status),
        priority=TaskPriority(t.priority),
        created_at=ensure_utc(t.created_at),
        description=t.description,
        due_date=t.due_date,
        remarks=t.remarks,
        updated_at=ensure_utc(t.updated_at),
    )


def _column(name: str) -> Any:
    try:
        return _FILTERABLE[name]
    except KeyError as e:
        raise ValueError(f"Unsupported task filter column: {name}") from e


def apply_spec(stmt: Select, spec: QuerySpec, ordered: bool = True) -> Select:
    """Add the spec's WHERE clauses (and ORDER BY when ordered) to stmt."""
    for name, value in spec.equals:
        stmt = stmt.where(_column(name) == value)
    for rng in spec.ranges:
        column = _column(rng.column)
        stmt = stmt.where(column >= rng.lower, column <= rng.upper)
    if spec.department is not None:
        stmt = stmt.where(
            Task.user_id.in_(select(Profile.id).where(Profile.department == spec.department))
        )
    if ordered:
        column = _column(spec.order_by)
        stmt = stmt.order_by(column.desc() if spec.descending else column.asc(), Task.id)
    return stmt


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    @translate_db_errors("task.create")
    async def create(self, data: TaskCreate) -> TaskResult:
        task = Task(
            user_id=data.user_id,
            title=data.title,
            description=data.description,
            status=TaskStatus.PENDING.value,
            priority=TaskPriority(data.priority).value,
            due_date=data.due_date,
            remarks=data.remarks,
        )
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return _to_result(task)

    @translate_db_errors("task.get")
    async def get_by_id(self, task_id: str) -> TaskResult | None:
        task = await self._get(task_id)
        return _to_result(task) if task else None

    @translate_db_errors("task.list")
    async def list_tasks(
        self, spec: QuerySpec, limit: int | None = None, offset: int = 0
    ) -> list[TaskResult]:
        stmt = apply_spec(select(Task), spec)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [_to_result(t) for t in result.scalars().all()]

    @translate_db_errors("task.list_with_owner")
    async def list_with_owner(self, spec: QuerySpec) -> list[TaskWithOwner]:
        stmt = apply_spec(
            select(Task, Profile.first_name, Profile.department).outerjoin(
                Profile, Profile.id == Task.user_id
            ),
            spec,
        )
        result = await self.db.execute(stmt)
        return [
            TaskWithOwner(
                task=_to_result(task),
                owner_first_name=first_name,
                owner_department=department,
            )
            for task, first_name, department in result.all()
        ]

    @translate_db_errors("task.count")
    async def count(self, spec: QuerySpec) -> int:
        stmt = apply_spec(select(func.count(Task.id)), spec, ordered=False)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    @translate_db_errors("task.count_by_status")
    async def count_by_status(self, user_id: str | None = None) -> TaskCounts:
        stmt = select(Task.status, func.count(Task.id)).group_by(Task.status)
        if user_id is not None:
            stmt = stmt.where(Task.user_id == user_id)
        result = await self.db.execute(stmt)
        by_status = {status: int(n) for status, n in result.all()}
        return TaskCounts(
            total=sum(by_status.values()),
            pending=by_status.get(TaskStatus.PENDING.value, 0),
            in_progress=by_status.get(TaskStatus.IN_PROGRESS.value, 0),
            completed=by_status.get(TaskStatus.COMPLETED.value, 0),
        )

    @translate_db_errors("task.update_fields")
    async def update_fields(self, task_id: str, patch: dict[str, Any]) -> TaskResult:
        task = await self._get(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        for key, value in patch.items():
            setattr(task, key, getattr(value, "value", value))
        await self.db.flush()
        await self.db.refresh(task)
        return _to_result(task)

    @translate_db_errors("task.update_status")
    async def update_status(
        self, task_id: str, expected: TaskStatus, target: TaskStatus
    ) -> TaskResult:
        """Compare-and-set: only a row still in expected moves to target."""
        if not can_transition(expected, target):
            raise InvalidTransitionException(
                TaskStatus(expected).value, TaskStatus(target).value, task_id
            )
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.status == TaskStatus(expected).value)
            .values(status=TaskStatus(target).value, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            current = await self._get(task_id)
            if current is None:
                raise ResourceNotFoundException("task", task_id)
            raise InvalidTransitionException(
                current.status, TaskStatus(target).value, task_id
            )
        refreshed = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return _to_result(refreshed.scalar_one())

    @translate_db_errors("task.delete")
    async def delete(self, task_id: str) -> bool:
        result = await self.db.execute(
            delete(Task)
            .where(Task.id == task_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
