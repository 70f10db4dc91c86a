"""TaskService with in-memory repositories."""

from datetime import date

import pytest

from taskdesk.application.dtos.session import Caller
from taskdesk.application.services.task_query import FilterPredicates
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.domain.enums import TaskPriority, TaskStatus
from taskdesk.domain.exceptions import (
    AuthorizationException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from taskdesk.infrastructure.security.confirmation import DeleteConfirmationTokens
from tests.fakes import InMemoryProfileRepository, InMemoryTaskRepository

OWNER = Caller(user_id="u1")
OTHER = Caller(user_id="u2")
ADMIN = Caller(user_id="a1", is_admin=True)


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    profiles = InMemoryProfileRepository()
    for user_id in ("u1", "u2", "a1"):
        profiles.add(user_id)
    return profiles


@pytest.fixture
def repo(profiles: InMemoryProfileRepository) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(profiles)


@pytest.fixture
def service(repo: InMemoryTaskRepository, profiles: InMemoryProfileRepository) -> TaskService:
    return TaskService(repo, DeleteConfirmationTokens(ttl_seconds=60), profiles)


async def test_ship_report_scenario(service: TaskService) -> None:
    task = await service.create_task(OWNER, title="Ship report", priority="high")
    assert task.status is TaskStatus.PENDING
    assert task.priority is TaskPriority.HIGH

    advanced = await service.advance_status(OWNER, task.id, TaskStatus.IN_PROGRESS)
    assert advanced.status is TaskStatus.IN_PROGRESS

    with pytest.raises(InvalidTransitionException):
        await service.advance_status(OWNER, task.id, TaskStatus.PENDING)
    assert (await service.get_task(OWNER, task.id)).status is TaskStatus.IN_PROGRESS


async def test_skipping_a_step_is_rejected_before_any_write(
    service: TaskService, repo: InMemoryTaskRepository
) -> None:
    task = await service.create_task(OWNER, title="Plan sprint")
    with pytest.raises(InvalidTransitionException):
        await service.advance_status(OWNER, task.id, TaskStatus.COMPLETED)
    assert repo.tasks[task.id].status is TaskStatus.PENDING
    assert repo.tasks[task.id].updated_at is None


async def test_concurrent_change_loses_the_compare_and_set(
    service: TaskService, repo: InMemoryTaskRepository
) -> None:
    task = await service.create_task(OWNER, title="Race")
    await repo.update_status(task.id, TaskStatus.PENDING, TaskStatus.IN_PROGRESS)
    with pytest.raises(InvalidTransitionException):
        await repo.update_status(task.id, TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


async def test_other_users_task_reads_as_not_found(service: TaskService) -> None:
    task = await service.create_task(OWNER, title="Private")
    with pytest.raises(ResourceNotFoundException):
        await service.get_task(OTHER, task.id)
    with pytest.raises(ResourceNotFoundException):
        await service.advance_status(OTHER, task.id, TaskStatus.IN_PROGRESS)
    assert (await service.get_task(ADMIN, task.id)).id == task.id


async def test_only_admins_create_for_another_user(service: TaskService) -> None:
    with pytest.raises(AuthorizationException):
        await service.create_task(OWNER, title="For you", user_id="u2")
    created = await service.create_task(ADMIN, title="For you", user_id="u2")
    assert created.user_id == "u2"


async def test_creating_for_an_unknown_user_is_not_found(
    service: TaskService, repo: InMemoryTaskRepository
) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.create_task(ADMIN, title="For nobody", user_id="ghost")
    assert exc_info.value.details["resource_type"] == "user"
    assert repo.tasks == {}


async def test_create_requires_a_title(service: TaskService) -> None:
    with pytest.raises(ValidationException):
        await service.create_task(OWNER, title="  ")


async def test_update_fields_never_touches_status(service: TaskService) -> None:
    task = await service.create_task(OWNER, title="Draft")
    updated = await service.update_fields(
        OWNER, task.id, {"title": "Final", "due_date": date(2026, 5, 1)}
    )
    assert updated.title == "Final"
    assert updated.due_date == date(2026, 5, 1)
    assert updated.status is TaskStatus.PENDING
    with pytest.raises(ValidationException):
        await service.update_fields(OWNER, task.id, {"status": "completed"})


async def test_list_tasks_scope_and_filters(
    service: TaskService, repo: InMemoryTaskRepository
) -> None:
    repo.add("u1", "a", priority=TaskPriority.HIGH)
    repo.add("u1", "b", priority=TaskPriority.LOW)
    repo.add("u2", "c", priority=TaskPriority.HIGH)

    own_high = await service.list_tasks(
        OWNER, FilterPredicates.from_params(priority="high"), view_all=True
    )
    assert [t.title for t in own_high] == ["a"]

    everyone_high = await service.list_tasks(
        ADMIN, FilterPredicates.from_params(priority="high"), view_all=True
    )
    assert {t.title for t in everyone_high} == {"a", "c"}

    page = await service.list_tasks(OWNER, limit=1, offset=1)
    assert [t.title for t in page] == ["a"]


async def test_list_with_owner_is_admin_only(service: TaskService) -> None:
    with pytest.raises(AuthorizationException):
        await service.list_tasks_with_owner(OWNER)
    assert await service.list_tasks_with_owner(ADMIN) == []


async def test_delete_requires_matching_confirmation(
    service: TaskService, repo: InMemoryTaskRepository
) -> None:
    task = await service.create_task(OWNER, title="Remove me")
    other = await service.create_task(OWNER, title="Keep me")

    with pytest.raises(ValidationException):
        await service.delete_task(OWNER, task.id, None)
    with pytest.raises(ValidationException):
        await service.delete_task(OWNER, task.id, "not-a-token")

    ticket_for_other = await service.request_deletion(OWNER, other.id)
    with pytest.raises(ValidationException):
        await service.delete_task(OWNER, task.id, ticket_for_other.token)
    assert task.id in repo.tasks

    ticket = await service.request_deletion(OWNER, task.id)
    await service.delete_task(OWNER, task.id, ticket.token)
    assert task.id not in repo.tasks
    assert other.id in repo.tasks


async def test_delete_confirmation_is_bound_to_the_caller(service: TaskService) -> None:
    task = await service.create_task(OWNER, title="Shared")
    ticket = await service.request_deletion(OWNER, task.id)
    with pytest.raises(ValidationException):
        await service.delete_task(ADMIN, task.id, ticket.token)
