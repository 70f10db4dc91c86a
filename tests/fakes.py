"""In-memory implementations of the repository and auth ports for tests."""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from taskdesk.application.dtos.account import AccountResult, RegistrationData
from taskdesk.application.dtos.announcement import AnnouncementResult
from taskdesk.application.dtos.profile import Profile, UserListItem
from taskdesk.application.dtos.report import ReportTable
from taskdesk.application.dtos.session import Session, SessionChange
from taskdesk.application.dtos.task import (
    TaskCounts,
    TaskCreate,
    TaskResult,
    TaskWithOwner,
)
from taskdesk.application.services.task_query import QuerySpec
from taskdesk.domain.enums import ProfileRole, TaskPriority, TaskStatus
from taskdesk.domain.exceptions import (
    InvalidTransitionException,
    RemoteFailureException,
    ResourceNotFoundException,
)
from taskdesk.shared.utils.datetime import utc_now


class InMemoryProfileRepository:
    def __init__(self) -> None:
        self.profiles: dict[str, Profile] = {}
        self.emails: dict[str, str] = {}
        self.fail = False
        self.calls = 0

    def add(
        self,
        user_id: str,
        first_name: str = "Ana",
        role: ProfileRole = ProfileRole.REGULAR,
        department: str | None = None,
        email: str | None = None,
    ) -> Profile:
        profile = Profile(id=user_id, first_name=first_name, role=role, department=department)
        self.profiles[user_id] = profile
        self.emails[user_id] = email or f"{user_id}@example.com"
        return profile

    def promote(self, user_id: str) -> None:
        self.profiles[user_id] = replace(self.profiles[user_id], role=ProfileRole.ADMIN)

    async def get_by_id(self, user_id: str) -> Profile | None:
        self.calls += 1
        if self.fail:
            raise RemoteFailureException("profile.get_by_id", "connection refused")
        return self.profiles.get(user_id)

    async def list_users(self) -> list[UserListItem]:
        return [
            UserListItem(
                id=p.id,
                first_name=p.first_name,
                email=self.emails[p.id],
                role=p.role,
                department=p.department,
            )
            for p in sorted(self.profiles.values(), key=lambda p: p.first_name)
        ]

    async def list_departments(self) -> list[str]:
        return sorted({p.department for p in self.profiles.values() if p.department})


class InMemoryTaskRepository:
    """Applies QuerySpec with QuerySpec.matches, the in-memory twin of the SQL filters."""

    def __init__(self, profiles: InMemoryProfileRepository | None = None) -> None:
        self.tasks: dict[str, TaskResult] = {}
        self.profiles = profiles
        self._seq = 0

    def _department(self, user_id: str) -> str | None:
        if self.profiles is None or user_id not in self.profiles.profiles:
            return None
        return self.profiles.profiles[user_id].department

    def add(
        self,
        user_id: str,
        title: str = "Task",
        status: TaskStatus = TaskStatus.PENDING,
        priority: TaskPriority = TaskPriority.MEDIUM,
        created_at: datetime | None = None,
        **fields: Any,
    ) -> TaskResult:
        self._seq += 1
        task = TaskResult(
            id=f"task{self._seq:04d}",
            user_id=user_id,
            title=title,
            status=status,
            priority=priority,
            created_at=created_at or utc_now() + timedelta(microseconds=self._seq),
            **fields,
        )
        self.tasks[task.id] = task
        return task

    def _select(self, spec: QuerySpec) -> list[TaskResult]:
        rows = [t for t in self.tasks.values() if spec.matches(t, self._department(t.user_id))]
        return sorted(
            rows,
            key=lambda t: (getattr(t, spec.order_by), t.id),
            reverse=spec.descending,
        )

    async def create(self, data: TaskCreate) -> TaskResult:
        return self.add(
            data.user_id,
            title=data.title,
            priority=TaskPriority(data.priority),
            description=data.description,
            due_date=data.due_date,
            remarks=data.remarks,
        )

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        return self.tasks.get(task_id)

    async def list_tasks(
        self, spec: QuerySpec, limit: int | None = None, offset: int = 0
    ) -> list[TaskResult]:
        rows = self._select(spec)[offset:]
        return rows[:limit] if limit is not None else rows

    async def list_with_owner(self, spec: QuerySpec) -> list[TaskWithOwner]:
        items = []
        for task in self._select(spec):
            profile = self.profiles.profiles.get(task.user_id) if self.profiles else None
            items.append(
                TaskWithOwner(
                    task=task,
                    owner_first_name=profile.first_name if profile else None,
                    owner_department=profile.department if profile else None,
                )
            )
        return items

    async def count(self, spec: QuerySpec) -> int:
        return len(self._select(spec))

    async def count_by_status(self, user_id: str | None = None) -> TaskCounts:
        rows = [t for t in self.tasks.values() if user_id is None or t.user_id == user_id]
        return TaskCounts(
            total=len(rows),
            pending=sum(t.status is TaskStatus.PENDING for t in rows),
            in_progress=sum(t.status is TaskStatus.IN_PROGRESS for t in rows),
            completed=sum(t.status is TaskStatus.COMPLETED for t in rows),
        )

    async def update_fields(self, task_id: str, patch: dict[str, Any]) -> TaskResult:
        task = self.tasks.get(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        updated = replace(task, **patch, updated_at=utc_now())
        self.tasks[task_id] = updated
        return updated

    async def update_status(
        self, task_id: str, expected: TaskStatus, target: TaskStatus
    ) -> TaskResult:
        task = self.tasks.get(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        if task.status is not expected:
            raise InvalidTransitionException(task.status.value, target.value, task_id)
        updated = replace(task, status=target, updated_at=utc_now())
        self.tasks[task_id] = updated
        return updated

    async def delete(self, task_id: str) -> bool:
        return self.tasks.pop(task_id, None) is not None


class InMemoryAccountRepository:
    def __init__(self, profiles: InMemoryProfileRepository) -> None:
        self.accounts: dict[str, AccountResult] = {}
        self.profiles = profiles
        self._seq = 0

    async def get_by_email(self, email: str) -> AccountResult | None:
        return next((a for a in self.accounts.values() if a.email == email), None)

    async def get_by_id(self, user_id: str) -> AccountResult | None:
        return self.accounts.get(user_id)

    async def create_with_profile(
        self, data: RegistrationData, hashed_password: str
    ) -> AccountResult:
        self._seq += 1
        account = AccountResult(
            id=f"user{self._seq:04d}",
            email=data.email,
            hashed_password=hashed_password,
            is_active=True,
        )
        self.accounts[account.id] = account
        self.profiles.add(
            account.id,
            first_name=data.first_name,
            department=data.department,
            email=data.email,
        )
        return account

    async def update_password(self, user_id: str, hashed_password: str) -> None:
        self.accounts[user_id] = replace(self.accounts[user_id], hashed_password=hashed_password)


class InMemoryAnnouncementRepository:
    def __init__(self) -> None:
        self.current: AnnouncementResult | None = None

    async def get_current(self) -> AnnouncementResult | None:
        return self.current

    async def upsert(self, content: str, is_visible: bool) -> AnnouncementResult:
        now = utc_now()
        if self.current is None:
            self.current = AnnouncementResult(
                id="announcement1", content=content, is_visible=is_visible, created_at=now
            )
        else:
            self.current = replace(
                self.current, content=content, is_visible=is_visible, updated_at=now
            )
        return self.current


class FakeAuthBackend:
    """Token -> Session map plus a handler registry, for store and guard tests."""

    def __init__(self) -> None:
        self.sessions: dict[str, Session] = {}
        self.handlers: list = []
        self.fail = False
        self.calls = 0

    def add_session(self, user_id: str, token: str | None = None) -> Session:
        token = token or f"token-{user_id}"
        session = Session(
            access_token=token,
            user_id=user_id,
            session_id=f"sid-{user_id}",
            expires_at=utc_now() + timedelta(hours=1),
        )
        self.sessions[token] = session
        return session

    async def get_session(self, access_token: str | None) -> Session | None:
        self.calls += 1
        if self.fail:
            raise RemoteFailureException("auth.get_session", "timeout")
        return self.sessions.get(access_token or "")

    def on_auth_state_change(self, handler):
        self.handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self.handlers:
                self.handlers.remove(handler)

        return unsubscribe

    async def sign_out(self, session: Session) -> None:
        self.sessions.pop(session.access_token, None)

    def emit(self, change: SessionChange) -> None:
        for handler in list(self.handlers):
            handler(change)


class FakeRenderer:
    def __init__(self) -> None:
        self.tables: list[ReportTable] = []

    def render(self, table: ReportTable) -> bytes:
        self.tables.append(table)
        return b"%PDF-1.7 fake"
