"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Implementations translate transport/database errors into RemoteFailureException.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from taskdesk.domain.enums import TaskStatus

if TYPE_CHECKING:
    from taskdesk.application.dtos.account import AccountResult, RegistrationData
    from taskdesk.application.dtos.announcement import AnnouncementResult
    from taskdesk.application.dtos.profile import Profile, UserListItem
    from taskdesk.application.dtos.task import (
        TaskCounts,
        TaskCreate,
        TaskResult,
        TaskWithOwner,
    )
    from taskdesk.application.services.task_query import QuerySpec


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task persistence. Every filter arrives as a QuerySpec."""

    async def create(self, data: TaskCreate) -> TaskResult:
        """Insert a new task in pending status."""

    async def get_by_id(self, task_id: str) -> TaskResult | None:
        """Return task by ID."""

    async def list_tasks(
        self, spec: QuerySpec, limit: int | None = None, offset: int = 0
    ) -> list[TaskResult]:
        """Return tasks matching spec in spec order."""

    async def list_with_owner(self, spec: QuerySpec) -> list[TaskWithOwner]:
        """Return tasks matching spec joined with the owner's profile."""

    async def count(self, spec: QuerySpec) -> int:
        """Return the number of tasks matching spec."""

    async def count_by_status(self, user_id: str | None = None) -> TaskCounts:
        """Return counts by status for one user, or for everyone when user_id is None."""

    async def update_fields(self, task_id: str, patch: dict[str, Any]) -> TaskResult:
        """Apply an already validated editable-field patch."""

    async def update_status(
        self, task_id: str, expected: TaskStatus, target: TaskStatus
    ) -> TaskResult:
        """Set status to target only if it is still expected (compare-and-set).

        Raises InvalidTransitionException when the stored status differs or
        the step is not a legal transition, ResourceNotFoundException when
        the task is gone.
        """

    async def delete(self, task_id: str) -> bool:
        """Delete task. Returns False if it did not exist."""


# Profile repository interface
class IProfileRepository(Protocol):
    """Protocol for profile reads (role, department)."""

    async def get_by_id(self, user_id: str) -> Profile | None:
        """Return the profile whose id equals the account id."""

    async def list_users(self) -> list[UserListItem]:
        """Return every profile with its account email, ordered by first name."""

    async def list_departments(self) -> list[str]:
        """Return distinct non-empty departments, sorted."""


# Account repository interface
class IAccountRepository(Protocol):
    """Protocol for accounts owned by the auth backend."""

    async def get_by_email(self, email: str) -> AccountResult | None:
        """Return account by email (case-insensitive)."""

    async def get_by_id(self, user_id: str) -> AccountResult | None:
        """Return account by ID."""

    async def create_with_profile(
        self, data: RegistrationData, hashed_password: str
    ) -> AccountResult:
        """Create the account and its Regular profile in one transaction."""

    async def update_password(self, user_id: str, hashed_password: str) -> None:
        """Replace the stored password hash."""


# Announcement repository interface
class IAnnouncementRepository(Protocol):
    """Protocol for the single global announcement."""

    async def get_current(self) -> AnnouncementResult | None:
        """Return the announcement row, if any."""

    async def upsert(self, content: str, is_visible: bool) -> AnnouncementResult:
        """Create the announcement or update the existing one."""
