"""Dashboard and summary use cases: task counts, latest tasks, admin directories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskdesk.application.dtos.task import DashboardResult, TaskCounts
from taskdesk.application.services.task_query import BaseScope, FilterPredicates, compose

if TYPE_CHECKING:
    from taskdesk.application.dtos.profile import UserListItem
    from taskdesk.application.interfaces.repositories import (
        IAnnouncementRepository,
        IProfileRepository,
        ITaskRepository,
    )


class DashboardService:
    """Aggregate views over tasks and profiles."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        profile_repo: IProfileRepository | None = None,
        announcement_repo: IAnnouncementRepository | None = None,
        latest_limit: int = 10,
    ) -> None:
        self.task_repo = task_repo
        self.profile_repo = profile_repo
        self.announcement_repo = announcement_repo
        self.latest_limit = latest_limit

    async def get_dashboard(self, user_id: str) -> DashboardResult:
        """Return the user's own counts, latest tasks and the visible announcement."""
        counts = await self.task_repo.count_by_status(user_id)
        spec = compose(FilterPredicates(), BaseScope.own(user_id))
        latest = await self.task_repo.list_tasks(spec, limit=self.latest_limit)
        announcement = None
        if self.announcement_repo is not None:
            current = await self.announcement_repo.get_current()
            if current is not None and current.is_displayable:
                announcement = current.content
        return DashboardResult(
            counts=counts,
            latest=latest,
            total=counts.total,
            has_more=counts.total > self.latest_limit,
            announcement=announcement,
        )

    async def get_task_summary(self) -> TaskCounts:
        """Return counts by status across all users."""
        return await self.task_repo.count_by_status(None)

    async def list_users(self) -> list[UserListItem]:
        if self.profile_repo is None:
            return []
        return await self.profile_repo.list_users()

    async def list_departments(self) -> list[str]:
        if self.profile_repo is None:
            return []
        return await self.profile_repo.list_departments()
