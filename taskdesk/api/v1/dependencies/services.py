"""Use case dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from taskdesk.application.interfaces.repositories import (
    IAnnouncementRepository,
    IProfileRepository,
    ITaskRepository,
)
from taskdesk.application.interfaces.services import IReportRenderer
from taskdesk.application.use_cases.announcements import AnnouncementService
from taskdesk.application.use_cases.dashboard import DashboardService
from taskdesk.application.use_cases.reports import ReportService
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.api.v1.dependencies.db import (
    get_announcement_repository,
    get_announcement_repository_tx,
    get_profile_repository,
    get_task_repository,
    get_task_repository_tx,
)
from taskdesk.core.config import get_settings
from taskdesk.infrastructure.reports import PdfReportRenderer
from taskdesk.infrastructure.security.confirmation import DeleteConfirmationTokens


def get_confirmation_tokens() -> DeleteConfirmationTokens:
    return DeleteConfirmationTokens(get_settings().delete_confirmation_ttl_seconds)


def get_report_renderer() -> IReportRenderer:
    return PdfReportRenderer()


async def get_task_reader(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repository)],
    confirmations: Annotated[DeleteConfirmationTokens, Depends(get_confirmation_tokens)],
) -> TaskService:
    """TaskService for read-only routes."""
    return TaskService(task_repo, confirmations)


async def get_task_writer(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repository_tx)],
    confirmations: Annotated[DeleteConfirmationTokens, Depends(get_confirmation_tokens)],
    profile_repo: Annotated[IProfileRepository, Depends(get_profile_repository)],
) -> TaskService:
    """TaskService bound to a transactional session."""
    return TaskService(task_repo, confirmations, profile_repo)


async def get_dashboard_service(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repository)],
    profile_repo: Annotated[IProfileRepository, Depends(get_profile_repository)],
    announcement_repo: Annotated[
        IAnnouncementRepository, Depends(get_announcement_repository)
    ],
) -> DashboardService:
    return DashboardService(
        task_repo,
        profile_repo,
        announcement_repo,
        latest_limit=get_settings().latest_tasks_limit,
    )


async def get_announcement_reader(
    repo: Annotated[IAnnouncementRepository, Depends(get_announcement_repository)],
) -> AnnouncementService:
    return AnnouncementService(repo)


async def get_announcement_writer(
    repo: Annotated[IAnnouncementRepository, Depends(get_announcement_repository_tx)],
) -> AnnouncementService:
    return AnnouncementService(repo)


async def get_report_service(
    task_repo: Annotated[ITaskRepository, Depends(get_task_repository)],
    renderer: Annotated[IReportRenderer, Depends(get_report_renderer)],
) -> ReportService:
    return ReportService(task_repo, renderer)
