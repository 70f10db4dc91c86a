"""Report use cases: the personal task report and the admin task summary report.

Periods are evaluated in the caller's zone. The personal report uses a
Friday-to-Thursday week; the admin report uses the ISO (Monday) week.
Both reports can use the calendar month instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, tzinfo
from typing import TYPE_CHECKING

from taskdesk.application.dtos.report import RenderedReport, ReportTable
from taskdesk.application.services.task_query import BaseScope, FilterPredicates, compose
from taskdesk.domain.enums import ReportPeriod
from taskdesk.shared.telemetry.tracing import traced
from taskdesk.shared.utils.datetime import (
    calendar_month,
    friday_week,
    iso_week,
    local_range_bounds,
    utc_now,
)

if TYPE_CHECKING:
    from taskdesk.application.dtos.task import TaskResult
    from taskdesk.application.interfaces.repositories import ITaskRepository
    from taskdesk.application.interfaces.services import IReportRenderer

logger = logging.getLogger(__name__)

MISSING = "N/A"
USER_REPORT_TITLE = "My Task Report"
ADMIN_REPORT_TITLE = "Task Summary Report"
USER_REPORT_COLUMNS = ["Title", "Description", "Status", "Priority", "Due Date", "Created At"]
ADMIN_REPORT_COLUMNS = ["User", "Department", "Title", "Status", "Priority", "Due Date"]


def format_day(value: date | datetime | None, tz: tzinfo | None = None) -> str:
    """Long date like 'April 29, 2026', or N/A."""
    if value is None:
        return MISSING
    if isinstance(value, datetime):
        value = value.astimezone(tz).date() if tz else value.date()
    return f"{value:%B} {value.day}, {value.year}"


def report_period(
    period: ReportPeriod | str, today: date, week_starts_friday: bool
) -> tuple[date, date]:
    """Return the first and last local day of the period containing today."""
    if ReportPeriod(period) is ReportPeriod.MONTH:
        return calendar_month(today)
    return friday_week(today) if week_starts_friday else iso_week(today)


def report_filename(prefix: str, generated_at: datetime) -> str:
    return f"{prefix}_{generated_at:%Y%m%d_%H%M%S}.pdf"


class ReportService:
    """Builds report tables from task queries and renders them to PDF."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        renderer: IReportRenderer | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.task_repo = task_repo
        self.renderer = renderer
        self.clock = clock

    def _local_now(self, tz: tzinfo) -> datetime:
        return self.clock().astimezone(tz)

    async def build_user_report(
        self, user_id: str, period: ReportPeriod | str, tz: tzinfo = UTC
    ) -> ReportTable:
        """Rows for the caller's own tasks created within the period."""
        now = self._local_now(tz)
        first, last = report_period(period, now.date(), week_starts_friday=True)
        lower, upper = local_range_bounds(first, last, tz)
        spec = compose(FilterPredicates(), BaseScope.own(user_id)).with_range(
            "created_at", lower, upper
        )
        tasks = await self.task_repo.list_tasks(spec)
        rows = [self._user_row(task, tz) for task in tasks]
        return ReportTable(
            title=USER_REPORT_TITLE,
            subtitle_lines=[f"Period: {format_day(first)} - {format_day(last)}"],
            columns=USER_REPORT_COLUMNS,
            rows=rows,
            generated_at=now,
        )

    async def build_admin_report(
        self,
        caller_id: str,
        period: ReportPeriod | str,
        department: str | None = None,
        tz: tzinfo = UTC,
    ) -> ReportTable:
        """Rows for every user's tasks in the period, optionally one department."""
        now = self._local_now(tz)
        first, last = report_period(period, now.date(), week_starts_friday=False)
        lower, upper = local_range_bounds(first, last, tz)
        predicates = FilterPredicates.from_params(department=department)
        spec = compose(predicates, BaseScope.all_users(caller_id)).with_range(
            "created_at", lower, upper
        )
        tasks = await self.task_repo.list_with_owner(spec)
        rows = [
            [
                item.owner_first_name or MISSING,
                item.owner_department or MISSING,
                item.task.title,
                item.task.status.value,
                item.task.priority.value,
                format_day(item.task.due_date),
            ]
            for item in tasks
        ]
        return ReportTable(
            title=ADMIN_REPORT_TITLE,
            subtitle_lines=[
                f"Period: {format_day(first)} - {format_day(last)}",
                f"Department: {predicates.department or 'All'}",
            ],
            columns=ADMIN_REPORT_COLUMNS,
            rows=rows,
            generated_at=now,
        )

    @staticmethod
    def _user_row(task: TaskResult, tz: tzinfo) -> list[str]:
        return [
            task.title,
            task.description or MISSING,
            task.status.value,
            task.priority.value,
            format_day(task.due_date),
            format_day(task.created_at, tz),
        ]

    def _render(self, table: ReportTable, prefix: str) -> RenderedReport:
        if self.renderer is None:
            raise RuntimeError("ReportService has no renderer configured")
        content = self.renderer.render(table)
        filename = report_filename(prefix, table.generated_at)
        logger.info("Rendered %s (%d rows)", filename, len(table.rows))
        return RenderedReport(filename=filename, content=content, row_count=len(table.rows))

    @traced("report.user")
    async def generate_user_report(
        self, user_id: str, period: ReportPeriod | str, tz: tzinfo = UTC
    ) -> RenderedReport:
        table = await self.build_user_report(user_id, period, tz)
        return self._render(table, "My_Task_Report")

    @traced("report.admin")
    async def generate_admin_report(
        self,
        caller_id: str,
        period: ReportPeriod | str,
        department: str | None = None,
        tz: tzinfo = UTC,
    ) -> RenderedReport:
        table = await self.build_admin_report(caller_id, period, department, tz)
        return self._render(table, "Task_Report")
