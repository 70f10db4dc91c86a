"""Report building: periods, rows, N/A values and filenames."""

from datetime import UTC, date, datetime

import pytest

from taskdesk.application.use_cases.reports import (
    ADMIN_REPORT_COLUMNS,
    MISSING,
    USER_REPORT_COLUMNS,
    ReportService,
    format_day,
    report_filename,
    report_period,
)
from taskdesk.domain.enums import ProfileRole, ReportPeriod, TaskPriority, TaskStatus
from taskdesk.infrastructure.reports import PdfReportRenderer
from tests.fakes import FakeRenderer, InMemoryProfileRepository, InMemoryTaskRepository

# Wednesday
NOW = datetime(2026, 4, 29, 15, 30, 5, tzinfo=UTC)


@pytest.fixture
def profiles() -> InMemoryProfileRepository:
    profiles = InMemoryProfileRepository()
    profiles.add("u1", first_name="Ana", department="Engineering")
    profiles.add("u2", first_name="Ben", department=None)
    profiles.add("a1", first_name="Bea", role=ProfileRole.ADMIN, department="Ops")
    return profiles


@pytest.fixture
def repo(profiles: InMemoryProfileRepository) -> InMemoryTaskRepository:
    repo = InMemoryTaskRepository(profiles)
    repo.add("u1", "In week", created_at=datetime(2026, 4, 24, 8, 0, tzinfo=UTC))
    repo.add(
        "u1",
        "Before week",
        created_at=datetime(2026, 4, 23, 23, 0, tzinfo=UTC),
        description="old",
    )
    repo.add(
        "u2",
        "Ben's task",
        status=TaskStatus.COMPLETED,
        priority=TaskPriority.HIGH,
        created_at=datetime(2026, 4, 28, 10, 0, tzinfo=UTC),
        due_date=date(2026, 5, 2),
    )
    return repo


def test_format_day_and_missing_values() -> None:
    assert format_day(date(2026, 4, 29)) == "April 29, 2026"
    assert format_day(None) == MISSING == "N/A"


def test_report_period_week_flavours() -> None:
    today = date(2026, 4, 29)
    assert report_period("week", today, week_starts_friday=True) == (
        date(2026, 4, 24),
        date(2026, 4, 30),
    )
    assert report_period(ReportPeriod.WEEK, today, week_starts_friday=False) == (
        date(2026, 4, 27),
        date(2026, 5, 3),
    )
    assert report_period("month", today, week_starts_friday=True) == (
        date(2026, 4, 1),
        date(2026, 4, 30),
    )


def test_report_filename_uses_timestamp() -> None:
    assert report_filename("My_Task_Report", NOW) == "My_Task_Report_20260429_153005.pdf"


async def test_user_report_uses_friday_week_and_own_tasks(
    repo: InMemoryTaskRepository,
) -> None:
    service = ReportService(repo, FakeRenderer(), clock=lambda: NOW)
    table = await service.build_user_report("u1", ReportPeriod.WEEK)
    assert table.columns == USER_REPORT_COLUMNS
    assert [row[0] for row in table.rows] == ["In week"]
    title, description, status, priority, due, created = table.rows[0]
    assert description == "N/A"
    assert due == "N/A"
    assert created == "April 24, 2026"
    assert table.subtitle_lines == ["Period: April 24, 2026 - April 30, 2026"]


async def test_admin_report_joins_owner_and_filters_department(
    repo: InMemoryTaskRepository,
) -> None:
    service = ReportService(repo, FakeRenderer(), clock=lambda: NOW)
    table = await service.build_admin_report("a1", "week")
    assert table.columns == ADMIN_REPORT_COLUMNS
    assert ["Ben", "N/A", "Ben's task", "completed", "high", "May 2, 2026"] in table.rows
    assert "Department: All" in table.subtitle_lines

    engineering = await service.build_admin_report("a1", "month", department="Engineering")
    assert {row[0] for row in engineering.rows} == {"Ana"}
    assert "Department: Engineering" in engineering.subtitle_lines


async def test_generate_user_report_renders_pdf(repo: InMemoryTaskRepository) -> None:
    renderer = FakeRenderer()
    service = ReportService(repo, renderer, clock=lambda: NOW)
    report = await service.generate_user_report("u1", "month")
    assert report.filename == "My_Task_Report_20260429_153005.pdf"
    assert report.content.startswith(b"%PDF")
    assert report.row_count == 2
    assert renderer.tables[0].title == "My Task Report"

    admin_report = await service.generate_admin_report("a1", "week")
    assert admin_report.filename.startswith("Task_Report_")


async def test_html_template_escapes_cells(repo: InMemoryTaskRepository) -> None:
    repo.add("u1", "<b>bold</b>", created_at=NOW)
    service = ReportService(repo, FakeRenderer(), clock=lambda: NOW)
    table = await service.build_user_report("u1", "week")
    html = PdfReportRenderer().render_html(table)
    assert "My Task Report" in html
    assert "&lt;b&gt;bold&lt;/b&gt;" in html
