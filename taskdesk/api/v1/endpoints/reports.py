"""Report API: PDF downloads of the personal and admin task reports."""

from datetime import tzinfo
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from taskdesk.api.v1.dependencies import (
    get_admin_caller,
    get_caller,
    get_report_service,
    get_timezone,
)
from taskdesk.application.dtos.report import RenderedReport
from taskdesk.application.dtos.session import Caller
from taskdesk.application.use_cases.reports import ReportService
from taskdesk.core.limiter import limit_reports
from taskdesk.domain.enums import ReportPeriod

router = APIRouter()

_PDF_RESPONSE = {200: {"content": {"application/pdf": {}}, "description": "PDF report"}}


def _pdf_response(report: RenderedReport) -> Response:
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{report.filename}"',
            "X-Report-Rows": str(report.row_count),
        },
    )


@router.get("/me", response_class=Response, responses=_PDF_RESPONSE)
@limit_reports
async def my_task_report(
    request: Request,
    caller: Annotated[Caller, Depends(get_caller)],
    report_svc: Annotated[ReportService, Depends(get_report_service)],
    tz: Annotated[tzinfo, Depends(get_timezone)],
    period: ReportPeriod = ReportPeriod.WEEK,
):
    """My Task Report for the Friday-to-Thursday week or the current month."""
    report = await report_svc.generate_user_report(caller.user_id, period, tz)
    return _pdf_response(report)


@router.get("/admin", response_class=Response, responses=_PDF_RESPONSE)
@limit_reports
async def admin_task_report(
    request: Request,
    caller: Annotated[Caller, Depends(get_admin_caller)],
    report_svc: Annotated[ReportService, Depends(get_report_service)],
    tz: Annotated[tzinfo, Depends(get_timezone)],
    period: ReportPeriod = ReportPeriod.WEEK,
    department: str | None = None,
):
    """Task Summary Report across users for the ISO week or current month."""
    report = await report_svc.generate_admin_report(caller.user_id, period, department, tz)
    return _pdf_response(report)
