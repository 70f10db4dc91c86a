"""Dashboard API: the signed-in user's counts, latest tasks and announcement."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskdesk.api.v1.dependencies import get_caller, get_dashboard_service
from taskdesk.application.dtos.session import Caller
from taskdesk.application.use_cases.dashboard import DashboardService
from taskdesk.schemas.task import DashboardResponse, TaskCountsResponse, TaskResponse

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    caller: Annotated[Caller, Depends(get_caller)],
    dashboard_svc: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    result = await dashboard_svc.get_dashboard(caller.user_id)
    return DashboardResponse(
        counts=TaskCountsResponse.model_validate(result.counts),
        latest=[TaskResponse.model_validate(t) for t in result.latest],
        total=result.total,
        has_more=result.has_more,
        announcement=result.announcement,
    )
