"""Announcement API: everyone reads the visible one, admins edit it."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from taskdesk.api.v1.dependencies import (
    get_admin_caller,
    get_announcement_reader,
    get_announcement_writer,
    require_session,
)
from taskdesk.application.dtos.session import Caller
from taskdesk.application.services.route_guard import Authorized
from taskdesk.application.use_cases.announcements import AnnouncementService
from taskdesk.core.limiter import limit_writes
from taskdesk.schemas.announcement import AnnouncementRequest, AnnouncementResponse

router = APIRouter()


@router.get(
    "",
    response_model=AnnouncementResponse,
    responses={204: {"description": "No visible announcement"}},
)
async def get_announcement(
    _: Annotated[Authorized, Depends(require_session)],
    announcement_svc: Annotated[AnnouncementService, Depends(get_announcement_reader)],
):
    """Return the announcement if it is visible and has content; otherwise 204."""
    current = await announcement_svc.get_visible()
    if current is None:
        return Response(status_code=204)
    return AnnouncementResponse.model_validate(current)


@router.get(
    "/admin",
    response_model=AnnouncementResponse,
    responses={204: {"description": "No announcement yet"}},
)
async def get_announcement_for_admin(
    _: Annotated[Caller, Depends(get_admin_caller)],
    announcement_svc: Annotated[AnnouncementService, Depends(get_announcement_reader)],
):
    """Return the announcement whatever its visibility (for the edit form)."""
    current = await announcement_svc.get_for_admin()
    if current is None:
        return Response(status_code=204)
    return AnnouncementResponse.model_validate(current)


@router.put("", response_model=AnnouncementResponse)
@limit_writes
async def save_announcement(
    request: Request,
    body: AnnouncementRequest,
    _: Annotated[Caller, Depends(get_admin_caller)],
    announcement_svc: Annotated[AnnouncementService, Depends(get_announcement_writer)],
):
    """Create or replace the single global announcement."""
    saved = await announcement_svc.save(body.content, body.is_visible)
    return AnnouncementResponse.model_validate(saved)
