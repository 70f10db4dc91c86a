"""Application DTOs (no ORM dependency)."""

from taskdesk.application.dtos.account import AccountResult, RegistrationData
from taskdesk.application.dtos.announcement import AnnouncementResult
from taskdesk.application.dtos.profile import Profile, UserListItem
from taskdesk.application.dtos.report import RenderedReport, ReportTable
from taskdesk.application.dtos.session import Caller, Session, SessionChange
from taskdesk.application.dtos.task import (
    DashboardResult,
    DeletionTicket,
    TaskCounts,
    TaskCreate,
    TaskResult,
    TaskWithOwner,
)

__all__ = [
    "AccountResult",
    "AnnouncementResult",
    "Caller",
    "DashboardResult",
    "DeletionTicket",
    "Profile",
    "RegistrationData",
    "RenderedReport",
    "ReportTable",
    "Session",
    "SessionChange",
    "TaskCounts",
    "TaskCreate",
    "TaskResult",
    "TaskWithOwner",
    "UserListItem",
]
