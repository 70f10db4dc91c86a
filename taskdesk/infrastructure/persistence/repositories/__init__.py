"""SQLAlchemy repositories implementing the application ports."""

from taskdesk.infrastructure.persistence.repositories.account_repo import AccountRepository
from taskdesk.infrastructure.persistence.repositories.announcement_repo import (
    AnnouncementRepository,
)
from taskdesk.infrastructure.persistence.repositories.profile_repo import ProfileRepository
from taskdesk.infrastructure.persistence.repositories.task_repo import TaskRepository

__all__ = [
    "AccountRepository",
    "AnnouncementRepository",
    "ProfileRepository",
    "TaskRepository",
]
