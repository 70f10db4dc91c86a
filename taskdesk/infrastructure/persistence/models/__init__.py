"""ORM models. Importing this package registers every table on Base.metadata."""

from taskdesk.infrastructure.persistence.models.account import Account
from taskdesk.infrastructure.persistence.models.announcement import Announcement
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.models.task import Task

__all__ = ["Account", "Announcement", "Profile", "Task"]
