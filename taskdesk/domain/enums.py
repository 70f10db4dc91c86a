"""Domain enumerations for TaskDesk.

Enums represent fixed sets of domain values (task status, priority, role).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status. Moves forward only: pending → in-progress → completed."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProfileRole(_ValuesMixin, str, Enum):
    """Role stored on a user's profile; gates the admin subtree."""

    ADMIN = "Admin"
    REGULAR = "Regular"


class AuthEvent(_ValuesMixin, str, Enum):
    """Session lifecycle notifications published by the auth backend."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


class ReportPeriod(_ValuesMixin, str, Enum):
    """Report window relative to the current date."""

    WEEK = "week"
    MONTH = "month"
