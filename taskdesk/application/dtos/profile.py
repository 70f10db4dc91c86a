"""DTOs for user profiles."""

from dataclasses import dataclass

from taskdesk.domain.enums import ProfileRole


@dataclass(frozen=True)
class Profile:
    """Per-user record carrying the role that gates admin routes."""

    id: str
    first_name: str
    role: ProfileRole
    department: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is ProfileRole.ADMIN


@dataclass(frozen=True)
class UserListItem:
    """Profile plus account email, for the admin user selector."""

    id: str
    first_name: str
    email: str
    role: ProfileRole
    department: str | None = None
