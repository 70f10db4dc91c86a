"""DTOs for authenticated sessions (no dependency on ORM or JWT library)."""

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import AuthEvent


@dataclass(frozen=True)
class Session:
    """An authenticated session issued by the auth backend.

    Replaced wholesale on refresh; the core never mutates it.
    """

    access_token: str
    user_id: str
    session_id: str
    expires_at: datetime
    token_type: str = "bearer"


@dataclass(frozen=True)
class SessionChange:
    """Notification delivered to session-change handlers.

    session is the session now in effect (None after sign-out).
    ended_session_id names the session that stopped working on sign-out or
    refresh, so listeners bound to one session can ignore the user's others.
    """

    event: AuthEvent
    user_id: str
    session: Session | None = None
    ended_session_id: str | None = None


@dataclass(frozen=True)
class Caller:
    """The authenticated user behind a request, with the resolved admin flag."""

    user_id: str
    is_admin: bool = False
