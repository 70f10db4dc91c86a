"""Service interfaces (ports) for the application layer.

Protocols define contracts for the auth backend and other collaborators (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskdesk.application.dtos.report import ReportTable
    from taskdesk.application.dtos.session import Session, SessionChange
    from taskdesk.application.dtos.task import DeletionTicket

SessionChangeHandler = Callable[["SessionChange"], Awaitable[None] | None]
Unsubscribe = Callable[[], None]


# Auth backend interface
class IAuthBackend(Protocol):
    """Protocol for the session-issuing collaborator."""

    async def get_session(self, access_token: str | None) -> Session | None:
        """Return the session for the token, or None when absent, expired or revoked.

        Raises RemoteFailureException when the backend cannot be reached.
        """

    def on_auth_state_change(self, handler: SessionChangeHandler) -> Unsubscribe:
        """Register handler for session events; returns an idempotent unsubscribe."""

    async def sign_out(self, session: Session) -> None:
        """Revoke the session so later get_session calls return None."""


# Deletion confirmation interface
class IConfirmationTokens(Protocol):
    """Protocol for the two-step delete confirmation."""

    def issue(self, task_id: str, user_id: str) -> DeletionTicket:
        """Return a short-lived token bound to task and user."""

    def verify(self, token: str, task_id: str, user_id: str) -> None:
        """Raise ValidationException unless token is valid for task and user."""


# Report rendering interface
class IReportRenderer(Protocol):
    """Protocol for turning a report table into a document."""

    def render(self, table: ReportTable) -> bytes:
        """Return PDF bytes. Raises ReportRenderingException on failure."""
