"""Application ports (repository and service protocols)."""

from taskdesk.application.interfaces.repositories import (
    IAccountRepository,
    IAnnouncementRepository,
    IProfileRepository,
    ITaskRepository,
)
from taskdesk.application.interfaces.services import (
    IAuthBackend,
    IConfirmationTokens,
    IReportRenderer,
    SessionChangeHandler,
    Unsubscribe,
)

__all__ = [
    "IAccountRepository",
    "IAnnouncementRepository",
    "IAuthBackend",
    "IConfirmationTokens",
    "IProfileRepository",
    "IReportRenderer",
    "ITaskRepository",
    "SessionChangeHandler",
    "Unsubscribe",
]
