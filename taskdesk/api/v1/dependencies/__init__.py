"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories, the auth backend and
use cases are built here from infrastructure implementations.
"""

from taskdesk.api.v1.dependencies.auth import (
    get_access_token,
    get_account_backend,
    get_admin_caller,
    get_auth_backend,
    get_caller,
    get_profile_resolver,
    get_route_guard,
    get_route_table,
    get_session_store,
    get_timezone,
    require_admin,
    require_session,
)
from taskdesk.api.v1.dependencies.db import (
    get_account_repository,
    get_account_repository_tx,
    get_announcement_repository,
    get_announcement_repository_tx,
    get_profile_repository,
    get_task_repository,
    get_task_repository_tx,
)
from taskdesk.api.v1.dependencies.services import (
    get_announcement_reader,
    get_announcement_writer,
    get_confirmation_tokens,
    get_dashboard_service,
    get_report_renderer,
    get_report_service,
    get_task_reader,
    get_task_writer,
)

__all__ = [
    "get_access_token",
    "get_account_backend",
    "get_account_repository",
    "get_account_repository_tx",
    "get_admin_caller",
    "get_announcement_reader",
    "get_announcement_repository",
    "get_announcement_repository_tx",
    "get_announcement_writer",
    "get_auth_backend",
    "get_caller",
    "get_confirmation_tokens",
    "get_dashboard_service",
    "get_profile_repository",
    "get_profile_resolver",
    "get_report_renderer",
    "get_report_service",
    "get_route_guard",
    "get_route_table",
    "get_session_store",
    "get_task_reader",
    "get_task_repository",
    "get_task_repository_tx",
    "get_task_writer",
    "get_timezone",
    "require_admin",
    "require_session",
]
