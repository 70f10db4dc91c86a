"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from taskdesk.shared.context import (
    clear_current_user,
    get_current_user_id,
    set_current_user,
)
from taskdesk.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = [
    "set_current_user",
    "clear_current_user",
    "get_current_user_id",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
