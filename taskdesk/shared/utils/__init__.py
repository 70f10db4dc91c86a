"""Shared utilities: datetime and generators."""

from taskdesk.shared.utils.datetime import (
    calendar_month,
    ensure_utc,
    friday_week,
    from_timestamp_utc,
    iso_week,
    local_day_bounds,
    local_range_bounds,
    resolve_zone,
    utc_now,
)
from taskdesk.shared.utils.generators import generate_cuid, generate_session_id

__all__ = [
    "generate_cuid",
    "generate_session_id",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
    "resolve_zone",
    "local_day_bounds",
    "local_range_bounds",
    "friday_week",
    "iso_week",
    "calendar_month",
]
