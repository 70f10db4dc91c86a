"""Domain entities."""

from taskdesk.domain.entities.task import (
    ALLOWED_TRANSITIONS,
    EDITABLE_FIELDS,
    TaskEntity,
    can_transition,
    ensure_transition,
    next_status,
    validate_patch,
    validate_title,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "EDITABLE_FIELDS",
    "TaskEntity",
    "can_transition",
    "ensure_transition",
    "next_status",
    "validate_patch",
    "validate_title",
]
