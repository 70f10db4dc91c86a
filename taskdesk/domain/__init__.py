"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskdesk.domain.entities import TaskEntity
from taskdesk.domain.enums import AuthEvent, ProfileRole, TaskPriority, TaskStatus
from taskdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    InvalidTransitionException,
    RemoteFailureException,
    ResourceNotFoundException,
    TaskDeskException,
    ValidationException,
)

__all__ = [
    # Entities
    "TaskEntity",
    # Enums
    "AuthEvent",
    "ProfileRole",
    "TaskPriority",
    "TaskStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "InvalidTransitionException",
    "RemoteFailureException",
    "ResourceNotFoundException",
    "TaskDeskException",
    "ValidationException",
]
