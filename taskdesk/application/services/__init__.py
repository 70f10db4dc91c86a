"""Application services: session, authorization and query composition."""

from taskdesk.application.services.profile_resolver import ProfileResolver
from taskdesk.application.services.route_guard import (
    AccessLevel,
    Authorized,
    Checking,
    DenialReason,
    Denied,
    GuardState,
    RouteGuard,
    RouteTable,
)
from taskdesk.application.services.session_store import SessionStore
from taskdesk.application.services.task_query import (
    BaseScope,
    FilterPredicates,
    QuerySpec,
    compose,
)

__all__ = [
    "AccessLevel",
    "Authorized",
    "BaseScope",
    "Checking",
    "DenialReason",
    "Denied",
    "FilterPredicates",
    "GuardState",
    "ProfileResolver",
    "QuerySpec",
    "RouteGuard",
    "RouteTable",
    "SessionStore",
    "compose",
]
