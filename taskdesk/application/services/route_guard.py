"""Route guard: decides whether a navigation may render protected content.

Each navigation moves the guard to Checking under a fresh epoch. The result
computed for that navigation is applied only if its epoch is still current
and the guard has not already settled, so a slow profile lookup can never
overwrite a newer decision.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from taskdesk.application.dtos.profile import Profile
from taskdesk.application.dtos.session import Session, SessionChange
from taskdesk.application.interfaces.services import Unsubscribe
from taskdesk.application.services.profile_resolver import ProfileResolver
from taskdesk.application.services.session_store import SessionStore
from taskdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    RemoteFailureException,
    ResourceNotFoundException,
)

logger = logging.getLogger(__name__)

NOTICE_ROLE_UNAVAILABLE = "Could not retrieve user role. Please try again."
NOTICE_FORBIDDEN = "You do not have permission to view this page."


class DenialReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"


@dataclass(frozen=True)
class Checking:
    epoch: int


@dataclass(frozen=True)
class Denied:
    epoch: int
    reason: DenialReason
    redirect_to: str
    replace: bool = True
    notice: str | None = None


@dataclass(frozen=True)
class Authorized:
    epoch: int
    session: Session
    profile: Profile | None = None


GuardState = Checking | Denied | Authorized


class RouteGuard:
    """Tracks the guard state for one navigation context."""

    def __init__(
        self,
        session_store: SessionStore,
        profile_resolver: ProfileResolver,
        login_path: str = "/login",
        landing_path: str = "/dashboard",
    ) -> None:
        self.session_store = session_store
        self.profile_resolver = profile_resolver
        self.login_path = login_path
        self.landing_path = landing_path
        self._epoch = 0
        self._state: GuardState = Checking(0)

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def epoch(self) -> int:
        return self._epoch

    def begin_navigation(self) -> int:
        """Start a new navigation: bump the epoch and return to Checking."""
        self._epoch += 1
        self._state = Checking(self._epoch)
        return self._epoch

    def apply(self, result: GuardState) -> bool:
        """Adopt result if it belongs to the current, still unsettled navigation."""
        if result.epoch != self._epoch:
            logger.debug(
                "Discarding guard result for epoch %s (current %s)",
                result.epoch,
                self._epoch,
            )
            return False
        if not isinstance(self._state, Checking):
            return False
        self._state = result
        return True

    async def decide(self, epoch: int, admin_only: bool) -> GuardState:
        """Compute the guard result for a navigation without changing state."""
        session = await self.session_store.get_current_session()
        if session is None:
            return Denied(epoch, DenialReason.UNAUTHENTICATED, self.login_path)
        if not admin_only:
            return Authorized(epoch, session)
        try:
            profile = await self.profile_resolver.resolve_profile(session.user_id)
        except (ResourceNotFoundException, RemoteFailureException) as e:
            logger.warning(
                "Role lookup failed for user %s: %s", session.user_id, e.message
            )
            return Denied(
                epoch,
                DenialReason.UNAUTHORIZED,
                self.landing_path,
                notice=NOTICE_ROLE_UNAVAILABLE,
            )
        if not profile.is_admin:
            return Denied(
                epoch,
                DenialReason.UNAUTHORIZED,
                self.landing_path,
                notice=NOTICE_FORBIDDEN,
            )
        return Authorized(epoch, session, profile)

    async def evaluate(self, admin_only: bool = False) -> GuardState:
        """Run a full navigation and return the resulting state.

        If a session change arrives while the decision is in flight, the
        stale result is dropped and the guard stays in Checking for the
        new epoch.
        """
        epoch = self.begin_navigation()
        result = await self.decide(epoch, admin_only)
        self.apply(result)
        return self._state

    def on_session_change(self, change: SessionChange) -> None:
        """Session-change handler: reset to Checking under a new epoch."""
        logger.debug("Session change %s; guard reset", change.event.value)
        self.begin_navigation()

    def watch(self) -> Unsubscribe:
        """Subscribe the guard to session changes through its store."""
        return self.session_store.on_session_change(self.on_session_change)

    def render[T](
        self,
        content: Callable[[Authorized], T],
        loading: Callable[[], T],
    ) -> T | None:
        """Invoke content only when Authorized, loading only when Checking."""
        state = self._state
        if isinstance(state, Authorized):
            return content(state)
        if isinstance(state, Checking):
            return loading()
        return None

    def require_authorized(self) -> Authorized:
        """Return the Authorized state or raise the matching denial exception."""
        state = self._state
        if isinstance(state, Authorized):
            return state
        if isinstance(state, Denied):
            if state.reason is DenialReason.UNAUTHENTICATED:
                raise AuthenticationException(redirect_to=state.redirect_to)
            raise AuthorizationException(
                state.notice or NOTICE_FORBIDDEN, redirect_to=state.redirect_to
            )
        raise AuthenticationException(
            "Session changed during authorization", redirect_to=self.login_path
        )


class AccessLevel(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    ADMIN = "admin"


@dataclass(frozen=True)
class RouteRule:
    """A client route pattern; ':name' segments match any single segment."""

    pattern: str
    access: AccessLevel

    def match(self, path: str) -> dict[str, str] | None:
        regex = "^" + re.sub(r":(\w+)", r"(?P<\1>[^/]+)", self.pattern) + "/?$"
        found = re.match(regex, path)
        return found.groupdict() if found else None


DEFAULT_ROUTES: tuple[RouteRule, ...] = (
    RouteRule("/", AccessLevel.PUBLIC),
    RouteRule("/signup", AccessLevel.PUBLIC),
    RouteRule("/login", AccessLevel.PUBLIC),
    RouteRule("/forgot-password", AccessLevel.PUBLIC),
    RouteRule("/update-password", AccessLevel.PUBLIC),
    RouteRule("/dashboard", AccessLevel.PROTECTED),
    RouteRule("/tasks/all", AccessLevel.PROTECTED),
    RouteRule("/tasks/detail/:taskId", AccessLevel.PROTECTED),
    RouteRule("/tasks/:status", AccessLevel.PROTECTED),
    RouteRule("/settings", AccessLevel.PROTECTED),
    RouteRule("/reports", AccessLevel.PROTECTED),
    RouteRule("/admin/users-tasks", AccessLevel.ADMIN),
    RouteRule("/admin/task-summary", AccessLevel.ADMIN),
    RouteRule("/admin/reports", AccessLevel.ADMIN),
    RouteRule("/admin/announcement", AccessLevel.ADMIN),
)


class RouteTable:
    """Ordered route rules; the first matching rule wins."""

    def __init__(self, rules: tuple[RouteRule, ...] = DEFAULT_ROUTES) -> None:
        self.rules = rules

    def resolve(self, path: str) -> tuple[RouteRule, dict[str, str]] | None:
        clean = path.split("?", 1)[0] or "/"
        for rule in self.rules:
            params = rule.match(clean)
            if params is not None:
                return rule, params
        return None
