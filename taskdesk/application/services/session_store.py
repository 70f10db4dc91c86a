"""Session store: the single owned view of the current session.

Created per request (or per WebSocket connection) around the caller's
bearer token. Any backend failure reads as "no session", never as
authenticated. Subscriptions registered through the store are released
when the store is closed.
"""

import logging

from taskdesk.application.dtos.session import Session
from taskdesk.application.interfaces.services import (
    IAuthBackend,
    SessionChangeHandler,
    Unsubscribe,
)
from taskdesk.domain.exceptions import AuthenticationException, RemoteFailureException

logger = logging.getLogger(__name__)


class SessionStore:
    """Reads the current session and tracks session-change subscriptions."""

    def __init__(self, backend: IAuthBackend, access_token: str | None) -> None:
        self._backend = backend
        self._access_token = access_token
        self._unsubscribers: list[Unsubscribe] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def subscription_count(self) -> int:
        return len(self._unsubscribers)

    async def get_current_session(self) -> Session | None:
        """Ask the backend once for the current session; failures yield None."""
        if not self._access_token:
            return None
        try:
            return await self._backend.get_session(self._access_token)
        except (RemoteFailureException, AuthenticationException) as e:
            logger.warning("Session lookup failed, treating as signed out: %s", e.message)
            return None

    def on_session_change(self, handler: SessionChangeHandler) -> Unsubscribe:
        """Register handler for sign-in, sign-out, refresh and user-update events.

        Returns an idempotent unsubscribe callable.
        """
        if self._closed:
            raise RuntimeError("SessionStore is closed")
        backend_unsubscribe = self._backend.on_auth_state_change(handler)
        released = False

        def unsubscribe() -> None:
            nonlocal released
            if released:
                return
            released = True
            backend_unsubscribe()
            if unsubscribe in self._unsubscribers:
                self._unsubscribers.remove(unsubscribe)

        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def close(self) -> None:
        """Release every subscription still held. Safe to call twice."""
        for unsubscribe in list(self._unsubscribers):
            unsubscribe()
        self._closed = True

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
