"""Auth collaborator: token sessions, revocation, and session events."""

from taskdesk.infrastructure.auth.events import AuthEventBus
from taskdesk.infrastructure.auth.revocation import SessionRevocationStore
from taskdesk.infrastructure.auth.token_backend import TokenAuthBackend

__all__ = ["AuthEventBus", "SessionRevocationStore", "TokenAuthBackend"]
