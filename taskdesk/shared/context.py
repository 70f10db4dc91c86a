"""Request context management using contextvars.

Holds the authenticated user for the current request so the persistence
layer can scope every transaction to it (row-level security).

Usage:
    set_current_user(user_id="user123")
    user_id = get_current_user_id()
"""

from contextvars import ContextVar, Token

_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_current_user(user_id: str | None) -> None:
    """Set the current user for this request.

    Context is scoped to the current async task.
    """
    _current_user_id.set(user_id)


def clear_current_user() -> None:
    _current_user_id.set(None)


def get_current_user_id() -> str | None:
    """Return the current user ID, or None if not authenticated."""
    return _current_user_id.get()


def set_request_id(request_id: str) -> Token:
    """Set the request id for this request; returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()
