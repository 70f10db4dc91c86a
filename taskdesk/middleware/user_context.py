"""User context middleware for row-level security.

Reads the bearer token (header, or ?token= for WebSockets), and when its
signature is valid stores the user id in the request context. Database
sessions then run SET LOCAL app.current_user_id so RLS policies apply.
This does not authenticate the request; route dependencies do that.
"""

from collections.abc import Callable
from urllib.parse import parse_qs

from taskdesk.infrastructure.security.jwt import verify_token
from taskdesk.middleware.request_id import get_header
from taskdesk.shared.context import clear_current_user, set_current_user


def bearer_token(scope: dict) -> str | None:
    """Return the bearer token from Authorization, or the token query parameter."""
    auth = get_header(scope, "authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    if scope["type"] == "websocket":
        query = parse_qs(scope.get("query_string", b"").decode("latin-1"))
        values = query.get("token")
        return values[0] if values else None
    return None


def _user_id_from_scope(scope: dict) -> str | None:
    token = bearer_token(scope)
    if not token:
        return None
    try:
        return verify_token(token).get("sub")
    except ValueError:
        return None


def UserContextMiddleware(app: Callable) -> Callable:
    """Set the current user (for RLS) before the route runs; clear it afterwards."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] not in ("http", "websocket"):
            await app(scope, receive, send)
            return
        set_current_user(_user_id_from_scope(scope))
        try:
            await app(scope, receive, send)
        finally:
            clear_current_user()

    return asgi_app
