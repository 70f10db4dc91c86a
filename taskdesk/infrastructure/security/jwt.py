"""JWT session tokens and signed confirmation tokens.

Session tokens carry sub (user id), sid (session id, revocable) and exp.
Confirmation tokens carry a purpose claim so a session token can never be
replayed as a delete confirmation (or the reverse).
"""

from datetime import datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from taskdesk.core.config import get_settings
from taskdesk.shared.utils.datetime import utc_now

SESSION_PURPOSE = "session"


def encode_token(claims: dict[str, Any], expires_at: datetime) -> str:
    """Sign claims with the configured secret and algorithm, adding exp and iat."""
    settings = get_settings()
    to_encode = dict(claims)
    to_encode["exp"] = expires_at
    to_encode["iat"] = utc_now()
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def create_access_token(
    user_id: str,
    session_id: str,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create a session JWT. Returns (token, expires_at)."""
    settings = get_settings()
    ttl = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    # exp is stored in whole seconds; match what verify_token reads back.
    expires_at = (utc_now() + ttl).replace(microsecond=0)
    token = encode_token(
        {"sub": user_id, "sid": session_id, "purpose": SESSION_PURPOSE}, expires_at
    )
    return token, expires_at


def verify_token(token: str, purpose: str = SESSION_PURPOSE) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub and a matching purpose claim.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if payload.get("purpose") != purpose:
        raise ValueError("Token issued for a different purpose")
    if purpose == SESSION_PURPOSE and not payload.get("sid"):
        raise ValueError("Token missing required claim: sid")
    return payload
