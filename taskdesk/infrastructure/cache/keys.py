"""Cache key builders."""

REVOKED_SESSION_PREFIX = "taskdesk:revoked-session"


def revoked_session_key(session_id: str) -> str:
    return f"{REVOKED_SESSION_PREFIX}:{session_id}"
