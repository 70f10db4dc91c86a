"""ID and token generators (CUID2 primary keys, opaque session ids)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_session_id() -> str:
    """Return a random URL-safe session identifier (JWT sid claim)."""
    return secrets.token_urlsafe(24)
