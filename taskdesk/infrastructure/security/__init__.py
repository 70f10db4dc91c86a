"""Security: JWT tokens, password hashing, delete confirmations."""

from taskdesk.infrastructure.security.confirmation import DeleteConfirmationTokens
from taskdesk.infrastructure.security.jwt import create_access_token, verify_token
from taskdesk.infrastructure.security.password import (
    get_password_hash,
    validate_new_password,
    verify_password,
)

__all__ = [
    "DeleteConfirmationTokens",
    "create_access_token",
    "get_password_hash",
    "validate_new_password",
    "verify_password",
    "verify_token",
]
