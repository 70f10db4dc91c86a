"""Password hashing (bcrypt with SHA-256 pre-hash) and password rules.

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a
fixed-length input so long passwords are not silently truncated.
"""

import base64
import hashlib

import bcrypt

from taskdesk.domain.exceptions import ValidationException

MIN_PASSWORD_LENGTH = 6


def _prehash(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches hashed_password."""
    try:
        return bool(
            bcrypt.checkpw(_prehash(plain_password), hashed_password.encode("utf-8"))
        )
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode("utf-8")


def validate_new_password(password: str, confirmation: str | None = None) -> None:
    """Raise ValidationException if password is too short or does not match confirmation."""
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    if confirmation is not None and confirmation != password:
        raise ValidationException("Passwords do not match", field="confirm_password")
