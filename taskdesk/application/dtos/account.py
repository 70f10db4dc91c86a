"""DTOs for accounts held by the auth backend."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AccountResult:
    """Account read-model. Carries the password hash only for sign-in checks."""

    id: str
    email: str
    hashed_password: str
    is_active: bool


@dataclass(frozen=True)
class RegistrationData:
    """Input for creating an account together with its Regular profile."""

    email: str
    password: str
    first_name: str
    department: str | None = None
