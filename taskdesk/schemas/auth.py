"""Auth API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class RegisterRequest(BaseModel):
    """Request body for sign-up. Creates the account and a Regular profile."""

    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    first_name: str = Field(..., min_length=1, max_length=200)
    department: str | None = Field(default=None, max_length=200)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdatePasswordRequest(BaseModel):
    """Request body for changing the signed-in user's password."""

    password: str = Field(..., min_length=6, description="New password (min 6 characters)")
    confirm_password: str = Field(..., min_length=6)

    @model_validator(mode="after")
    def passwords_match(self) -> "UpdatePasswordRequest":
        if self.password != self.confirm_password:
            raise ValueError("password and confirm_password must match")
        return self


class SessionResponse(BaseModel):
    """Issued session (bearer token)."""

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    token_type: str = "bearer"
    user_id: str
    expires_at: datetime


class MessageResponse(BaseModel):
    message: str
