"""Profile and admin directory schemas."""

from pydantic import BaseModel, ConfigDict

from taskdesk.domain.enums import ProfileRole


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    role: ProfileRole
    department: str | None = None


class UserListItemResponse(BaseModel):
    """User selector entry for admin views."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    email: str
    role: ProfileRole
    department: str | None = None
