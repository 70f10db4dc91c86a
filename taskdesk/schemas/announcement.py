"""Announcement API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementRequest(BaseModel):
    content: str = Field(..., min_length=10, max_length=500)
    is_visible: bool = True


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str
    is_visible: bool
    created_at: datetime
    updated_at: datetime | None = None
