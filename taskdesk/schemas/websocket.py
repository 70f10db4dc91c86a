"""WebSocket message schemas."""

from datetime import datetime

from pydantic import BaseModel

from taskdesk.domain.enums import AuthEvent


class SessionEventMessage(BaseModel):
    """Pushed to /session/events subscribers."""

    type: str = "session_change"
    event: AuthEvent
    user_id: str
    timestamp: datetime
