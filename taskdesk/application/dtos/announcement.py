"""DTOs for the global announcement."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AnnouncementResult:
    """The single global announcement row."""

    id: str
    content: str
    is_visible: bool
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def is_displayable(self) -> bool:
        return self.is_visible and bool(self.content and self.content.strip())
