"""Global announcement use cases."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskdesk.application.dtos.announcement import AnnouncementResult
from taskdesk.domain.exceptions import ValidationException

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import IAnnouncementRepository

logger = logging.getLogger(__name__)

CONTENT_MIN_LENGTH = 10
CONTENT_MAX_LENGTH = 500


class AnnouncementService:
    """Read the visible announcement; admins create or replace it."""

    def __init__(self, announcement_repo: IAnnouncementRepository) -> None:
        self.announcement_repo = announcement_repo

    async def get_visible(self) -> AnnouncementResult | None:
        """Return the announcement only if it exists, is visible and has content."""
        current = await self.announcement_repo.get_current()
        if current is None or not current.is_displayable:
            return None
        return current

    async def get_for_admin(self) -> AnnouncementResult | None:
        return await self.announcement_repo.get_current()

    async def save(self, content: str, is_visible: bool) -> AnnouncementResult:
        """Create or update the single announcement."""
        stripped = (content or "").strip()
        if len(stripped) < CONTENT_MIN_LENGTH:
            raise ValidationException(
                f"Announcement must be at least {CONTENT_MIN_LENGTH} characters",
                field="content",
            )
        if len(stripped) > CONTENT_MAX_LENGTH:
            raise ValidationException(
                f"Announcement must not exceed {CONTENT_MAX_LENGTH} characters",
                field="content",
            )
        result = await self.announcement_repo.upsert(stripped, is_visible)
        logger.info("Announcement saved (visible=%s)", is_visible)
        return result
