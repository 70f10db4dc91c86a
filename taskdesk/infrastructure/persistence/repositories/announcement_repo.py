"""Announcement repository (single global row)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.announcement import AnnouncementResult
from taskdesk.infrastructure.persistence.models.announcement import Announcement
from taskdesk.infrastructure.persistence.repositories.base import (
    BaseRepository,
    translate_db_errors,
)
from taskdesk.shared.utils.datetime import ensure_utc


def _to_result(a: Announcement) -> AnnouncementResult:
    return AnnouncementResult(
        id=a.id,
        content=a.content,
        is_visible=a.is_visible,
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
    )


class AnnouncementRepository(BaseRepository[Announcement]):
    """Announcement repository. Implements IAnnouncementRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Announcement)

    async def _current(self) -> Announcement | None:
        result = await self.db.execute(
            select(Announcement).order_by(Announcement.created_at).limit(1)
        )
        return result.scalar_one_or_none()

    @translate_db_errors("announcement.get")
    async def get_current(self) -> AnnouncementResult | None:
        current = await self._current()
        return _to_result(current) if current else None

    @translate_db_errors("announcement.upsert")
    async def upsert(self, content: str, is_visible: bool) -> AnnouncementResult:
        current = await self._current()
        if current is None:
            current = Announcement(content=content, is_visible=is_visible)
            self.db.add(current)
        else:
            current.content = content
            current.is_visible = is_visible
        await self.db.flush()
        await self.db.refresh(current)
        return _to_result(current)
