"""Repository dependencies (composition root).

Reads share one get_db session per request; writes use
get_db_transactional so the whole operation commits or rolls back together.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.infrastructure.persistence.database import get_db, get_db_transactional
from taskdesk.infrastructure.persistence.repositories import (
    AccountRepository,
    AnnouncementRepository,
    ProfileRepository,
    TaskRepository,
)


async def get_task_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    return TaskRepository(db)


async def get_task_repository_tx(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskRepository:
    return TaskRepository(db)


async def get_profile_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileRepository:
    return ProfileRepository(db)


async def get_account_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AccountRepository:
    return AccountRepository(db)


async def get_account_repository_tx(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AccountRepository:
    return AccountRepository(db)


async def get_announcement_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AnnouncementRepository:
    return AnnouncementRepository(db)


async def get_announcement_repository_tx(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> AnnouncementRepository:
    return AnnouncementRepository(db)
