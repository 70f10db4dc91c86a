"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations. Engine and session factory are
created lazily on first use (get_db / get_db_transactional) so import does
not trigger Settings validation.

Every session runs SET LOCAL app.current_user_id from the request context
(set by UserContextMiddleware) so row-level security policies restrict task
rows to their owner, or to everyone for admins.
"""

import logging
import re
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taskdesk.core.config import get_settings
from taskdesk.shared.context import get_current_user_id

logger = logging.getLogger(__name__)

# Strict format for user ids before interpolation into SET LOCAL (CUID-style).
_USER_ID_MAX_LENGTH = 64
_USER_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{1," + str(_USER_ID_MAX_LENGTH) + r"}$")

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    if settings.database_url.startswith("postgresql"):
        kwargs.update(
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 10,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 20
            ),
            pool_recycle=3600,
            connect_args={
                "command_timeout": (
                    settings.db_command_timeout
                    if settings.db_command_timeout is not None
                    else 60
                )
            },
        )
    engine = create_async_engine(settings.database_url, **kwargs)
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Return the engine, creating it if needed (used by telemetry and migrations)."""
    _ensure_engine()
    assert engine is not None
    return engine


async def dispose_engine() -> None:
    """Dispose the engine and reset the factory. Call on app shutdown."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _is_valid_user_id_for_set_local(value: str) -> bool:
    """Return True if value is safe to interpolate into SET LOCAL (format + length)."""
    return bool(value) and bool(_USER_ID_RE.fullmatch(value))


async def _set_user_context(session: AsyncSession) -> None:
    """Set app.current_user_id on the session for RLS (when a user is known).

    SET LOCAL does not accept bound parameters, so the value is validated
    against a strict id format before interpolation. Non-Postgres engines
    have no RLS and are skipped.
    """
    user_id = get_current_user_id()
    if not user_id:
        return
    if session.bind is not None and session.bind.dialect.name != "postgresql":
        return
    if not _is_valid_user_id_for_set_local(user_id):
        logger.warning(
            "Skipping SET LOCAL app.current_user_id: user id failed format validation"
        )
        return
    await session.execute(text(f"SET LOCAL app.current_user_id = '{user_id}'"))


def _session_factory() -> async_sessionmaker[AsyncSession]:
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def get_db() -> AsyncIterator[AsyncSession]:
    """Database session dependency for read operations.

    Does not commit; the autobegun transaction (which scopes SET LOCAL) is
    rolled back when the session closes. Use get_db_transactional for writes.
    """
    async with _session_factory()() as session:
        await _set_user_context(session)
        yield session


async def get_db_transactional() -> AsyncIterator[AsyncSession]:
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception, so a
    failed operation leaves no partial mutation behind.
    """
    async with _session_factory()() as session:
        async with session.begin():
            await _set_user_context(session)
            yield session
