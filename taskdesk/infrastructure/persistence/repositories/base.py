"""Base repository: shared session handling and database error translation."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.domain.exceptions import RemoteFailureException
from taskdesk.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)


def translate_db_errors[**P, R](
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator: re-raise SQLAlchemy errors as RemoteFailureException(operation)."""

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception("Database call failed: %s", operation)
                raise RemoteFailureException(operation, str(e)) from e

        return wrapper

    return decorator


class BaseRepository[ModelType: Base]:
    """Base repository holding the session and model class."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()
