"""Redis-backed flag store.

Holds revoked session ids so every worker rejects a signed-out token. Call
connect() at startup and disconnect() at shutdown; when Redis is unreachable
the service reports itself unavailable and callers keep in-process state only.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from taskdesk.core.config import get_settings
from taskdesk.domain.exceptions import RemoteFailureException

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis client wrapper with TTL flags."""

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        if self.redis is not None:
            return
        settings = self.settings
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=(
                settings.redis_password.get_secret_value() if settings.redis_password else None
            ),
            max_connections=settings.redis_max_connections,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis unreachable at %s:%s (%s); revocations stay local",
                           settings.redis_host, settings.redis_port, e)
            await client.aclose()
            return
        self.redis = client
        self._connected = True
        logger.info("Redis connected: %s:%s", settings.redis_host, settings.redis_port)

    async def disconnect(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
        self.redis = None
        self._connected = False

    def is_available(self) -> bool:
        return self._connected and self.redis is not None

    async def mark(self, key: str, ttl: int) -> bool:
        """Set key for ttl seconds; False when Redis is not connected.

        Raises RemoteFailureException when a connected Redis rejects the write.
        """
        if not self.is_available() or self.redis is None:
            return False
        try:
            await self.redis.set(key, "1", ex=max(ttl, 1))
        except redis.RedisError as e:
            logger.exception("Redis write failed for %s", key)
            raise RemoteFailureException("redis.set", str(e)) from e
        return True

    async def exists(self, key: str) -> bool:
        """A failed read raises RemoteFailureException; it never reads as "not set"."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            return bool(await self.redis.exists(key))
        except redis.RedisError as e:
            logger.exception("Redis read failed for %s", key)
            raise RemoteFailureException("redis.exists", str(e)) from e
