"""Cache infrastructure (Redis)."""

from taskdesk.infrastructure.cache.cache_protocol import CacheProtocol
from taskdesk.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheProtocol", "CacheService"]
