"""Shared flag store used by the session revocation store."""

from typing import Protocol


class CacheProtocol(Protocol):
    """Expiring flags visible to every worker process (e.g. Redis).

    Once connected, failed reads and writes raise RemoteFailureException
    instead of reporting "not set".
    """

    def is_available(self) -> bool: ...

    async def mark(self, key: str, ttl: int) -> bool:
        """Set key for ttl seconds. Returns False when the store is not connected."""
        ...

    async def exists(self, key: str) -> bool: ...
