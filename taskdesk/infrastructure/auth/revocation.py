"""Revoked session ids, kept until the session would have expired anyway."""

import logging
from datetime import datetime

from taskdesk.infrastructure.cache.cache_protocol import CacheProtocol
from taskdesk.infrastructure.cache.keys import revoked_session_key
from taskdesk.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class SessionRevocationStore:
    """Records signed-out session ids in process and, when available, in Redis.

    The local record is written first, so a failed shared write still revokes
    the session on this worker before the RemoteFailureException propagates.
    is_revoked raises when the shared store cannot be read.
    """

    def __init__(self, cache: CacheProtocol | None = None) -> None:
        self.cache = cache
        self._local: dict[str, datetime] = {}

    def _prune(self) -> None:
        now = utc_now()
        for sid in [sid for sid, exp in self._local.items() if exp <= now]:
            del self._local[sid]

    async def revoke(self, session_id: str, expires_at: datetime) -> None:
        self._prune()
        self._local[session_id] = expires_at
        if self.cache is not None and self.cache.is_available():
            ttl = int((expires_at - utc_now()).total_seconds())
            if ttl > 0:
                await self.cache.mark(revoked_session_key(session_id), ttl)

    async def is_revoked(self, session_id: str) -> bool:
        expires_at = self._local.get(session_id)
        if expires_at is not None and expires_at > utc_now():
            return True
        if self.cache is not None and self.cache.is_available():
            return await self.cache.exists(revoked_session_key(session_id))
        return False
