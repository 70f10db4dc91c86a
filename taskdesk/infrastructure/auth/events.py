"""In-process publisher for session lifecycle events."""

import inspect
import logging

from taskdesk.application.dtos.session import SessionChange
from taskdesk.application.interfaces.services import SessionChangeHandler, Unsubscribe

logger = logging.getLogger(__name__)


class AuthEventBus:
    """Fan-out of SessionChange notifications to registered handlers.

    A failing handler is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[int, SessionChangeHandler] = {}
        self._next_id = 0

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: SessionChangeHandler) -> Unsubscribe:
        """Register handler; the returned callable removes it and is idempotent."""
        handler_id = self._next_id
        self._next_id += 1
        self._handlers[handler_id] = handler

        def unsubscribe() -> None:
            self._handlers.pop(handler_id, None)

        return unsubscribe

    async def publish(self, change: SessionChange) -> None:
        logger.info("Auth event %s for user %s", change.event.value, change.user_id)
        for handler in list(self._handlers.values()):
            try:
                result = handler(change)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Session change handler failed for %s", change.event.value)
