"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (cache, telemetry, DB engine dispose).
Objects that request handling depends on (auth event bus, revocation
store) are created in create_app so they exist even when the lifespan
does not run.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskdesk.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: Redis cache (if enabled) backing the revocation store, SQL
    instrumentation (if telemetry is on). Shutdown: cache disconnect,
    telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.cache = None
    if settings.redis_enabled:
        from taskdesk.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
        app.state.revocations.cache = cache

    from taskdesk.shared.telemetry.telemetry import get_telemetry

    telemetry = get_telemetry()
    if telemetry is not None:
        from taskdesk.infrastructure.persistence.database import get_engine

        telemetry.instrument_sqlalchemy(get_engine())

    logger.info("%s %s started", settings.app_name, settings.app_version)

    yield

    # ---- Shutdown ----
    if app.state.cache is not None:
        app.state.revocations.cache = None
        await app.state.cache.disconnect()
        app.state.cache = None
        logger.info("Cache disconnected")

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()

    from taskdesk.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
    logger.info("Database engine disposed")
