"""FastAPI application entry point.

Wiring only: logging, telemetry, lifespan, exception handlers, middleware,
routers. See taskdesk.core.lifespan and taskdesk.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskdesk.api.v1.router import api_router
from taskdesk.application.services.route_guard import RouteTable
from taskdesk.core.config import get_settings
from taskdesk.core.exception_handlers import register_exception_handlers
from taskdesk.core.lifespan import create_lifespan
from taskdesk.core.limiter import limiter
from taskdesk.infrastructure.auth import AuthEventBus, SessionRevocationStore
from taskdesk.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
    UserContextMiddleware,
)
from taskdesk.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def _setup_telemetry(app: FastAPI) -> None:
    """Tracing must be installed before the first request builds the middleware stack."""
    settings = get_settings()
    if not settings.telemetry_enabled:
        return
    from taskdesk.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

    telemetry = TelemetryConfig(
        service_name=settings.app_name,
        service_version=settings.app_version,
        enabled=True,
        environment=settings.telemetry_environment,
    )
    telemetry.setup_telemetry(
        exporter_type=settings.telemetry_exporter,
        otlp_endpoint=settings.telemetry_otlp_endpoint,
        sample_rate=settings.telemetry_sample_rate,
    )
    set_telemetry(telemetry)
    telemetry.instrument_fastapi(app)
    logger.info("Telemetry initialized")


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    # Shared by every request's auth backend and by the session events socket.
    app.state.auth_bus = AuthEventBus()
    app.state.revocations = SessionRevocationStore()
    app.state.route_table = RouteTable()
    app.state.cache = None

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout → request ID → security → user context → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(UserContextMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    _setup_telemetry(app)
    return app


app = create_app()
