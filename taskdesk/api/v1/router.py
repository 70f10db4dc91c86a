"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from taskdesk.api.v1.dependencies.
"""

from fastapi import APIRouter

from taskdesk.api.v1.endpoints import (
    admin,
    announcements,
    auth,
    dashboard,
    health,
    navigation,
    reports,
    tasks,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(
    announcements.router, prefix="/announcement", tags=["announcement"]
)
api_router.include_router(navigation.router, prefix="/navigation", tags=["navigation"])
api_router.include_router(ws_endpoint.router, prefix="/session", tags=["session"])
