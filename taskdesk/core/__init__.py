"""Core: config, exception mapping, lifespan, and request-scoped context."""

from taskdesk.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
