"""Logging setup, OpenTelemetry wiring and the span decorator for services."""

from taskdesk.shared.telemetry.logging import setup_logging
from taskdesk.shared.telemetry.telemetry import TelemetryConfig, get_telemetry, set_telemetry
from taskdesk.shared.telemetry.tracing import traced

__all__ = [
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "setup_logging",
    "traced",
]
