"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from taskhub.shared.telemetry.logging import AUDIT_LOGGER_NAME, get_logger, setup_logging
from taskhub.shared.telemetry.tracing import (
    add_span_event,
    traced,
)

__all__ = [
    "AUDIT_LOGGER_NAME",
    "setup_logging",
    "get_logger",
    "traced",
    "add_span_event",
]
