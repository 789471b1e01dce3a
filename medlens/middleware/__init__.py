"""Request logging and metrics middleware installed by ``create_app``."""

from .logging import StructuredLoggingMiddleware
from .telemetry import ERROR_CODE_HEADER, TelemetryMiddleware

__all__ = ["ERROR_CODE_HEADER", "StructuredLoggingMiddleware", "TelemetryMiddleware"]
