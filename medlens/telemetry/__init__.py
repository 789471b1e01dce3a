"""Telemetry helpers and metrics."""

from .metrics import (
    CLASSIFIED_FAILURE_COUNT,
    ERROR_COUNTER,
    ERROR_RESPONSE_COUNT,
    FILE_ENCODE_COUNT,
    REMOTE_CALL_COUNT,
    REMOTE_CALL_LATENCY,
    REQUEST_COUNT,
    REQUEST_LATENCY,
    increment_error_response,
    increment_failure,
    increment_file_encode,
    observe_remote_call,
    observe_request,
)

__all__ = [
    "CLASSIFIED_FAILURE_COUNT",
    "ERROR_COUNTER",
    "ERROR_RESPONSE_COUNT",
    "FILE_ENCODE_COUNT",
    "REMOTE_CALL_COUNT",
    "REMOTE_CALL_LATENCY",
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "increment_error_response",
    "increment_failure",
    "increment_file_encode",
    "observe_remote_call",
    "observe_request",
]
