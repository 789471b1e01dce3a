"""Prometheus metrics definitions and helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=(
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
    ),
)

ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Number of requests ending in internal server error responses",
    ("method", "route"),
)

REMOTE_CALL_COUNT = Counter(
    "gemini_calls_total",
    "Calls made to the remote Gemini service",
    ("operation", "outcome"),
)

REMOTE_CALL_LATENCY = Histogram(
    "gemini_call_duration_seconds",
    "Remote Gemini call duration in seconds",
    ("operation",),
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)

FILE_ENCODE_COUNT = Counter(
    "document_encodes_total",
    "Per-file encode attempts grouped by outcome",
    ("outcome",),
)

CLASSIFIED_FAILURE_COUNT = Counter(
    "analysis_failures_total",
    "Analysis failures grouped by user-facing error code",
    ("code",),
)

ERROR_RESPONSE_COUNT = Counter(
    "analysis_error_responses_total",
    "HTTP responses rendered from an analysis failure, by route and code",
    ("route", "code"),
)


def observe_request(
    method: str,
    route: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record metrics for a completed HTTP request."""

    safe_route = route or "unknown"
    safe_method = method or "UNKNOWN"
    status_label = str(status_code)
    observed_duration = duration_seconds if duration_seconds >= 0 else 0

    REQUEST_COUNT.labels(
        method=safe_method,
        route=safe_route,
        status=status_label,
    ).inc()
    REQUEST_LATENCY.labels(
        method=safe_method,
        route=safe_route,
    ).observe(observed_duration)

    if status_code >= 500:
        ERROR_COUNTER.labels(
            method=safe_method,
            route=safe_route,
        ).inc()


def observe_remote_call(operation: str, outcome: str, duration_seconds: float) -> None:
    """Record one remote Gemini call."""

    REMOTE_CALL_COUNT.labels(operation=operation, outcome=outcome).inc()
    REMOTE_CALL_LATENCY.labels(operation=operation).observe(max(0.0, duration_seconds))


def increment_file_encode(outcome: str) -> None:
    FILE_ENCODE_COUNT.labels(outcome=outcome).inc()


def increment_failure(code: str) -> None:
    CLASSIFIED_FAILURE_COUNT.labels(code=code or "unknown").inc()


def increment_error_response(route: str, code: str) -> None:
    ERROR_RESPONSE_COUNT.labels(route=route or "unknown", code=code).inc()
