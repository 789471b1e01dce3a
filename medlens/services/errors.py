"""Error taxonomy shared by the analysis core and the HTTP layer.

Every failure the core surfaces is an ``AnalysisError`` subclass carrying a
stable ``code`` (routed on by the front end), a non-technical message, a
``category`` telling the user what to do next, and the HTTP status used by
the exception handler in ``medlens.main``.

Remote failures raised by the Gemini SDK (or the transport underneath it)
are labelled by :func:`classify`, which only inspects a numeric status and
the lower-cased message text. It never retries.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class FailureCategory(str, Enum):
    """What the user should do about a failure."""

    FIX_INPUT = "fix_input"
    WAIT_AND_RETRY = "wait_and_retry"
    CONTENT_POLICY = "content_policy"
    TRY_AGAIN_LATER = "try_again_later"


class FailureKind(str, Enum):
    """Labels produced by the remote error classifier."""

    BAD_REQUEST = "BadRequest"
    RATE_LIMITED = "RateLimited"
    CONTENT_REJECTED = "ContentRejected"
    SERVICE_OVERLOADED = "ServiceOverloaded"
    NETWORK_FAILURE = "NetworkFailure"
    UNKNOWN_FAILURE = "UnknownFailure"


class AnalysisError(RuntimeError):
    """Base class for every failure surfaced by the analysis core."""

    code: str = "AnalysisError"
    category: FailureCategory = FailureCategory.TRY_AGAIN_LATER
    status_code: int = 500
    default_message: str = "An unexpected error occurred during analysis."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingCredentialError(AnalysisError):
    """Raised before any network attempt when no API key is configured."""

    code = "MissingCredential"
    status_code = 503
    default_message = (
        "API Key is missing. Please check your environment configuration."
    )


class InvalidRequestConfigError(AnalysisError):
    """Raised when a request asks for mutually exclusive remote capabilities."""

    code = "InvalidRequestConfig"
    category = FailureCategory.FIX_INPUT
    status_code = 400
    default_message = (
        "Search grounding and strict JSON output cannot be enabled together."
    )


class EncodingError(AnalysisError):
    """Raised when a single file cannot be read or accepted."""

    code = "EncodingError"
    category = FailureCategory.FIX_INPUT
    status_code = 400
    default_message = "Failed to read file"


class NoUsableInputError(AnalysisError):
    code = "NoUsableInput"
    category = FailureCategory.FIX_INPUT
    status_code = 422
    default_message = "No valid files to analyze."


class EmptyResponseError(AnalysisError):
    code = "EmptyResponse"
    status_code = 502
    default_message = "No analysis generated. The model returned an empty response."


class MalformedResponseError(AnalysisError):
    code = "MalformedResponse"
    status_code = 502
    default_message = (
        "The analysis was generated but could not be formatted correctly. "
        "The model output was not valid JSON."
    )


class SessionNotReadyError(AnalysisError):
    code = "SessionNotReady"
    status_code = 409
    default_message = "Chat session not initialized"


class GenerationError(AnalysisError):
    """Raised when an auxiliary generator returns no usable payload."""

    code = "GenerationError"
    status_code = 502
    default_message = "Failed to generate visual summary."


class AudioGenerationError(GenerationError):
    code = "AudioGenerationError"
    default_message = "No audio generated"


class TranscriptionError(GenerationError):
    code = "TranscriptionError"
    default_message = "Failed to transcribe audio."


class RemoteServiceError(AnalysisError):
    """A classified failure reported by the remote analysis service."""

    kind: FailureKind = FailureKind.UNKNOWN_FAILURE
    status_code = 502

    @property
    def code(self) -> str:  # type: ignore[override]
        return self.kind.value


class BadRequestError(RemoteServiceError):
    kind = FailureKind.BAD_REQUEST
    category = FailureCategory.FIX_INPUT
    status_code = 400
    default_message = (
        "The request was rejected. This might be due to an unsupported file "
        "format or configuration error."
    )


class RateLimitedError(RemoteServiceError):
    kind = FailureKind.RATE_LIMITED
    category = FailureCategory.WAIT_AND_RETRY
    status_code = 429
    default_message = (
        "Rate limit exceeded. We are processing too many requests. "
        "Please wait a moment and try again."
    )


class ContentRejectedError(RemoteServiceError):
    kind = FailureKind.CONTENT_REJECTED
    category = FailureCategory.CONTENT_POLICY
    status_code = 422
    default_message = (
        "The content was flagged by safety settings and could not be analyzed. "
        "Please ensure uploaded files contain safe medical content."
    )


class ServiceOverloadedError(RemoteServiceError):
    kind = FailureKind.SERVICE_OVERLOADED
    category = FailureCategory.TRY_AGAIN_LATER
    status_code = 503
    default_message = (
        "The AI service is temporarily overloaded. Please try again shortly."
    )


class NetworkFailureError(RemoteServiceError):
    kind = FailureKind.NETWORK_FAILURE
    category = FailureCategory.TRY_AGAIN_LATER
    default_message = "Network error. Please check your internet connection."


class UnknownFailureError(RemoteServiceError):
    kind = FailureKind.UNKNOWN_FAILURE
    category = FailureCategory.TRY_AGAIN_LATER


_ERRORS_BY_KIND: dict[FailureKind, type[RemoteServiceError]] = {
    FailureKind.BAD_REQUEST: BadRequestError,
    FailureKind.RATE_LIMITED: RateLimitedError,
    FailureKind.CONTENT_REJECTED: ContentRejectedError,
    FailureKind.SERVICE_OVERLOADED: ServiceOverloadedError,
    FailureKind.NETWORK_FAILURE: NetworkFailureError,
    FailureKind.UNKNOWN_FAILURE: UnknownFailureError,
}


def classify_signal(status_code: int | None, message: str | None) -> FailureKind:
    """Map a (status, message) pair onto exactly one failure kind.

    Rows are checked in order and the first match wins, so a message that
    mentions both "quota" and "overloaded" is rate limiting.
    """

    msg = (message or "").lower()

    if status_code == 400 or "invalid argument" in msg:
        return FailureKind.BAD_REQUEST
    if status_code == 429 or "quota" in msg or "rate limit" in msg:
        return FailureKind.RATE_LIMITED
    if "safety" in msg or "blocked" in msg:
        return FailureKind.CONTENT_REJECTED
    if status_code == 503 or "overloaded" in msg:
        return FailureKind.SERVICE_OVERLOADED
    if "fetch failed" in msg or "network" in msg:
        return FailureKind.NETWORK_FAILURE
    return FailureKind.UNKNOWN_FAILURE


def _resolve_status(exc: BaseException) -> int | None:
    """Best-effort numeric status from SDK, HTTP client, or generic errors."""

    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response: Any = getattr(exc, "response", None)
    if response is not None:
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    return None


def _resolve_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def classify(exc: BaseException) -> RemoteServiceError:
    """Label a remote/transport failure with a user-facing error kind."""

    if isinstance(exc, RemoteServiceError):
        return exc

    status_code = _resolve_status(exc)
    message = _resolve_message(exc)
    kind = classify_signal(status_code, message)
    error_cls = _ERRORS_BY_KIND[kind]

    logger.info(
        "Classified remote failure kind=%s status=%s: %s",
        kind.value,
        status_code,
        message,
    )

    if kind is FailureKind.UNKNOWN_FAILURE:
        return error_cls(message or None)
    return error_cls()


__all__ = [
    "AnalysisError",
    "AudioGenerationError",
    "BadRequestError",
    "ContentRejectedError",
    "EmptyResponseError",
    "EncodingError",
    "FailureCategory",
    "FailureKind",
    "GenerationError",
    "InvalidRequestConfigError",
    "MalformedResponseError",
    "MissingCredentialError",
    "NetworkFailureError",
    "NoUsableInputError",
    "RateLimitedError",
    "RemoteServiceError",
    "ServiceOverloadedError",
    "SessionNotReadyError",
    "TranscriptionError",
    "UnknownFailureError",
    "classify",
    "classify_signal",
]
