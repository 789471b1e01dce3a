"""Thin Gemini client wrapper shared by the analysis core and generators."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Sequence

from google import genai
from google.genai import types

from medlens.config.settings import settings
from medlens.services.errors import MissingCredentialError
from medlens.telemetry import observe_remote_call

logger = logging.getLogger(__name__)


def require_api_key() -> str:
    """Return the configured API key or fail before any network attempt."""

    secret = settings.gemini.api_key
    api_key = secret.get_secret_value().strip() if secret else ""
    if not api_key:
        raise MissingCredentialError()
    return api_key


def has_api_key() -> bool:
    try:
        require_api_key()
    except MissingCredentialError:
        return False
    return True


@lru_cache(maxsize=4)
def create_gemini_client(api_key: str) -> genai.Client:
    """Instantiate (and memoise) a Gemini client for ``api_key``."""

    return genai.Client(api_key=api_key)


def resolve_client(client: genai.Client | None = None) -> genai.Client:
    """Check the credential, then return ``client`` or the default client."""

    api_key = require_api_key()
    if client is not None:
        return client
    return create_gemini_client(api_key)


async def generate_content(
    client: genai.Client,
    *,
    operation: str,
    model: str,
    contents: Sequence[Any] | Any,
    config: types.GenerateContentConfig | None = None,
) -> types.GenerateContentResponse:
    """Run one ``generate_content`` call and record its outcome.

    Errors are re-raised untouched; labelling them is the caller's concern.
    """

    start_time = time.perf_counter()
    try:
        response = await client.aio.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
    except Exception:
        observe_remote_call(operation, "error", time.perf_counter() - start_time)
        logger.warning("Gemini call failed operation=%s model=%s", operation, model)
        raise

    observe_remote_call(operation, "success", time.perf_counter() - start_time)
    return response


def response_text(response: Any) -> str:
    """Return the aggregate text of a response, or an empty string."""

    try:
        text = getattr(response, "text", None)
    except ValueError:  # pragma: no cover - SDK raises on non-text candidates
        text = None
    return text or ""


def first_inline_data(response: Any) -> types.Blob | None:
    """Return the first inline-data blob found in the first candidate."""

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and getattr(inline_data, "data", None):
            return inline_data
    return None


__all__ = [
    "create_gemini_client",
    "first_inline_data",
    "generate_content",
    "has_api_key",
    "require_api_key",
    "resolve_client",
    "response_text",
]
