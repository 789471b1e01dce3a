"""Visual summary generation with the Gemini image model."""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from medlens.config.settings import settings
from medlens.pipelines.analysis.encoding import encode_bytes
from medlens.services.errors import GenerationError
from medlens.services.gemini_client import first_inline_data, generate_content, resolve_client
from medlens.services.prompt_builder import build_illustration_prompt

logger = logging.getLogger(__name__)


async def generate_visual_summary(summary: str, *, client: genai.Client | None = None) -> str:
    """Return an illustration of ``summary`` as a ``data:image/...;base64`` URI."""

    gemini = resolve_client(client)
    config = types.GenerateContentConfig(
        image_config=types.ImageConfig(
            aspect_ratio=settings.gemini.image_aspect_ratio,
            image_size=settings.gemini.image_size,
        ),
    )

    try:
        response = await generate_content(
            gemini,
            operation="illustration",
            model=settings.gemini.image_model,
            contents=build_illustration_prompt(summary),
            config=config,
        )
    except Exception as exc:
        logger.exception("Image generation error: %s", exc)
        raise GenerationError() from exc

    blob = first_inline_data(response)
    if blob is None:
        logger.warning("Image model returned no inline image data")
        raise GenerationError()

    return encode_bytes(blob.data, blob.mime_type or "image/png").data_uri


__all__ = ["generate_visual_summary"]
