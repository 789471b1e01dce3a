"""Remote analysis stage (Stage 04) of the document analysis pipeline."""

from __future__ import annotations

import logging
from typing import Sequence

from google import genai

from medlens.services.gemini_client import generate_content, response_text
from medlens.services.response_contract import AnalysisRecord, normalize

from .types import AnalysisRequest

logger = logging.getLogger("medlens.services.analysis_pipeline")


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


async def call_analysis_model(
    client: genai.Client,
    request: AnalysisRequest,
    warnings: Sequence[str] = (),
) -> AnalysisRecord:
    """Send the composed request once and normalize whatever comes back."""

    response = await generate_content(
        client,
        operation="analysis",
        model=request.model,
        contents=list(request.contents),
        config=request.config,
    )
    raw_text = response_text(response)

    logger.info(
        "Raw analysis response model=%s chars=%s: %s",
        request.model,
        len(raw_text),
        _truncate(raw_text),
    )

    return normalize(raw_text, response, warnings)


__all__ = ["call_analysis_model"]
