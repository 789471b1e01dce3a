"""Narration script generation for the spoken summary.

Narration is cosmetic next to the analysis itself, so a failed remote call
degrades to a templated sentence instead of surfacing an error.
"""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from medlens.config.settings import settings
from medlens.services.gemini_client import generate_content, resolve_client, response_text
from medlens.services.prompt_builder import (
    NARRATION_FALLBACK,
    NARRATION_SYSTEM_INSTRUCTION,
    build_narration_context,
)
from medlens.services.response_contract import AnalysisRecord

logger = logging.getLogger(__name__)


def narration_context(record: AnalysisRecord) -> str:
    return build_narration_context(
        plain_summary=record.plain_summary,
        key_findings=record.key_findings,
        methods=record.methods,
        data_interpretation=record.data_interpretation,
        risks=record.risks,
        limitations=record.limitations,
        clinical_takeaway=record.clinical_takeaway,
    )


async def generate_spoken_script(
    record: AnalysisRecord,
    *,
    client: genai.Client | None = None,
) -> str:
    """Ask the analysis model to rewrite ``record`` as a spoken script."""

    gemini = resolve_client(client)

    try:
        response = await generate_content(
            gemini,
            operation="narration",
            model=settings.gemini.analysis_model,
            contents=narration_context(record),
            config=types.GenerateContentConfig(
                system_instruction=NARRATION_SYSTEM_INSTRUCTION,
            ),
        )
    except Exception:
        logger.exception("Script generation error, falling back to the plain summary")
        return f"{NARRATION_FALLBACK} {record.plain_summary}"

    return response_text(response) or NARRATION_FALLBACK


__all__ = ["generate_spoken_script", "narration_context"]
