"""Request composition stage for the document analysis pipeline.

Stage **02** turns the encoded documents plus the caller's options into the
model id, contents and ``GenerateContentConfig`` consumed by Gemini. The
mode decides three things at once: which model runs, whether a thinking
budget is allocated, and whether Google Search grounding replaces strict
JSON output (Gemini refuses ``response_mime_type`` when tools are attached).
"""

from __future__ import annotations

import logging
from typing import Sequence

from google.genai import types

from medlens.config.settings import GeminiConfig, settings
from medlens.services.prompt_builder import (
    ANALYSIS_SYSTEM_INSTRUCTION,
    build_analysis_prompt,
)

from .types import (
    AnalysisMode,
    AnalysisOptions,
    AnalysisRequest,
    EncodedPart,
    GenerationSettings,
)

logger = logging.getLogger("medlens.services.analysis_pipeline")

_JSON_MIME_TYPE = "application/json"


def _truncate(value: str, max_length: int = 240) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def build_generation_settings(
    mode: AnalysisMode,
    gemini: GeminiConfig | None = None,
) -> GenerationSettings:
    """Return the remote capabilities associated with ``mode``."""

    gemini = gemini or settings.gemini
    if mode is AnalysisMode.QUICK:
        return GenerationSettings(
            model=gemini.fast_model,
            thinking_budget=None,
            search_enabled=False,
            strict_json=True,
        )
    return GenerationSettings(
        model=gemini.analysis_model,
        thinking_budget=gemini.thinking_budget,
        search_enabled=True,
        strict_json=False,
    )


def build_generate_config(generation: GenerationSettings) -> types.GenerateContentConfig:
    """Translate validated settings into the SDK configuration object."""

    thinking_config = None
    if generation.thinking_budget is not None:
        thinking_config = types.ThinkingConfig(thinking_budget=generation.thinking_budget)

    tools = None
    if generation.search_enabled:
        tools = [types.Tool(google_search=types.GoogleSearch())]

    return types.GenerateContentConfig(
        system_instruction=ANALYSIS_SYSTEM_INSTRUCTION,
        thinking_config=thinking_config,
        tools=tools,
        response_mime_type=_JSON_MIME_TYPE if generation.strict_json else None,
    )


def compose_request(
    parts: Sequence[EncodedPart],
    options: AnalysisOptions,
    *,
    gemini: GeminiConfig | None = None,
) -> AnalysisRequest:
    """Assemble the analysis request from successfully encoded parts only."""

    generation = build_generation_settings(options.mode, gemini)
    prompt = build_analysis_prompt(
        role=options.role.value,
        focus_area=options.focus_area.value,
        mode=options.mode.value,
        notes=options.notes,
        quick=options.mode is AnalysisMode.QUICK,
    )

    contents = [part.to_part() for part in parts]
    contents.append(types.Part.from_text(text=prompt))

    logger.info(
        "Analysis request composed model=%s parts=%s thinking=%s search=%s\nUSER> %s",
        generation.model,
        len(parts),
        generation.thinking_budget,
        generation.search_enabled,
        _truncate(prompt, 500),
    )

    return AnalysisRequest(
        model=generation.model,
        contents=tuple(contents),
        config=build_generate_config(generation),
        settings=generation,
        prompt=prompt,
        part_count=len(parts),
    )


__all__ = ["build_generate_config", "build_generation_settings", "compose_request"]
