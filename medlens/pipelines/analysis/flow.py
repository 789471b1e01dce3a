"""High-level orchestration map for the document analysis pipeline.

The HTTP controller in ``medlens/controllers/analysis.py`` only adapts
uploads and form fields; the choreography lives in ``aggregation.submit_all``.
This module documents the canonical execution order so team members can
navigate the codebase more easily:

1. ``encoding`` – validate each upload and encode it to base64 concurrently.
2. ``prompts`` – build the instruction block and the mode-dependent config.
3. ``aggregation`` – partition outcomes and decide whether to proceed.
4. ``llm`` – call Gemini once with the surviving parts.
5. ``response_contract`` – extract, validate and annotate the JSON record.
6. ``errors`` – label remote failures for the caller.
7. ``chat_session`` – seed the follow-up chat with the Markdown report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the analysis pipeline."""

    order: int
    name: str
    module: str
    summary: str


class DocumentAnalysisPipeline:
    """Utility wrapper for documenting the `/analysis` flow."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(
            1,
            "Encoding",
            "medlens.pipelines.analysis.encoding",
            "Resolve each media type, read the upload and base64-encode it; failures stay per file.",
        ),
        PipelineStage(
            2,
            "Request Composition",
            "medlens.pipelines.analysis.prompts",
            "Embed role, focus, mode and notes; pick model, thinking budget, search or strict JSON.",
        ),
        PipelineStage(
            3,
            "Partial-Failure Aggregation",
            "medlens.pipelines.analysis.aggregation",
            "Join all encodes, abort when nothing survived, turn rejections into warnings.",
        ),
        PipelineStage(
            4,
            "Gemini Invocation",
            "medlens.pipelines.analysis.llm",
            "Call the analysis model once with the successful parts.",
        ),
        PipelineStage(
            5,
            "Response Normalization",
            "medlens.services.response_contract",
            "Cut the JSON object out of the raw text, validate it and attach warnings and citations.",
        ),
        PipelineStage(
            6,
            "Error Classification",
            "medlens.services.errors",
            "Map remote status codes and messages onto user-facing failure kinds.",
        ),
        PipelineStage(
            7,
            "Chat Seeding",
            "medlens.services.chat_session",
            "Replace the active chat session with one grounded in the new report.",
        ),
    ]

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        """Expose the ordered list of stages for debugging and documentation."""

        return tuple(cls._STAGES)


__all__ = ["DocumentAnalysisPipeline", "PipelineStage"]
