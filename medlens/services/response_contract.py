"""Pydantic models for validating the analysis JSON returned by Gemini.

Quick-mode responses are already constrained to JSON by the remote service,
but deep-mode responses run with search grounding enabled and therefore may
arrive wrapped in prose or Markdown fences. Both paths go through
:func:`normalize` so downstream code receives one immutable, type-safe record.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from medlens.services.errors import EmptyResponseError, MalformedResponseError

logger = logging.getLogger(__name__)

EvidenceLevel = Literal["Low", "Medium", "High"]
DocumentQuality = Literal["Limited", "Moderate", "Strong"]


class GroundingUrl(BaseModel):
    """A cited web source returned through search grounding."""

    title: str
    url: str

    model_config = ConfigDict(frozen=True)


class AnalysisRecord(BaseModel):
    # Content
    plain_summary: str
    key_findings: Tuple[str, ...]
    methods: str
    data_interpretation: str
    risks: str
    limitations: str
    patient_explanation: str
    clinician_explanation: str
    cross_comparison: str = ""
    clinical_takeaway: str
    markdown_report: str

    # Metadata & metrics
    study_type: str
    evidence_strength: EvidenceLevel
    evidence_clarity: EvidenceLevel
    document_quality: DocumentQuality
    key_signals: Tuple[str, ...] = ()

    # System
    processing_warnings: Optional[Tuple[str, ...]] = None
    grounding_urls: Optional[Tuple[GroundingUrl, ...]] = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("evidence_strength", "evidence_clarity", "document_quality", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @classmethod
    def from_json(
        cls,
        payload: str,
        *,
        warnings: Iterable[str] | None = None,
        grounding_urls: Iterable[GroundingUrl] | None = None,
    ) -> "AnalysisRecord":
        """Parse ``payload`` and attach system fields in a single construction."""

        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("Analysis payload is not a JSON object")

        data.pop("processing_warnings", None)
        data.pop("grounding_urls", None)

        warning_list = list(warnings or [])
        if warning_list:
            data["processing_warnings"] = warning_list
        if grounding_urls is not None:
            data["grounding_urls"] = list(grounding_urls)

        return cls.model_validate(data)


def extract_json_payload(raw_text: str) -> str:
    """Cut the JSON object out of raw model output.

    The first ``{`` to the last ``}`` wins; fence stripping is only a
    fallback for output without braces. Nested braces in surrounding prose
    are not handled.
    """

    cleaned = raw_text.strip()

    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace != -1 and last_brace != -1:
        return cleaned[first_brace : last_brace + 1]

    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```json", "", cleaned)
        cleaned = re.sub(r"^```", "", cleaned)
        cleaned = re.sub(r"```$", "", cleaned)

    return cleaned


def _lookup(source: Any, *names: str) -> Any:
    """Read the first present attribute or mapping key among ``names``."""

    if source is None:
        return None
    for name in names:
        if isinstance(source, Mapping):
            value = source.get(name)
        else:
            value = getattr(source, name, None)
        if value is not None:
            return value
    return None


def extract_grounding_urls(envelope: Any) -> list[GroundingUrl] | None:
    """Return cited sources from the response envelope, or ``None`` when absent."""

    candidates = _lookup(envelope, "candidates")
    if not candidates:
        return None

    metadata = _lookup(candidates[0], "grounding_metadata", "groundingMetadata")
    chunks = _lookup(metadata, "grounding_chunks", "groundingChunks")
    if chunks is None:
        return None

    urls: list[GroundingUrl] = []
    for chunk in chunks:
        web = _lookup(chunk, "web")
        uri = _lookup(web, "uri")
        title = _lookup(web, "title")
        if uri and title:
            urls.append(GroundingUrl(title=title, url=uri))
    return urls


def _truncate(value: str, max_length: int = 500) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def normalize(
    raw_text: str | None,
    envelope: Any = None,
    warnings: Iterable[str] | None = None,
) -> AnalysisRecord:
    """Build an ``AnalysisRecord`` from raw model output and its envelope."""

    if not raw_text:
        raise EmptyResponseError()

    payload = extract_json_payload(raw_text)
    grounding_urls = extract_grounding_urls(envelope)

    try:
        return AnalysisRecord.from_json(
            payload,
            warnings=warnings,
            grounding_urls=grounding_urls,
        )
    except (ValueError, ValidationError) as exc:
        logger.error(
            "Failed to parse analysis JSON: %s. Raw text: %s",
            exc,
            _truncate(raw_text),
        )
        raise MalformedResponseError() from exc


__all__ = [
    "AnalysisRecord",
    "GroundingUrl",
    "extract_grounding_urls",
    "extract_json_payload",
    "normalize",
]
