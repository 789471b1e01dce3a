"""Typed containers shared across the document analysis pipeline.

These dataclasses intentionally live in their own module so the other
stages (`encoding`, `prompts`, `aggregation`) can import them without
creating circular dependencies.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from google.genai import types

from medlens.services.errors import InvalidRequestConfigError


class UserRole(str, Enum):
    STUDENT = "Student"
    CLINICIAN = "Clinician"
    RESEARCHER = "Researcher"
    OTHER = "Other"


class FocusArea(str, Enum):
    OVERALL_SUMMARY = "Overall summary"
    METHODS_AND_DESIGN = "Methods and design quality"
    RESULTS_AND_GRAPHS = "Results and graphs"
    RISKS_AND_SAFETY = "Risks and safety"
    LIMITATIONS_AND_BIAS = "Limitations and bias"


class AnalysisMode(str, Enum):
    DEEP = "deep"
    QUICK = "quick"


@dataclass(frozen=True)
class EncodedPart:
    """One file in transport-safe form: base64 text plus its media type."""

    data: str
    media_type: str

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    @property
    def data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.data}"

    def to_part(self) -> types.Part:
        """Return the Gemini inline-data part for this payload."""

        return types.Part.from_bytes(data=self.raw_bytes(), mime_type=self.media_type)


@dataclass(frozen=True)
class Fulfilled:
    """A file that was read and encoded successfully."""

    part: EncodedPart
    file_name: str


@dataclass(frozen=True)
class Rejected:
    """A file that could not be included, with a human-readable reason."""

    file_name: str
    reason: str

    @property
    def warning(self) -> str:
        return f"Unable to include {self.file_name} in analysis: {self.reason}"


SubmissionOutcome = Union[Fulfilled, Rejected]


@dataclass(frozen=True)
class AnalysisOptions:
    """Per-request configuration supplied by the caller."""

    role: UserRole = UserRole.STUDENT
    focus_area: FocusArea = FocusArea.OVERALL_SUMMARY
    mode: AnalysisMode = AnalysisMode.DEEP
    notes: str = ""


@dataclass(frozen=True)
class GenerationSettings:
    """Mode-dependent remote capabilities for one analysis request."""

    model: str
    thinking_budget: int | None
    search_enabled: bool
    strict_json: bool

    def __post_init__(self) -> None:
        # Gemini only honours response_mime_type when no tools are attached.
        if self.search_enabled and self.strict_json:
            raise InvalidRequestConfigError()
        if self.thinking_budget is not None and self.thinking_budget <= 0:
            raise InvalidRequestConfigError("Thinking budget must be a positive number.")


@dataclass(frozen=True)
class AnalysisRequest:
    """Fully composed payload handed to ``client.aio.models.generate_content``."""

    model: str
    contents: Sequence[types.Part]
    config: types.GenerateContentConfig
    settings: GenerationSettings
    prompt: str
    part_count: int = 0


__all__ = [
    "AnalysisMode",
    "AnalysisOptions",
    "AnalysisRequest",
    "EncodedPart",
    "FocusArea",
    "Fulfilled",
    "GenerationSettings",
    "Rejected",
    "SubmissionOutcome",
    "UserRole",
]
