"""Document analysis pipeline package.

Modules are organised by the order in which `/analysis` executes:

1. `encoding` – validate uploads and produce base64 payloads.
2. `prompts` – assemble the instruction block and Gemini configuration.
3. `aggregation` – fan out encodes, reconcile partial failures.
4. `llm` – call the analysis model and normalize its response.
5. `flow` – human-readable description of the end-to-end stages.

The FastAPI controller imports from here so contributors can jump straight
to the relevant stage without wading through a single monolithic file.
"""

from .aggregation import encode_all, partition, settle, submit_all
from .encoding import LocalFile, encode, encode_bytes, file_name_of, resolve_media_type
from .flow import DocumentAnalysisPipeline, PipelineStage
from .llm import call_analysis_model
from .prompts import build_generate_config, build_generation_settings, compose_request
from .types import (
    AnalysisMode,
    AnalysisOptions,
    AnalysisRequest,
    EncodedPart,
    FocusArea,
    Fulfilled,
    GenerationSettings,
    Rejected,
    SubmissionOutcome,
    UserRole,
)

__all__ = [
    "AnalysisMode",
    "AnalysisOptions",
    "AnalysisRequest",
    "DocumentAnalysisPipeline",
    "EncodedPart",
    "FocusArea",
    "Fulfilled",
    "GenerationSettings",
    "LocalFile",
    "PipelineStage",
    "Rejected",
    "SubmissionOutcome",
    "UserRole",
    "build_generate_config",
    "build_generation_settings",
    "call_analysis_model",
    "compose_request",
    "encode",
    "encode_all",
    "encode_bytes",
    "file_name_of",
    "partition",
    "resolve_media_type",
    "settle",
    "submit_all",
]
