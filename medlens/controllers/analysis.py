"""Document analysis endpoint.

For a stage-by-stage map see
`medlens.pipelines.analysis.flow.DocumentAnalysisPipeline`. The POST
`/analysis` endpoint performs:

1. Concurrent encoding of every uploaded document (failures become warnings).
2. One Gemini call with the successful parts, shaped by the analysis mode.
3. Normalization of the JSON record, with citations when search grounding ran.
4. Replacement of the active chat session with one seeded by the report.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, File, Form, UploadFile

from medlens.controllers.dependencies import ChatManagerDep
from medlens.pipelines.analysis import (
    AnalysisMode,
    AnalysisOptions,
    DocumentAnalysisPipeline,
    FocusArea,
    UserRole,
    submit_all,
)
from medlens.views import AnalysisResponse

router = APIRouter(prefix="/analysis", tags=["analysis"])

logger = logging.getLogger(__name__)

PIPELINE_STAGES = tuple(DocumentAnalysisPipeline.describe())
"""Ordered pipeline metadata used for quick reference and debugging."""

_FILES_UPLOAD = File(default=None)
_ROLE_FORM = Form(UserRole.STUDENT)
_FOCUS_FORM = Form(FocusArea.OVERALL_SUMMARY)
_MODE_FORM = Form(AnalysisMode.DEEP)
_NOTES_FORM = Form("")


@router.post("", response_model=AnalysisResponse, response_model_exclude_none=True)
async def analyze_documents(
    chat_manager: ChatManagerDep,
    files: Optional[List[UploadFile]] = _FILES_UPLOAD,
    role: UserRole = _ROLE_FORM,
    focus_area: FocusArea = _FOCUS_FORM,
    mode: AnalysisMode = _MODE_FORM,
    notes: str = _NOTES_FORM,
) -> AnalysisResponse:
    """Analyze the uploaded PDFs, images and videos in a single Gemini call."""

    options = AnalysisOptions(role=role, focus_area=focus_area, mode=mode, notes=notes)
    uploads = list(files or [])

    record = await submit_all(uploads, options)

    logger.info(
        "Analysis complete files=%s warnings=%s citations=%s",
        len(uploads),
        len(record.processing_warnings or []),
        len(record.grounding_urls or []),
    )

    session = chat_manager.init_session(record.markdown_report)
    return AnalysisResponse(analysis=record, chat_ready=session is not None)
