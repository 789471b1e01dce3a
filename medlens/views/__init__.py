"""Pydantic schemas used as views in the MVC architecture."""

from .analysis import AnalysisResponse
from .audio import (
    NarrationResponse,
    ScriptResponse,
    SpeechRequest,
    SpeechResponse,
    TranscriptionResponse,
)
from .chat import (
    ChatExchangeResponse,
    ChatMessageRequest,
    ChatSessionRequest,
    ChatSessionResponse,
    ChatTurnView,
)
from .common import ErrorResponse
from .images import VisualSummaryRequest, VisualSummaryResponse

__all__ = [
    "AnalysisResponse",
    "ChatExchangeResponse",
    "ChatMessageRequest",
    "ChatSessionRequest",
    "ChatSessionResponse",
    "ChatTurnView",
    "ErrorResponse",
    "NarrationResponse",
    "ScriptResponse",
    "SpeechRequest",
    "SpeechResponse",
    "TranscriptionResponse",
    "VisualSummaryRequest",
    "VisualSummaryResponse",
]
