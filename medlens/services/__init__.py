"""Service layer helpers for the Gemini integration."""

from .errors import (
    AnalysisError,
    AudioGenerationError,
    FailureCategory,
    FailureKind,
    GenerationError,
    MissingCredentialError,
    RemoteServiceError,
    SessionNotReadyError,
    TranscriptionError,
    classify,
    classify_signal,
)
from .gemini_client import create_gemini_client, has_api_key, resolve_client
from .response_contract import AnalysisRecord, GroundingUrl, normalize
from .chat_session import ChatSessionManager, ChatTurn
from .speech import (
    SpeechResult,
    SpeechSynthesisService,
    generate_audio_summary,
    get_speech_service,
)
from .transcribe import (
    TranscribeService,
    TranscriptionResult,
    get_transcribe_service,
    transcribe_audio,
)
from .narration import generate_spoken_script
from .illustration import generate_visual_summary

__all__ = [
    "AnalysisError",
    "AnalysisRecord",
    "AudioGenerationError",
    "ChatSessionManager",
    "ChatTurn",
    "FailureCategory",
    "FailureKind",
    "GenerationError",
    "GroundingUrl",
    "MissingCredentialError",
    "RemoteServiceError",
    "SessionNotReadyError",
    "SpeechResult",
    "SpeechSynthesisService",
    "TranscribeService",
    "TranscriptionError",
    "TranscriptionResult",
    "classify",
    "classify_signal",
    "create_gemini_client",
    "generate_audio_summary",
    "generate_spoken_script",
    "generate_visual_summary",
    "get_speech_service",
    "get_transcribe_service",
    "has_api_key",
    "normalize",
    "resolve_client",
    "transcribe_audio",
]
