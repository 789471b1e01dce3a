"""Narration, speech and dictation endpoints.

None of these touch the chat session: each request is a single stateless
Gemini call (narration + speech are chained for `/audio/narration`).
"""

import logging

from fastapi import APIRouter, File, UploadFile

from medlens.pipelines.analysis.encoding import encode_recording
from medlens.services.narration import generate_spoken_script
from medlens.services.response_contract import AnalysisRecord
from medlens.services.speech import generate_audio_summary
from medlens.services.transcribe import transcribe_audio
from medlens.views import (
    NarrationResponse,
    ScriptResponse,
    SpeechRequest,
    SpeechResponse,
    TranscriptionResponse,
)

router = APIRouter(prefix="/audio", tags=["audio"])

logger = logging.getLogger(__name__)

_AUDIO_FILE_UPLOAD = File(...)


@router.post("/script", response_model=ScriptResponse)
async def create_script(record: AnalysisRecord) -> ScriptResponse:
    """Rewrite an analysis as a narration script (falls back to the summary)."""

    script = await generate_spoken_script(record)
    return ScriptResponse(script=script)


@router.post("/speech", response_model=SpeechResponse)
async def create_speech(request: SpeechRequest) -> SpeechResponse:
    """Convert text to speech and return it as a WAV data URI."""

    audio_url = await generate_audio_summary(request.text)
    return SpeechResponse(audio_url=audio_url)


@router.post("/narration", response_model=NarrationResponse)
async def create_narration(record: AnalysisRecord) -> NarrationResponse:
    """Script an analysis and voice it in one request."""

    script = await generate_spoken_script(record)
    audio_url = await generate_audio_summary(script)
    logger.info("Narration generated chars=%s", len(script))
    return NarrationResponse(script=script, audio_url=audio_url)


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe_note(
    audio_file: UploadFile = _AUDIO_FILE_UPLOAD,
) -> TranscriptionResponse:
    """Transcribe a dictated clinical note."""

    recording = await encode_recording(audio_file)
    transcript = await transcribe_audio(recording)
    return TranscriptionResponse(transcript=transcript)
