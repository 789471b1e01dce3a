"""Gemini transcription of dictated clinical notes."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from google import genai
from google.genai import types

from medlens.config.settings import settings
from medlens.pipelines.analysis.types import EncodedPart
from medlens.services.errors import AnalysisError, TranscriptionError
from medlens.services.gemini_client import generate_content, resolve_client, response_text
from medlens.services.prompt_builder import TRANSCRIPTION_INSTRUCTION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptionResult:
    """Structured transcription outcome returned to controllers."""

    transcript: str
    media_type: str


class TranscribeService:
    """High-level facade for sending recorded audio to Gemini."""

    def __init__(self, model: str | None = None) -> None:
        self._model = model or settings.gemini.transcription_model

    async def transcribe(
        self,
        audio: EncodedPart,
        *,
        client: genai.Client | None = None,
    ) -> TranscriptionResult:
        """Return the transcript; an empty reply is an empty transcript."""

        gemini = resolve_client(client)
        if not audio.data:
            raise TranscriptionError("The uploaded audio file is empty.")

        contents = [
            audio.to_part(),
            types.Part.from_text(text=TRANSCRIPTION_INSTRUCTION),
        ]

        try:
            response = await generate_content(
                gemini,
                operation="transcription",
                model=self._model,
                contents=contents,
            )
        except AnalysisError:
            raise
        except Exception as exc:
            logger.exception("Transcription error: %s", exc)
            raise TranscriptionError() from exc

        transcript = response_text(response).strip()
        logger.info("Transcription complete. Length: %s", len(transcript))
        return TranscriptionResult(transcript=transcript, media_type=audio.media_type)


def get_transcribe_service() -> TranscribeService:
    """Return the default transcribe service instance."""

    return _DEFAULT_SERVICE


_DEFAULT_SERVICE = TranscribeService()


async def transcribe_audio(audio: EncodedPart, *, client: genai.Client | None = None) -> str:
    result = await get_transcribe_service().transcribe(audio, client=client)
    return result.transcript


__all__ = [
    "TranscribeService",
    "TranscriptionResult",
    "get_transcribe_service",
    "transcribe_audio",
]
