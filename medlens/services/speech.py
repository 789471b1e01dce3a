"""Gemini text-to-speech for spoken analysis summaries."""

from __future__ import annotations

import io
import logging
import re
import wave
from dataclasses import dataclass

from google import genai
from google.genai import types

from medlens.config.settings import settings
from medlens.pipelines.analysis.encoding import encode_bytes
from medlens.pipelines.analysis.types import EncodedPart
from medlens.services.errors import AnalysisError, AudioGenerationError, classify
from medlens.services.gemini_client import first_inline_data, generate_content, resolve_client

logger = logging.getLogger(__name__)

_RATE_PATTERN = re.compile(r"rate=(\d+)")


@dataclass(frozen=True)
class SpeechResult:
    """Synthesised narration packaged as a playable WAV payload."""

    audio: EncodedPart
    voice_name: str
    sample_rate: int

    @property
    def data_uri(self) -> str:
        return self.audio.data_uri


class SpeechSynthesisService:
    """Generate narration audio with a prebuilt Gemini voice."""

    def __init__(
        self,
        *,
        voice_name: str | None = None,
        default_sample_rate: int = 24000,
    ) -> None:
        self._voice_name = voice_name or settings.gemini.voice_name
        self._default_sample_rate = default_sample_rate

    async def synthesize(
        self,
        text: str,
        *,
        client: genai.Client | None = None,
    ) -> SpeechResult:
        """Convert text to speech and return WAV audio."""

        gemini = resolve_client(client)
        config = types.GenerateContentConfig(
            response_modalities=[types.Modality.AUDIO],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(
                        voice_name=self._voice_name,
                    ),
                ),
            ),
        )

        try:
            response = await generate_content(
                gemini,
                operation="speech",
                model=settings.gemini.tts_model,
                contents=text,
                config=config,
            )
        except AnalysisError:
            raise
        except Exception as exc:
            logger.exception("TTS error for voice '%s'", self._voice_name)
            raise classify(exc) from exc

        blob = first_inline_data(response)
        if blob is None:
            raise AudioGenerationError()

        sample_rate = self._sample_rate(blob.mime_type)
        wav_bytes = self._to_wav_bytes(blob.data, blob.mime_type, sample_rate)
        return SpeechResult(
            audio=encode_bytes(wav_bytes, "audio/wav"),
            voice_name=self._voice_name,
            sample_rate=sample_rate,
        )

    def _sample_rate(self, mime_type: str | None) -> int:
        match = _RATE_PATTERN.search(mime_type or "")
        if match:
            return int(match.group(1))
        return self._default_sample_rate

    def _to_wav_bytes(self, audio: bytes, mime_type: str | None, sample_rate: int) -> bytes:
        # Gemini streams raw 16-bit mono PCM ("audio/L16;codec=pcm;rate=24000").
        if (mime_type or "").startswith("audio/wav"):
            return audio

        with io.BytesIO() as buffer:
            with wave.open(buffer, "wb") as wave_file:
                wave_file.setnchannels(1)
                wave_file.setsampwidth(2)
                wave_file.setframerate(sample_rate)
                wave_file.writeframes(audio)
            return buffer.getvalue()


def get_speech_service() -> SpeechSynthesisService:
    """Return the default speech synthesis service instance."""

    return _DEFAULT_SERVICE


_DEFAULT_SERVICE = SpeechSynthesisService()


async def generate_audio_summary(text: str, *, client: genai.Client | None = None) -> str:
    """Return the narration as a ``data:audio/wav;base64,...`` URI."""

    result = await get_speech_service().synthesize(text, client=client)
    return result.data_uri


__all__ = [
    "SpeechResult",
    "SpeechSynthesisService",
    "generate_audio_summary",
    "get_speech_service",
]
