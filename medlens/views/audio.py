"""Schemas for narration, speech and transcription requests."""

from pydantic import BaseModel, Field


class SpeechRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ScriptResponse(BaseModel):
    script: str


class SpeechResponse(BaseModel):
    audio_url: str = Field(..., description="data:audio/wav;base64 URI")


class NarrationResponse(BaseModel):
    script: str
    audio_url: str


class TranscriptionResponse(BaseModel):
    transcript: str
