"""Fakes for the Gemini SDK surface and for uploaded files."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace

ANALYSIS_PAYLOAD = {
    "plain_summary": "Drug X lowered blood pressure in adults.",
    "key_findings": ["Systolic pressure fell by 12 mmHg", "No serious adverse events"],
    "methods": "Randomized, double-blind, 400 participants.",
    "data_interpretation": "Effect was consistent across subgroups.",
    "risks": "Mild dizziness in 4% of participants.",
    "limitations": "Twelve-week follow-up only.",
    "patient_explanation": "The medicine helped lower blood pressure.",
    "clinician_explanation": "ACE inhibition reduced peripheral resistance.",
    "cross_comparison": "Not applicable",
    "clinical_takeaway": "Consider Drug X for stage 1 hypertension.",
    "markdown_report": "# Report\n\nDrug X lowered blood pressure.",
    "study_type": "Randomized controlled trial",
    "evidence_strength": "High",
    "evidence_clarity": "Medium",
    "document_quality": "Strong",
    "key_signals": ["RCT", "Blood pressure"],
}


def analysis_json(**overrides) -> str:
    return json.dumps({**ANALYSIS_PAYLOAD, **overrides})


def text_response(text, chunks=None):
    """Build a response envelope; ``chunks`` is a list of (title, uri) pairs."""

    candidates = []
    if chunks is not None:
        grounding_chunks = [
            SimpleNamespace(web=SimpleNamespace(title=title, uri=uri))
            for title, uri in chunks
        ]
        candidates.append(
            SimpleNamespace(
                grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks)
            )
        )
    return SimpleNamespace(text=text, candidates=candidates)


def inline_response(data: bytes, mime_type: str):
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    return SimpleNamespace(
        text=None,
        candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))],
    )


class FakeModels:
    """Replays queued responses; exceptions in the queue are raised."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    async def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        result = self.responses.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


class FakeChat:
    def __init__(self, replies):
        self.replies = list(replies)
        self.messages = []

    async def send_message(self, message):
        self.messages.append(message)
        result = self.replies.pop(0)
        if isinstance(result, BaseException):
            raise result
        return SimpleNamespace(text=result)


class FakeChats:
    def __init__(self, replies):
        self.replies = replies
        self.created = []

    def create(self, *, model, config=None):
        chat = FakeChat(self.replies)
        self.created.append({"model": model, "config": config, "chat": chat})
        return chat


class FakeClient:
    def __init__(self, responses=(), chat_replies=()):
        self.aio = SimpleNamespace(
            models=FakeModels(responses),
            chats=FakeChats(list(chat_replies)),
        )

    @property
    def calls(self):
        return self.aio.models.calls


class FakeUpload:
    """Minimal stand-in for ``UploadFile``.

    ``delay`` makes ``read()`` yield to the event loop first; ``events``
    collects ``("start"|"end", filename)`` pairs in the order they happen.
    """

    def __init__(
        self,
        filename,
        data=b"",
        content_type=None,
        error=None,
        close_error=None,
        delay=0.0,
        events=None,
    ):
        self.filename = filename
        self.content_type = content_type
        self._data = data
        self._error = error
        self._close_error = close_error
        self._delay = delay
        self._events = events if events is not None else []
        self.closed = False

    async def read(self):
        self._events.append(("start", self.filename))
        if self._delay:
            await asyncio.sleep(self._delay)
        self._events.append(("end", self.filename))
        if self._error is not None:
            raise self._error
        return self._data

    async def close(self):
        if self._close_error is not None:
            raise self._close_error
        self.closed = True
