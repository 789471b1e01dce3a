"""Follow-up chat grounded in the most recent analysis report.

A :class:`ChatSessionManager` owns at most one :class:`ChatSession`. Every
``init_session`` call builds a brand-new Gemini chat handle and replaces the
previous one wholesale, so turns sent afterwards can never reach an older
context. The manager itself is created by ``create_app`` and handed to the
routers through a dependency; nothing here is module-global.

Turns against one session must not overlap: callers await each reply before
sending the next message.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from google import genai
from google.genai import types
from google.genai.chats import AsyncChat

from medlens.config.settings import settings
from medlens.services.errors import (
    AnalysisError,
    MissingCredentialError,
    SessionNotReadyError,
    classify,
)
from medlens.services.gemini_client import resolve_client, response_text
from medlens.services.prompt_builder import build_chat_instruction
from medlens.telemetry import increment_failure, observe_remote_call

logger = logging.getLogger(__name__)
chat_logger = logging.getLogger("medlens.logs.chat")

FALLBACK_REPLY = "I couldn't generate a response."


@dataclass(frozen=True)
class ChatTurn:
    """One message of the chat transcript (the transcript belongs to the caller)."""

    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: datetime


def make_turn(role: Literal["user", "model"], text: str) -> ChatTurn:
    return ChatTurn(
        id=uuid4().hex,
        role=role,
        text=text,
        timestamp=datetime.now(timezone.utc),
    )


@dataclass
class ChatSession:
    """A remote chat handle bound to one fixed system context."""

    handle: AsyncChat
    context: str
    model: str
    id: str = field(default_factory=lambda: uuid4().hex)

    async def send(self, message: str) -> str:
        start_time = time.perf_counter()
        try:
            response = await self.handle.send_message(message)
        except Exception:
            observe_remote_call("chat", "error", time.perf_counter() - start_time)
            raise
        observe_remote_call("chat", "success", time.perf_counter() - start_time)
        return response_text(response)


def create_chat_session(
    client: genai.Client,
    context: str,
    *,
    model: str | None = None,
) -> ChatSession:
    """Open a new chat whose system instruction is the policy plus ``context``."""

    target_model = model or settings.gemini.chat_model
    handle = client.aio.chats.create(
        model=target_model,
        config=types.GenerateContentConfig(
            system_instruction=build_chat_instruction(context),
        ),
    )
    return ChatSession(handle=handle, context=context, model=target_model)


class ChatSessionManager:
    """Hold the single active chat session and route turns to it."""

    def __init__(self) -> None:
        self._session: ChatSession | None = None

    @property
    def is_ready(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> ChatSession | None:
        return self._session

    def init_session(
        self,
        context_text: str,
        *,
        client: genai.Client | None = None,
    ) -> ChatSession | None:
        """Replace the active session; without a credential chat stays unavailable."""

        try:
            gemini = resolve_client(client)
        except MissingCredentialError:
            logger.warning("Chat unavailable: no Gemini API key configured")
            return None

        session = create_chat_session(gemini, context_text)
        previous = self._session
        self._session = session

        logger.info(
            "Chat session ready id=%s model=%s context_chars=%s replaced=%s",
            session.id,
            session.model,
            len(context_text),
            previous.id if previous else None,
        )
        return session

    async def send_turn(self, message: str) -> str:
        """Forward ``message`` to the active session and return the reply text."""

        session = self._session
        if session is None:
            raise SessionNotReadyError()

        chat_logger.info("user | session=%s | text=%s", session.id, message)
        try:
            reply = await session.send(message)
        except AnalysisError as exc:
            increment_failure(exc.code)
            raise
        except Exception as exc:
            error = classify(exc)
            increment_failure(error.code)
            logger.exception("Chat turn failed session=%s", session.id)
            raise error from exc

        reply = reply or FALLBACK_REPLY
        chat_logger.info("model | session=%s | text=%s", session.id, reply)
        return reply


__all__ = [
    "FALLBACK_REPLY",
    "ChatSession",
    "ChatSessionManager",
    "ChatTurn",
    "create_chat_session",
    "make_turn",
]
