"""Tests for the single-session chat manager."""

from __future__ import annotations

import asyncio

import pytest

from fakes import FakeClient
from medlens.config.settings import settings
from medlens.services.chat_session import FALLBACK_REPLY, ChatSessionManager
from medlens.services.errors import RateLimitedError, SessionNotReadyError
from medlens.services.prompt_builder import CHAT_SYSTEM_INSTRUCTION


def test_send_before_init_is_not_ready():
    manager = ChatSessionManager()

    with pytest.raises(SessionNotReadyError):
        asyncio.run(manager.send_turn("hello"))
    assert not manager.is_ready


def test_session_is_seeded_with_report_context(api_key):
    client = FakeClient(chat_replies=["The trial enrolled 400 adults."])
    manager = ChatSessionManager()

    session = manager.init_session("# Report\nDrug X study", client=client)
    reply = asyncio.run(manager.send_turn("How many participants?"))

    assert manager.is_ready
    assert reply == "The trial enrolled 400 adults."
    created = client.aio.chats.created[0]
    instruction = created["config"].system_instruction
    assert instruction.startswith(CHAT_SYSTEM_INSTRUCTION)
    assert instruction.endswith("DOCUMENT CONTEXT:\n# Report\nDrug X study")
    assert session.context == "# Report\nDrug X study"


def test_reinit_replaces_previous_session(api_key):
    first_client = FakeClient(chat_replies=["old"])
    second_client = FakeClient(chat_replies=["new"])
    manager = ChatSessionManager()

    first = manager.init_session("first report", client=first_client)
    second = manager.init_session("second report", client=second_client)
    reply = asyncio.run(manager.send_turn("which report?"))

    assert first.id != second.id
    assert manager.session is second
    assert reply == "new"
    assert first_client.aio.chats.created[0]["chat"].messages == []


def test_empty_reply_uses_fallback(api_key):
    manager = ChatSessionManager()
    manager.init_session("report", client=FakeClient(chat_replies=[""]))

    assert asyncio.run(manager.send_turn("anything?")) == FALLBACK_REPLY


def test_remote_failure_is_classified(api_key):
    manager = ChatSessionManager()
    manager.init_session("report", client=FakeClient(chat_replies=[Exception("quota exceeded")]))

    with pytest.raises(RateLimitedError):
        asyncio.run(manager.send_turn("anything?"))
    assert manager.is_ready


def test_init_without_credential_keeps_previous_session(api_key, monkeypatch):
    manager = ChatSessionManager()
    session = manager.init_session("report", client=FakeClient(chat_replies=["ok"]))

    monkeypatch.setattr(settings.gemini, "api_key", None)

    assert manager.init_session("another report") is None
    assert manager.session is session
