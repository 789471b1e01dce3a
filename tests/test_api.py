"""Integration-style tests for the HTTP endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from fakes import FakeClient, analysis_json
from medlens.main import app
from medlens.middleware import ERROR_CODE_HEADER
from medlens.services.chat_session import ChatSessionManager
from medlens.services.errors import RateLimitedError
from medlens.services.response_contract import normalize


@pytest.fixture(autouse=True)
def fresh_chat_manager():
    """Every test starts without an active chat session."""

    app.state.chat_manager = ChatSessionManager()
    yield


@pytest.fixture
def fake_gemini(api_key, monkeypatch: pytest.MonkeyPatch) -> FakeClient:
    client = FakeClient(chat_replies=["It was a randomized trial."])
    monkeypatch.setattr(
        "medlens.services.gemini_client.create_gemini_client",
        lambda api_key: client,
    )
    return client


def test_analysis_returns_record_and_seeds_chat(fake_gemini, monkeypatch):
    captured = {}

    async def fake_submit_all(files, options):
        captured["names"] = [upload.filename for upload in files]
        captured["options"] = options
        return normalize(analysis_json(), warnings=["Unable to include b.pdf in analysis: corrupt"])

    monkeypatch.setattr("medlens.controllers.analysis.submit_all", fake_submit_all)
    client = TestClient(app)

    response = client.post(
        "/analysis",
        data={"role": "Clinician", "focus_area": "Risks and safety", "mode": "quick"},
        files=[
            ("files", ("a.pdf", b"%PDF-a", "application/pdf")),
            ("files", ("b.pdf", b"", "application/pdf")),
        ],
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["chat_ready"] is True
    assert payload["analysis"]["processing_warnings"] == [
        "Unable to include b.pdf in analysis: corrupt"
    ]
    assert "grounding_urls" not in payload["analysis"]
    assert captured["names"] == ["a.pdf", "b.pdf"]
    assert captured["options"].mode.value == "quick"
    assert captured["options"].role.value == "Clinician"

    chat = client.post("/chat/messages", json={"message": "What design was used?"})

    assert chat.status_code == 200
    body = chat.json()
    assert body["user_turn"]["role"] == "user"
    assert body["model_turn"]["text"] == "It was a randomized trial."
    instruction = fake_gemini.aio.chats.created[0]["config"].system_instruction
    assert instruction.endswith("# Report\n\nDrug X lowered blood pressure.")


def test_analysis_without_api_key_reports_missing_credential(no_api_key):
    client = TestClient(app)

    response = client.post(
        "/analysis",
        files=[("files", ("a.pdf", b"%PDF-a", "application/pdf"))],
    )

    assert response.status_code == 503
    assert response.json()["code"] == "MissingCredential"


def test_classified_errors_are_rendered_with_code_and_category(fake_gemini, monkeypatch):
    async def failing_submit_all(files, options):
        raise RateLimitedError()

    monkeypatch.setattr("medlens.controllers.analysis.submit_all", failing_submit_all)
    client = TestClient(app)

    response = client.post(
        "/analysis",
        files=[("files", ("a.pdf", b"%PDF-a", "application/pdf"))],
    )

    assert response.status_code == 429
    assert response.json() == {
        "detail": RateLimitedError.default_message,
        "code": "RateLimited",
        "category": "wait_and_retry",
    }


def test_chat_before_analysis_is_conflict():
    client = TestClient(app)

    response = client.post("/chat/messages", json={"message": "hello"})

    assert response.status_code == 409
    assert response.json()["code"] == "SessionNotReady"


def test_chat_session_can_be_restored_from_saved_report(fake_gemini):
    client = TestClient(app)

    response = client.post("/chat/session", json={"context": "# Saved report"})

    assert response.status_code == 200
    assert response.json()["ready"] is True
    assert app.state.chat_manager.session.id == response.json()["session_id"]


def test_transcribe_defaults_recording_type(api_key, monkeypatch):
    seen = {}

    async def fake_transcribe_audio(recording):
        seen["media_type"] = recording.media_type
        return "Aspirin 81 mg daily."

    monkeypatch.setattr("medlens.controllers.audio.transcribe_audio", fake_transcribe_audio)
    client = TestClient(app)

    response = client.post(
        "/audio/transcribe",
        files={"audio_file": ("note", b"opus", "application/octet-stream")},
    )

    assert response.status_code == 200
    assert response.json() == {"transcript": "Aspirin 81 mg daily."}
    assert seen["media_type"] == "audio/webm"


def test_narration_chains_script_and_speech(monkeypatch):
    async def fake_script(record):
        return f"Narrating: {record.study_type}"

    async def fake_speech(text):
        return "data:audio/wav;base64,AAAA"

    monkeypatch.setattr("medlens.controllers.audio.generate_spoken_script", fake_script)
    monkeypatch.setattr("medlens.controllers.audio.generate_audio_summary", fake_speech)
    client = TestClient(app)

    response = client.post("/audio/narration", json=normalize(analysis_json()).model_dump())

    assert response.status_code == 200
    assert response.json() == {
        "script": "Narrating: Randomized controlled trial",
        "audio_url": "data:audio/wav;base64,AAAA",
    }


def test_visual_summary_endpoint(monkeypatch):
    async def fake_visual_summary(summary):
        return "data:image/png;base64,iVBO"

    monkeypatch.setattr("medlens.controllers.images.generate_visual_summary", fake_visual_summary)
    client = TestClient(app)

    response = client.post("/images/summary", json={"summary": "Drug X"})

    assert response.status_code == 200
    assert response.json() == {"image_url": "data:image/png;base64,iVBO"}


def test_health_reports_credential_state(no_api_key):
    client = TestClient(app)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["gemini"] == "missing"


def test_error_responses_are_counted_by_failure_code():
    labels = {"route": "/chat/messages", "code": "SessionNotReady"}
    before = REGISTRY.get_sample_value("analysis_error_responses_total", labels) or 0.0
    client = TestClient(app)

    response = client.post("/chat/messages", json={"message": "hello"})

    assert response.headers[ERROR_CODE_HEADER] == "SessionNotReady"
    assert REGISTRY.get_sample_value("analysis_error_responses_total", labels) == before + 1
