"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
from pydantic import SecretStr

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from medlens.config.settings import settings  # noqa: E402


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.gemini, "api_key", SecretStr("test-key"))


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.gemini, "api_key", None)
