"""Tests for mode-dependent request composition."""

from __future__ import annotations

import pytest

from medlens.config.settings import settings
from medlens.pipelines.analysis import (
    AnalysisMode,
    AnalysisOptions,
    EncodedPart,
    FocusArea,
    GenerationSettings,
    UserRole,
    build_generation_settings,
    compose_request,
)
from medlens.services.errors import InvalidRequestConfigError
from medlens.services.prompt_builder import DEEP_MODE_INSTRUCTION, QUICK_MODE_INSTRUCTION

PDF_PART = EncodedPart(data="JVBERi0xLjc=", media_type="application/pdf")


def test_quick_mode_uses_fast_model_and_strict_json():
    request = compose_request([PDF_PART], AnalysisOptions(mode=AnalysisMode.QUICK))

    assert request.model == settings.gemini.fast_model
    assert request.config.response_mime_type == "application/json"
    assert request.config.thinking_config is None
    assert not request.config.tools
    assert QUICK_MODE_INSTRUCTION in request.prompt


def test_deep_mode_enables_thinking_and_search():
    request = compose_request([PDF_PART], AnalysisOptions(mode=AnalysisMode.DEEP))

    assert request.model == settings.gemini.analysis_model
    assert request.config.response_mime_type is None
    assert request.config.thinking_config.thinking_budget == settings.gemini.thinking_budget
    assert request.config.tools[0].google_search is not None
    assert DEEP_MODE_INSTRUCTION in request.prompt


def test_prompt_embeds_options_and_notes():
    options = AnalysisOptions(
        role=UserRole.CLINICIAN,
        focus_area=FocusArea.RISKS_AND_SAFETY,
        mode=AnalysisMode.QUICK,
        notes="Patient is 70 years old",
    )

    request = compose_request([PDF_PART, PDF_PART], options)

    assert "User Role: Clinician" in request.prompt
    assert "Focus Area: Risks and safety" in request.prompt
    assert "USER NOTES: Patient is 70 years old" in request.prompt
    assert request.part_count == 2
    # Documents first, then the prompt text.
    assert len(request.contents) == 3
    assert request.contents[-1].text == request.prompt


def test_blank_notes_are_omitted():
    request = compose_request([PDF_PART], AnalysisOptions(notes="   "))

    assert "USER NOTES" not in request.prompt


def test_search_and_strict_json_are_mutually_exclusive():
    with pytest.raises(InvalidRequestConfigError):
        GenerationSettings(
            model="gemini-2.5-pro",
            thinking_budget=1024,
            search_enabled=True,
            strict_json=True,
        )


def test_thinking_budget_must_be_positive():
    with pytest.raises(InvalidRequestConfigError):
        GenerationSettings(
            model="gemini-2.5-pro",
            thinking_budget=0,
            search_enabled=True,
            strict_json=False,
        )


def test_generation_settings_follow_mode():
    quick = build_generation_settings(AnalysisMode.QUICK)
    deep = build_generation_settings(AnalysisMode.DEEP)

    assert (quick.search_enabled, quick.strict_json, quick.thinking_budget) == (False, True, None)
    assert deep.search_enabled and not deep.strict_json
