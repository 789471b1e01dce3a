"""Partial-failure aggregation (Stage 03) of the document analysis pipeline.

Every file is encoded concurrently and each attempt settles on its own: one
unreadable upload only becomes a warning on the final record. The remote
service is called once, with the successful parts only, and only when at
least one file survived.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Sequence

from google import genai

from medlens.services.errors import AnalysisError, EncodingError, NoUsableInputError, classify
from medlens.services.gemini_client import resolve_client
from medlens.services.response_contract import AnalysisRecord
from medlens.telemetry import increment_failure, increment_file_encode

from .encoding import SourceFile, encode, file_name_of
from .llm import call_analysis_model
from .prompts import compose_request
from .types import AnalysisOptions, Fulfilled, Rejected, SubmissionOutcome

logger = logging.getLogger("medlens.services.analysis_pipeline")


async def settle(file: SourceFile) -> SubmissionOutcome:
    """Encode one file; any failure becomes a ``Rejected`` outcome for that file only."""

    file_name = file_name_of(file)
    try:
        part = await encode(file)
    except EncodingError as exc:
        reason = exc.message
    except Exception as exc:
        logger.exception("Unexpected error while encoding file=%s", file_name)
        reason = str(exc) or "Unknown error"
    else:
        increment_file_encode("success")
        return Fulfilled(part=part, file_name=file_name)

    increment_file_encode("failure")
    logger.warning("Could not encode file=%s: %s", file_name, reason)
    return Rejected(file_name=file_name, reason=reason)


async def encode_all(files: Iterable[SourceFile]) -> list[SubmissionOutcome]:
    """Join-all over every encode attempt; results keep the input order."""

    return list(await asyncio.gather(*(settle(file) for file in files)))


def partition(
    outcomes: Sequence[SubmissionOutcome],
) -> tuple[list[Fulfilled], list[Rejected]]:
    fulfilled = [outcome for outcome in outcomes if isinstance(outcome, Fulfilled)]
    rejected = [outcome for outcome in outcomes if isinstance(outcome, Rejected)]
    return fulfilled, rejected


async def submit_all(
    files: Sequence[SourceFile],
    options: AnalysisOptions,
    *,
    client: genai.Client | None = None,
) -> AnalysisRecord:
    """Analyze every usable file in one remote call and return the record."""

    gemini = resolve_client(client)

    try:
        outcomes = await encode_all(files)
        fulfilled, rejected = partition(outcomes)

        if not fulfilled:
            if rejected:
                first = rejected[0]
                raise NoUsableInputError(
                    f"Failed to process all files. {first.file_name}: {first.reason}"
                )
            raise NoUsableInputError()

        logger.info(
            "Submitting analysis mode=%s role=%s focus=%s files=%s rejected=%s",
            options.mode.value,
            options.role.value,
            options.focus_area.value,
            len(fulfilled),
            len(rejected),
        )

        request = compose_request([outcome.part for outcome in fulfilled], options)
        return await call_analysis_model(
            gemini,
            request,
            [outcome.warning for outcome in rejected],
        )
    except AnalysisError as exc:
        increment_failure(exc.code)
        raise
    except Exception as exc:
        error = classify(exc)
        increment_failure(error.code)
        logger.exception("Gemini analysis error: %s", exc)
        raise error from exc


__all__ = ["encode_all", "partition", "settle", "submit_all"]
