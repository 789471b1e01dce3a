"""Tests for document encoding and upload validation."""

from __future__ import annotations

import asyncio
import base64

import pytest

from medlens.pipelines.analysis.encoding import (
    LocalFile,
    encode,
    encode_recording,
    resolve_media_type,
)
from medlens.services.errors import EncodingError
from fakes import FakeUpload


def test_encode_returns_base64_payload_and_closes_file():
    upload = FakeUpload("scan.png", b"\x89PNG data", "image/png")

    part = asyncio.run(encode(upload))

    assert part.media_type == "image/png"
    assert base64.b64decode(part.data) == b"\x89PNG data"
    assert part.data_uri.startswith("data:image/png;base64,")
    assert upload.closed


@pytest.mark.parametrize(
    ("filename", "content_type", "expected"),
    [
        ("trial.pdf", "application/pdf", "application/pdf"),
        ("trial.pdf", None, "application/pdf"),
        ("xray.JPG", "application/octet-stream", "image/jpeg"),
        ("echo.mov", "", "video/quicktime"),
        ("slide.tif", None, "image/tiff"),
    ],
)
def test_resolve_media_type_falls_back_to_extension(filename, content_type, expected):
    assert resolve_media_type(filename, content_type) == expected


def test_resolve_media_type_rejects_unknown_formats():
    with pytest.raises(EncodingError) as exc_info:
        resolve_media_type("notes.docx", "application/msword")

    assert exc_info.value.message == "Unsupported file format"


def test_read_failure_becomes_encoding_error_with_reason():
    upload = FakeUpload("broken.pdf", content_type="application/pdf", error=OSError("corrupt"))

    with pytest.raises(EncodingError) as exc_info:
        asyncio.run(encode(upload))

    assert exc_info.value.message == "corrupt"


def test_empty_file_is_rejected():
    upload = FakeUpload("empty.pdf", b"", "application/pdf")

    with pytest.raises(EncodingError, match="File is empty"):
        asyncio.run(encode(upload))


def test_oversized_file_is_rejected():
    upload = FakeUpload("big.pdf", b"x" * (2 * 1024 * 1024 + 1), "application/pdf")

    with pytest.raises(EncodingError, match="File exceeds 2MB limit"):
        asyncio.run(encode(upload, max_bytes=2 * 1024 * 1024))


def test_local_file_reads_from_disk(tmp_path):
    path = tmp_path / "report.pdf"
    path.write_bytes(b"%PDF-1.7")

    part = asyncio.run(encode(LocalFile(path)))

    assert part.media_type == "application/pdf"
    assert part.raw_bytes() == b"%PDF-1.7"


def test_recording_defaults_to_webm():
    upload = FakeUpload("note", b"opus", "application/octet-stream")

    part = asyncio.run(encode_recording(upload))

    assert part.media_type == "audio/webm"
    assert part.raw_bytes() == b"opus"


def test_empty_recording_is_rejected():
    with pytest.raises(EncodingError):
        asyncio.run(encode_recording(FakeUpload("note.webm", b"", "audio/webm")))


@pytest.mark.parametrize(
    "upload",
    [
        FakeUpload("notes.docx", b"doc", "application/msword"),
        FakeUpload("broken.pdf", content_type="application/pdf", error=OSError("corrupt")),
        FakeUpload("odd.pdf", "not bytes", "application/pdf"),
    ],
    ids=["unsupported", "read-fault", "non-bytes"],
)
def test_rejected_uploads_are_still_closed(upload):
    with pytest.raises(EncodingError):
        asyncio.run(encode(upload))

    assert upload.closed


def test_close_failure_is_an_encoding_error():
    upload = FakeUpload("a.pdf", b"%PDF", "application/pdf", close_error=OSError("detached"))

    with pytest.raises(EncodingError, match="detached"):
        asyncio.run(encode(upload))


@pytest.mark.parametrize(
    ("limit", "expected"),
    [
        (512 * 1024, "File exceeds 512KB limit"),
        (100, "File exceeds 100 bytes limit"),
    ],
)
def test_small_limits_are_reported_exactly(limit, expected):
    upload = FakeUpload("big.pdf", b"x" * (limit + 1), "application/pdf")

    with pytest.raises(EncodingError) as exc_info:
        asyncio.run(encode(upload, max_bytes=limit))

    assert exc_info.value.message == expected
