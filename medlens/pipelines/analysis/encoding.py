"""Document ingestion helpers (Stage 01 of the analysis pipeline)."""

from __future__ import annotations

import base64
import inspect
import mimetypes
from pathlib import Path
from typing import Any, Final, Protocol

from fastapi.concurrency import run_in_threadpool

from medlens.config.settings import settings
from medlens.services.errors import EncodingError

from .types import EncodedPart

_ALLOWED_MEDIA_TYPES: Final[set[str]] = {
    "application/pdf",
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/tiff",
    "image/tif",
    "video/mp4",
    "video/quicktime",
    "video/webm",
    "video/x-m4v",
}

_MEGABYTE: Final = 1024 * 1024

_EXTENSION_MEDIA_TYPES: Final[dict[str, str]] = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "webm": "video/webm",
}


class SourceFile(Protocol):
    """Anything that looks like an upload: a name, a media type and ``read()``."""

    filename: str | None
    content_type: str | None

    def read(self) -> Any: ...


class LocalFile:
    """Adapter exposing a file on disk through the upload interface."""

    def __init__(self, path: str | Path, content_type: str | None = None) -> None:
        self.path = Path(path)
        self.filename = self.path.name
        self.content_type = content_type

    async def read(self) -> bytes:
        return await run_in_threadpool(self.path.read_bytes)


def file_name_of(file: Any) -> str:
    """Return the display name used in warnings for ``file``."""

    name = getattr(file, "filename", None) or getattr(file, "name", None)
    return str(name) if name else "unnamed file"


def resolve_media_type(filename: str | None, content_type: str | None) -> str:
    """Accept PDFs, images and videos, trusting the extension when the type is missing."""

    declared = (content_type or "").split(";")[0].strip().lower()
    if declared in _ALLOWED_MEDIA_TYPES:
        return declared

    extension = Path(filename or "").suffix.lower().lstrip(".")
    if extension in _EXTENSION_MEDIA_TYPES:
        return _EXTENSION_MEDIA_TYPES[extension]

    guessed_type, _ = mimetypes.guess_type(filename or "")
    if guessed_type in _ALLOWED_MEDIA_TYPES:
        return guessed_type

    raise EncodingError("Unsupported file format")


def encode_bytes(data: bytes, media_type: str) -> EncodedPart:
    """Encode an in-memory blob (documents, recordings, synthesized audio)."""

    return EncodedPart(
        data=base64.b64encode(data).decode("ascii"),
        media_type=media_type,
    )


def _format_limit(limit: int) -> str:
    if limit >= _MEGABYTE and limit % _MEGABYTE == 0:
        return f"{limit // _MEGABYTE}MB"
    if limit >= 1024 and limit % 1024 == 0:
        return f"{limit // 1024}KB"
    return f"{limit} bytes"


async def close_file(file: SourceFile) -> None:
    """Release the upload; a failing close counts against the file."""

    close = getattr(file, "close", None)
    if close is None:
        return
    try:
        closed = close()
        if inspect.isawaitable(closed):
            await closed
    except Exception as exc:
        raise EncodingError(str(exc) or "File reading error") from exc


async def read_file_bytes(file: SourceFile) -> bytes:
    """Load the upload fully into memory, surfacing read faults as ``EncodingError``."""

    try:
        result = file.read()
        if inspect.isawaitable(result):
            result = await result
    except EncodingError:
        raise
    except Exception as exc:
        raise EncodingError(str(exc) or "File reading error") from exc
    finally:
        await close_file(file)

    if not isinstance(result, (bytes, bytearray)):
        raise EncodingError("Failed to read file")

    return bytes(result)


async def encode(file: SourceFile, *, max_bytes: int | None = None) -> EncodedPart:
    """Turn one upload into an ``EncodedPart`` or raise ``EncodingError``."""

    try:
        media_type = resolve_media_type(
            getattr(file, "filename", None),
            getattr(file, "content_type", None),
        )
    except EncodingError:
        await close_file(file)
        raise
    data = await read_file_bytes(file)

    limit = max_bytes or settings.uploads.max_file_bytes
    if not data:
        raise EncodingError("File is empty")
    if len(data) > limit:
        raise EncodingError(f"File exceeds {_format_limit(limit)} limit")

    return encode_bytes(data, media_type)


async def encode_recording(file: SourceFile) -> EncodedPart:
    """Encode a dictated note; browsers record ``audio/webm`` when no type is sent."""

    content_type = (getattr(file, "content_type", None) or "").split(";")[0].strip()
    if not content_type or content_type == "application/octet-stream":
        content_type = settings.uploads.recording_media_type

    data = await read_file_bytes(file)
    if not data:
        raise EncodingError("Uploaded audio file is empty")
    return encode_bytes(data, content_type)


__all__ = [
    "LocalFile",
    "SourceFile",
    "close_file",
    "encode",
    "encode_bytes",
    "encode_recording",
    "file_name_of",
    "read_file_bytes",
    "resolve_media_type",
]
