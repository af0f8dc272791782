"""Convert uploads to transport payloads and results to local files."""

from __future__ import annotations

import asyncio
import base64
import mimetypes
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Union

from osrs_oracle.domain.errors import IOFailure
from osrs_oracle.domain.models import LocalMediaHandle, MediaPayload

UploadSource = Union[bytes, bytearray, BinaryIO, str, Path]
DEFAULT_MIME = "application/octet-stream"


def _declared_type(source: UploadSource, mime_type: Optional[str]) -> str:
    if mime_type:
        return mime_type
    # Streamlit's UploadedFile exposes the browser-declared type as ``.type``.
    declared = getattr(source, "type", None)
    if isinstance(declared, str) and declared:
        return declared
    if isinstance(source, (str, Path)):
        guessed, _ = mimetypes.guess_type(str(source))
        return guessed or DEFAULT_MIME
    name = getattr(source, "name", None)
    if isinstance(name, str):
        guessed, _ = mimetypes.guess_type(name)
        return guessed or DEFAULT_MIME
    return DEFAULT_MIME


def _read(source: UploadSource) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    if hasattr(source, "seek"):
        source.seek(0)
    data = source.read()
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"Expected bytes from {type(source).__name__}.read(), got {type(data).__name__}")
    return bytes(data)


async def encode_upload(source: UploadSource, mime_type: Optional[str] = None) -> MediaPayload:
    """Base64-encode an upload; the declared media type is trusted as-is."""
    try:
        raw = await asyncio.to_thread(_read, source)
    except (OSError, TypeError, ValueError) as exc:
        raise IOFailure(f"Could not read upload: {exc}") from exc
    return MediaPayload(data=base64.b64encode(raw).decode("ascii"), mime_type=_declared_type(source, mime_type))


def decode_payload(payload: MediaPayload) -> bytes:
    try:
        return base64.b64decode(payload.data, validate=True)
    except ValueError as exc:
        raise IOFailure(f"Payload is not valid base64: {exc}") from exc


def data_uri(payload: MediaPayload) -> str:
    return f"data:{payload.mime_type};base64,{payload.data}"


def decode_data_uri(uri: str) -> bytes:
    header, sep, body = (uri or "").partition(",")
    if not sep or not header.endswith(";base64"):
        raise IOFailure("Not a base64 data URI")
    return decode_payload(MediaPayload(data=body, mime_type=header[5:-7]))


def _write(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def materialize(data: bytes, mime_type: str, directory: Union[str, Path]) -> LocalMediaHandle:
    """Write result bytes under ``directory`` and return a handle to the file."""
    extension = mimetypes.guess_extension(mime_type or "") or ".bin"
    path = Path(directory) / f"{uuid.uuid4().hex}{extension}"
    try:
        await asyncio.to_thread(_write, path, data)
    except OSError as exc:
        raise IOFailure(f"Could not write media to {path}: {exc}") from exc
    return LocalMediaHandle(path=path, mime_type=mime_type or DEFAULT_MIME)


__all__ = ["encode_upload", "decode_payload", "data_uri", "decode_data_uri", "materialize", "UploadSource"]
