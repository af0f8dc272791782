"""Decode Gemini response envelopes into tagged results.

Every raw ``generateContent`` payload is decoded exactly once by
:func:`decode_envelope` into one of three cases:

* :class:`TextResult` plain answer text,
* :class:`TextWithCitations` answer text plus grounded web sources,
* :class:`MediaResult` the first inline binary part (image or audio).

The normalizers below only ever look at those cases, never at the raw dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from osrs_oracle.domain.errors import GenerationFailure
from osrs_oracle.domain.models import (
    AudioPayload,
    ChatAnswer,
    MediaOperation,
    OperationStatus,
    Source,
)

SILENT_ORACLE_TEXT = "The Oracle is silent..."
ANALYSIS_FAILED_TEXT = "Analysis failed."
IMAGE_DATA_URI_PREFIX = "data:image/png;base64,"


@dataclass(frozen=True)
class TextResult:
    text: str


@dataclass(frozen=True)
class TextWithCitations:
    text: str
    sources: List[Source] = field(default_factory=list)


@dataclass(frozen=True)
class MediaResult:
    data: str
    mime_type: str
    text: str = ""


Envelope = Union[TextResult, TextWithCitations, MediaResult]


def _first_candidate(payload: dict) -> dict:
    candidates = payload.get("candidates") or []
    return candidates[0] if candidates and isinstance(candidates[0], dict) else {}


def _parts(candidate: dict) -> list:
    content = candidate.get("content") or {}
    return [p for p in content.get("parts") or [] if isinstance(p, dict)]


def _joined_text(parts: list) -> str:
    return "".join(p.get("text") or "" for p in parts if not p.get("thought"))


def _web_sources(candidate: dict) -> List[Source]:
    metadata = candidate.get("groundingMetadata") or {}
    sources = []
    for chunk in metadata.get("groundingChunks") or []:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if web:
            sources.append(Source(title=web.get("title") or "", uri=web.get("uri") or ""))
    return sources


def decode_envelope(payload: dict) -> Envelope:
    candidate = _first_candidate(payload or {})
    parts = _parts(candidate)
    text = _joined_text(parts)
    for part in parts:
        inline = part.get("inlineData") or part.get("inline_data")
        if inline and inline.get("data"):
            mime_type = inline.get("mimeType") or inline.get("mime_type") or "application/octet-stream"
            return MediaResult(data=inline["data"], mime_type=mime_type, text=text)
    sources = _web_sources(candidate)
    if sources:
        return TextWithCitations(text=text, sources=sources)
    return TextResult(text=text)


def chat_answer(envelope: Envelope) -> ChatAnswer:
    sources = list(envelope.sources) if isinstance(envelope, TextWithCitations) else []
    return ChatAnswer(text=envelope.text or SILENT_ORACLE_TEXT, sources=sources)


def analysis_text(envelope: Envelope) -> str:
    return envelope.text or ANALYSIS_FAILED_TEXT


def media_data_uri(envelope: Envelope, failure_message: str = "No image generated") -> str:
    if not isinstance(envelope, MediaResult):
        raise GenerationFailure(failure_message)
    return f"{IMAGE_DATA_URI_PREFIX}{envelope.data}"


def audio_payload(envelope: Envelope) -> AudioPayload:
    if not isinstance(envelope, MediaResult):
        raise GenerationFailure("No audio generated")
    return AudioPayload(data=envelope.data, mime_type=envelope.mime_type)


def _video_uri(response: dict) -> Optional[str]:
    wrapped = response.get("generateVideoResponse") or {}
    samples = wrapped.get("generatedSamples") or response.get("generatedVideos") or []
    for sample in samples:
        video = (sample or {}).get("video") or {}
        if video.get("uri"):
            return video["uri"]
    return None


def _filtered_reason(response: dict) -> Optional[str]:
    wrapped = response.get("generateVideoResponse") or {}
    reasons = wrapped.get("raiMediaFilteredReasons") or []
    return "; ".join(str(r) for r in reasons) or None


def decode_operation(payload: dict) -> MediaOperation:
    handle = payload.get("name") or ""
    if not payload.get("done"):
        return MediaOperation(handle=handle)
    error = payload.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        return MediaOperation(handle=handle, status=OperationStatus.FAILED, error=message or "Operation failed")
    response = payload.get("response") or {}
    uri = _video_uri(response)
    if not uri:
        reason = _filtered_reason(response) or "Operation finished without a video"
        return MediaOperation(handle=handle, status=OperationStatus.FAILED, error=reason)
    return MediaOperation(handle=handle, status=OperationStatus.DONE, result_uri=uri)


__all__ = [
    "Envelope",
    "TextResult",
    "TextWithCitations",
    "MediaResult",
    "SILENT_ORACLE_TEXT",
    "ANALYSIS_FAILED_TEXT",
    "IMAGE_DATA_URI_PREFIX",
    "decode_envelope",
    "chat_answer",
    "analysis_text",
    "media_data_uri",
    "audio_payload",
    "decode_operation",
]
