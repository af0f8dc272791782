"""Domain models for the assistant."""

from __future__ import annotations

import base64
import io
import re
import uuid
import wave
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def wire_name(self) -> str:
        # Gemini names the assistant side of a conversation "model".
        return "model" if self is Role.ASSISTANT else "user"


class TopicCategory(str, Enum):
    GENERAL = "General"
    COMBAT_PVE = "PvM"
    COMBAT_PVP = "PvP"
    DIARIES = "Diaries"
    SKILLING = "Skilling"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    TopicCategory.GENERAL: "General",
    TopicCategory.COMBAT_PVE: "PvM & Bossing",
    TopicCategory.COMBAT_PVP: "PvP & PKing",
    TopicCategory.DIARIES: "Diaries & Quests",
    TopicCategory.SKILLING: "Skilling",
}


class AppMode(str, Enum):
    CHAT = "CHAT"
    IMAGE_GEN = "IMAGE_GEN"
    IMAGE_EDIT = "IMAGE_EDIT"
    VIDEO_GEN = "VIDEO_GEN"
    ANALYZE = "ANALYZE"


@dataclass(frozen=True)
class Source:
    title: str
    uri: str


@dataclass(frozen=True)
class AudioPayload:
    data: str
    mime_type: str = "audio/L16;codec=pcm;rate=24000"

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def sample_rate(self) -> int:
        match = re.search(r"rate=(\d+)", self.mime_type)
        return int(match.group(1)) if match else 24000

    def to_wav_bytes(self) -> bytes:
        """Wrap raw 16-bit mono PCM in a WAV container; other formats pass through."""
        raw = self.raw_bytes()
        if not self.mime_type.lower().startswith("audio/l16"):
            return raw
        buf = io.BytesIO()
        with wave.open(buf, "wb") as wav:
            wav.setnchannels(1)
            wav.setsampwidth(2)
            wav.setframerate(self.sample_rate())
            wav.writeframes(raw)
        return buf.getvalue()


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Message:
    role: Role
    text: str
    id: str = field(default_factory=_new_message_id)
    timestamp: datetime = field(default_factory=_now)
    sources: List[Source] = field(default_factory=list)
    audio: Optional[AudioPayload] = None

    def attach_audio(self, audio: AudioPayload) -> None:
        self.audio = audio


@dataclass
class RequestConfig:
    search_enabled: bool = True
    extended_reasoning_enabled: bool = False
    topic_category: TopicCategory = TopicCategory.GENERAL


@dataclass(frozen=True)
class ConversationTurn:
    role: str
    parts: Tuple[str, ...]

    def to_wire(self) -> dict:
        return {"role": self.role, "parts": [{"text": part} for part in self.parts]}


@dataclass(frozen=True)
class ItemReference:
    display_name: str
    short_info: str


class OperationStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MediaOperation:
    handle: str
    status: OperationStatus = OperationStatus.PENDING
    result_uri: Optional[str] = None
    error: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.status is not OperationStatus.PENDING


@dataclass(frozen=True)
class MediaPayload:
    data: str
    mime_type: str

    @property
    def is_video(self) -> bool:
        return self.mime_type.lower().startswith("video/")


@dataclass(frozen=True)
class LocalMediaHandle:
    path: Path
    mime_type: str

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass
class ChatAnswer:
    text: str
    sources: List[Source] = field(default_factory=list)


__all__ = [
    "AppMode",
    "AudioPayload",
    "ChatAnswer",
    "ConversationTurn",
    "ItemReference",
    "LocalMediaHandle",
    "MediaOperation",
    "MediaPayload",
    "Message",
    "OperationStatus",
    "RequestConfig",
    "Role",
    "Source",
    "TopicCategory",
]
