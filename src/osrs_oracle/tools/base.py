"""Common shape for the media tools (one per non-chat mode)."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import ToolInputError
from osrs_oracle.domain.models import AppMode, LocalMediaHandle, MediaPayload
from osrs_oracle.llm.gemini_client import GeminiClient


@dataclass
class ToolInput:
    prompt: str = ""
    upload: Optional[MediaPayload] = None
    image_size: str = "1K"
    aspect_ratio: str = "16:9"


@dataclass
class ToolResult:
    media_uri: Optional[str] = None
    media_file: Optional[LocalMediaHandle] = None
    text: Optional[str] = None


@dataclass
class ToolContext:
    client: GeminiClient
    settings: Settings = field(default_factory=Settings)
    cancel_event: Optional[asyncio.Event] = None


class Tool(ABC):
    mode: AppMode
    title: str = ""
    placeholder: str = ""
    requires_upload: bool = False
    upload_message: str = "Please upload a file."

    def validate_input(self, inputs: ToolInput) -> None:
        if self.requires_upload and inputs.upload is None:
            raise ToolInputError(self.upload_message)

    @abstractmethod
    def build_request(self, inputs: ToolInput, settings: Settings) -> dict:
        ...

    async def execute(self, request: dict, context: ToolContext) -> Any:
        return await context.client.generate_content(
            request["model"],
            request["contents"],
            generation_config=request.get("generationConfig"),
        )

    @abstractmethod
    def normalize_result(self, raw: Any) -> ToolResult:
        ...

    async def run(self, inputs: ToolInput, context: ToolContext) -> ToolResult:
        self.validate_input(inputs)
        request = self.build_request(inputs, context.settings)
        raw = await self.execute(request, context)
        return self.normalize_result(raw)


def require_prompt(inputs: ToolInput, message: str) -> str:
    prompt = (inputs.prompt or "").strip()
    if not prompt:
        raise ToolInputError(message)
    return prompt


def inline_part(payload: MediaPayload) -> dict:
    return {"inlineData": {"mimeType": payload.mime_type, "data": payload.data}}


__all__ = ["Tool", "ToolInput", "ToolResult", "ToolContext", "require_prompt", "inline_part"]
