"""Describe an uploaded screenshot or clip."""

from __future__ import annotations

from osrs_oracle.config import Settings
from osrs_oracle.domain.models import AppMode
from osrs_oracle.llm.envelope import analysis_text, decode_envelope
from osrs_oracle.logging import get_logger
from osrs_oracle.tools.base import Tool, ToolInput, ToolResult, inline_part

logger = get_logger(__name__)

DEFAULT_ANALYZE_PROMPT = "Describe this in OSRS terms."


class AnalyzeTool(Tool):
    mode = AppMode.ANALYZE
    title = "Crystal of Analyzing"
    placeholder = "What item is this? What stats does it have?"
    requires_upload = True
    upload_message = "Please upload a file to analyze."

    def build_request(self, inputs: ToolInput, settings: Settings) -> dict:
        prompt = (inputs.prompt or "").strip() or DEFAULT_ANALYZE_PROMPT
        logger.info("Analyzing upload", extra={"mime_type": inputs.upload.mime_type, "is_video": inputs.upload.is_video})
        return {
            "model": settings.gemini.analyze_model,
            "contents": [{"parts": [inline_part(inputs.upload), {"text": prompt}]}],
        }

    def normalize_result(self, raw: dict) -> ToolResult:
        return ToolResult(text=analysis_text(decode_envelope(raw)))


__all__ = ["AnalyzeTool", "DEFAULT_ANALYZE_PROMPT"]
