"""Concept art generation and image editing."""

from __future__ import annotations

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import ToolInputError
from osrs_oracle.domain.models import AppMode
from osrs_oracle.llm.envelope import decode_envelope, media_data_uri
from osrs_oracle.tools.base import Tool, ToolInput, ToolResult, inline_part, require_prompt

IMAGE_SIZES = ("1K", "2K", "4K")
ART_STYLE_SUFFIX = (
    ", Old School RuneScape art style, 2007scape aesthetic, low poly, pixelated textures, "
    "bad graphics machine style, fantasy concept art"
)
EDIT_STYLE_SUFFIX = ", keep OSRS aesthetic"


class ImageGenerationTool(Tool):
    mode = AppMode.IMAGE_GEN
    title = "Concept Art Generator"
    placeholder = "A drawing of a dragon platebody..."

    def validate_input(self, inputs: ToolInput) -> None:
        require_prompt(inputs, "Please describe the art to generate.")
        if inputs.image_size not in IMAGE_SIZES:
            raise ToolInputError(f"Image size must be one of {', '.join(IMAGE_SIZES)}.")

    def build_request(self, inputs: ToolInput, settings: Settings) -> dict:
        return {
            "model": settings.gemini.image_model,
            "contents": [{"parts": [{"text": inputs.prompt.strip() + ART_STYLE_SUFFIX}]}],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"],
                # Square suits item and icon art.
                "imageConfig": {"imageSize": inputs.image_size, "aspectRatio": "1:1"},
            },
        }

    def normalize_result(self, raw: dict) -> ToolResult:
        return ToolResult(media_uri=media_data_uri(decode_envelope(raw), "No image generated"))


class ImageEditTool(Tool):
    mode = AppMode.IMAGE_EDIT
    title = "Magic Image Editor"
    placeholder = "Add a retro filter, make it look 8-bit..."
    requires_upload = True
    upload_message = "Please upload an image to edit."

    def validate_input(self, inputs: ToolInput) -> None:
        super().validate_input(inputs)
        require_prompt(inputs, "Please describe the edit to make.")

    def build_request(self, inputs: ToolInput, settings: Settings) -> dict:
        return {
            "model": settings.gemini.edit_model,
            "contents": [{"parts": [inline_part(inputs.upload), {"text": inputs.prompt.strip() + EDIT_STYLE_SUFFIX}]}],
            "generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
        }

    def normalize_result(self, raw: dict) -> ToolResult:
        return ToolResult(media_uri=media_data_uri(decode_envelope(raw), "No edited image generated"))


__all__ = ["ImageGenerationTool", "ImageEditTool", "IMAGE_SIZES", "ART_STYLE_SUFFIX", "EDIT_STYLE_SUFFIX"]
