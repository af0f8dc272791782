"""Veo animation: submit, poll, download."""

from __future__ import annotations

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import OperationFailure, ToolInputError
from osrs_oracle.domain.models import AppMode, LocalMediaHandle, OperationStatus
from osrs_oracle.llm.envelope import decode_operation
from osrs_oracle.logging import get_logger
from osrs_oracle.services.media_adapter import materialize
from osrs_oracle.services.video_poller import VideoOperationPoller
from osrs_oracle.tools.base import Tool, ToolContext, ToolInput, ToolResult, require_prompt

logger = get_logger(__name__)

ASPECT_RATIOS = ("16:9", "9:16")
VIDEO_STYLE_SUFFIX = ", Old School RuneScape gameplay style, low poly 3d animation, runescape classic aesthetic"
DEFAULT_VIDEO_MIME = "video/mp4"


class VideoGenerationTool(Tool):
    mode = AppMode.VIDEO_GEN
    title = "Veo Animation Studio"
    placeholder = "Animate the character running..."

    def validate_input(self, inputs: ToolInput) -> None:
        require_prompt(inputs, "Please describe the animation to generate.")
        if inputs.aspect_ratio not in ASPECT_RATIOS:
            raise ToolInputError(f"Aspect ratio must be one of {', '.join(ASPECT_RATIOS)}.")

    def build_request(self, inputs: ToolInput, settings: Settings) -> dict:
        return {
            "model": settings.gemini.video_model,
            "prompt": inputs.prompt.strip() + VIDEO_STYLE_SUFFIX,
            "parameters": {"aspectRatio": inputs.aspect_ratio, "resolution": settings.video.resolution},
            "image": inputs.upload,
        }

    async def execute(self, request: dict, context: ToolContext) -> LocalMediaHandle:
        client = context.client
        submitted = decode_operation(
            await client.start_video_generation(
                request["model"], request["prompt"], request["parameters"], image=request.get("image")
            )
        )
        if not submitted.handle and not submitted.finished:
            raise OperationFailure("Video generation did not return an operation handle")

        video_cfg = context.settings.video
        poller = VideoOperationPoller(
            client,
            interval_s=video_cfg.poll_interval_s,
            max_polls=video_cfg.max_polls,
            deadline_s=video_cfg.deadline_s,
            cancel_event=context.cancel_event,
        )
        operation = await poller.run(submitted)
        if operation.status is not OperationStatus.DONE or not operation.result_uri:
            raise OperationFailure(operation.error or "Video generation failed")

        data, content_type = await client.download(operation.result_uri)
        if content_type == "application/octet-stream":
            content_type = DEFAULT_VIDEO_MIME
        handle = await materialize(data, content_type, context.settings.media_dir)
        logger.info("Video ready", extra={"polls": poller.polls, "bytes": len(data), "path": str(handle.path)})
        return handle

    def normalize_result(self, raw: LocalMediaHandle) -> ToolResult:
        return ToolResult(media_file=raw)


__all__ = ["VideoGenerationTool", "ASPECT_RATIOS", "VIDEO_STYLE_SUFFIX"]
