"""Media tools page: one form per mode."""

from __future__ import annotations

import asyncio

import streamlit as st

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import OracleError
from osrs_oracle.domain.models import AppMode
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.services.media_adapter import decode_data_uri, encode_upload
from osrs_oracle.services.tool_service import ToolOutcome, run_tool
from osrs_oracle.tools import Tool, ToolInput
from osrs_oracle.tools.image import IMAGE_SIZES
from osrs_oracle.tools.video import ASPECT_RATIOS

UPLOAD_TYPES = {
    AppMode.IMAGE_EDIT: ["png", "jpg", "jpeg", "webp"],
    AppMode.VIDEO_GEN: ["png", "jpg", "jpeg", "webp"],
    AppMode.ANALYZE: ["png", "jpg", "jpeg", "webp", "gif", "mp4", "mov", "webm"],
}
PAID_KEY_MODES = {AppMode.IMAGE_GEN: "Gemini 3 Pro Image", AppMode.VIDEO_GEN: "Veo"}


def _collect_inputs(tool: Tool) -> tuple[ToolInput, object]:
    inputs = ToolInput()
    mode = tool.mode
    if mode in PAID_KEY_MODES:
        st.caption(f"Requires a paid API key ({PAID_KEY_MODES[mode]})")
    if mode is AppMode.IMAGE_GEN:
        inputs.image_size = st.selectbox("Image size", IMAGE_SIZES)
    if mode is AppMode.VIDEO_GEN:
        inputs.aspect_ratio = st.radio("Aspect ratio", ASPECT_RATIOS, horizontal=True)
    uploaded = None
    if mode in UPLOAD_TYPES:
        label = "Optional: start with an image" if mode is AppMode.VIDEO_GEN else "Upload"
        uploaded = st.file_uploader(label, type=UPLOAD_TYPES[mode])
    inputs.prompt = st.text_area("Prompt", placeholder=tool.placeholder)
    return inputs, uploaded


async def _run(mode: AppMode, inputs: ToolInput, uploaded, client: GeminiClient, settings: Settings) -> ToolOutcome:
    if uploaded is not None:
        try:
            inputs.upload = await encode_upload(uploaded)
        except OracleError as exc:
            return ToolOutcome(error=str(exc))
    return await run_tool(mode, inputs, client, settings)


def render_outcome(outcome: ToolOutcome) -> None:
    if outcome.error:
        st.error(outcome.error)
        return
    result = outcome.result
    st.markdown("#### Result")
    if result.media_file is not None:
        st.video(result.media_file.read_bytes(), format=result.media_file.mime_type, loop=True, autoplay=True)
    if result.media_uri:
        st.image(decode_data_uri(result.media_uri))
    if result.text:
        st.markdown(result.text)


def render_tool(tool: Tool, client: GeminiClient, settings: Settings) -> None:
    st.subheader(tool.title)
    inputs, uploaded = _collect_inputs(tool)
    if st.button("Generate / Analyze"):
        with st.spinner("Casting Spell..."):
            outcome = asyncio.run(_run(tool.mode, inputs, uploaded, client, settings))
        render_outcome(outcome)


__all__ = ["render_tool", "render_outcome"]
