import asyncio
from pathlib import Path

import pytest

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import OperationCancelled, OperationFailure, ToolInputError
from osrs_oracle.domain.models import AppMode, MediaPayload
from osrs_oracle.tools import ToolContext, ToolInput, ToolRegistry, default_registry
from osrs_oracle.tools.analyze import DEFAULT_ANALYZE_PROMPT, AnalyzeTool
from osrs_oracle.tools.image import ART_STYLE_SUFFIX, ImageEditTool, ImageGenerationTool
from osrs_oracle.tools.video import VIDEO_STYLE_SUFFIX, VideoGenerationTool

PNG = MediaPayload(data="iVBORw0K", mime_type="image/png")
IMAGE_REPLY = {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "QUJD"}}]}}]}


def _settings(tmp_path: Path) -> Settings:
    settings = Settings()
    settings.app.data_root = str(tmp_path)
    settings.video.poll_interval_s = 0
    return settings


class FakeClient:
    def __init__(self, content=None, operations=None, video=(b"mp4", "video/mp4")):
        self.content = content
        self.operations = list(operations or [])
        self.video = video
        self.calls = []

    async def generate_content(self, model, contents, **kwargs):
        self.calls.append(("generate", model, contents, kwargs))
        return self.content

    async def start_video_generation(self, model, prompt, parameters, image=None):
        self.calls.append(("video", model, prompt, parameters, image))
        return self.operations.pop(0)

    async def get_operation(self, handle):
        self.calls.append(("status", handle))
        return self.operations.pop(0)

    async def download(self, uri):
        self.calls.append(("download", uri))
        return self.video


def test_default_registry_covers_every_tool_mode():
    registry = default_registry()
    assert set(registry.modes()) == {AppMode.IMAGE_GEN, AppMode.IMAGE_EDIT, AppMode.VIDEO_GEN, AppMode.ANALYZE}
    assert isinstance(registry.get(AppMode.ANALYZE), AnalyzeTool)
    assert isinstance(registry.get("IMAGE_GEN"), ImageGenerationTool)


def test_registry_rejects_chat_mode():
    with pytest.raises(ToolInputError):
        ToolRegistry().get(AppMode.CHAT)
    with pytest.raises(ToolInputError):
        default_registry().get("NOT_A_MODE")


def test_image_generation_request():
    request = ImageGenerationTool().build_request(ToolInput(prompt="dragon platebody", image_size="2K"), Settings())
    assert request["model"] == "gemini-3-pro-image-preview"
    assert request["contents"][0]["parts"][0]["text"] == "dragon platebody" + ART_STYLE_SUFFIX
    assert request["generationConfig"]["imageConfig"] == {"imageSize": "2K", "aspectRatio": "1:1"}


def test_image_generation_validation():
    tool = ImageGenerationTool()
    with pytest.raises(ToolInputError):
        tool.validate_input(ToolInput(prompt=""))
    with pytest.raises(ToolInputError):
        tool.validate_input(ToolInput(prompt="x", image_size="8K"))


@pytest.mark.asyncio
async def test_image_generation_returns_data_uri(tmp_path):
    client = FakeClient(content=IMAGE_REPLY)
    result = await ImageGenerationTool().run(ToolInput(prompt="cape"), ToolContext(client=client, settings=_settings(tmp_path)))
    assert result.media_uri == "data:image/png;base64,QUJD"


@pytest.mark.asyncio
async def test_image_edit_requires_upload_and_sends_inline_image(tmp_path):
    tool = ImageEditTool()
    with pytest.raises(ToolInputError, match="upload an image"):
        tool.validate_input(ToolInput(prompt="retro"))

    client = FakeClient(content=IMAGE_REPLY)
    await tool.run(ToolInput(prompt="retro filter", upload=PNG), ToolContext(client=client, settings=_settings(tmp_path)))
    _, model, contents, _ = client.calls[0]
    assert model == "gemini-2.5-flash-image"
    parts = contents[0]["parts"]
    assert parts[0] == {"inlineData": {"mimeType": "image/png", "data": "iVBORw0K"}}
    assert parts[1]["text"] == "retro filter, keep OSRS aesthetic"


@pytest.mark.asyncio
async def test_analyze_uses_default_prompt_and_fallback_text(tmp_path):
    client = FakeClient(content={"candidates": []})
    clip = MediaPayload(data="AAAA", mime_type="video/mp4")
    result = await AnalyzeTool().run(ToolInput(upload=clip), ToolContext(client=client, settings=_settings(tmp_path)))
    _, model, contents, _ = client.calls[0]
    assert model == "gemini-3-pro-preview"
    assert contents[0]["parts"][1]["text"] == DEFAULT_ANALYZE_PROMPT
    assert result.text == "Analysis failed."


def test_video_validation():
    tool = VideoGenerationTool()
    with pytest.raises(ToolInputError):
        tool.validate_input(ToolInput(prompt="run", aspect_ratio="4:3"))
    tool.validate_input(ToolInput(prompt="run", aspect_ratio="9:16"))


@pytest.mark.asyncio
async def test_video_generation_polls_downloads_and_materializes(tmp_path):
    handle = "models/veo/operations/1"
    done = {"name": handle, "done": True, "response": {"generateVideoResponse": {"generatedSamples": [{"video": {"uri": "https://files/v"}}]}}}
    client = FakeClient(operations=[{"name": handle}, {"name": handle}, done])
    settings = _settings(tmp_path)

    result = await VideoGenerationTool().run(
        ToolInput(prompt="goblin dancing", aspect_ratio="9:16", upload=PNG),
        ToolContext(client=client, settings=settings),
    )

    kinds = [c[0] for c in client.calls]
    assert kinds == ["video", "status", "status", "download"]
    _, model, prompt, parameters, image = client.calls[0]
    assert model == "veo-3.1-fast-generate-preview"
    assert prompt == "goblin dancing" + VIDEO_STYLE_SUFFIX
    assert parameters == {"aspectRatio": "9:16", "resolution": "720p"}
    assert image == PNG
    assert result.media_file.read_bytes() == b"mp4"
    assert result.media_file.path.parent == settings.media_dir


@pytest.mark.asyncio
async def test_video_generation_without_result_raises_operation_failure(tmp_path):
    client = FakeClient(operations=[{"name": "op"}, {"name": "op", "done": True, "response": {}}])
    with pytest.raises(OperationFailure):
        await VideoGenerationTool().run(ToolInput(prompt="x"), ToolContext(client=client, settings=_settings(tmp_path)))
    assert "download" not in [c[0] for c in client.calls]


@pytest.mark.asyncio
async def test_video_generation_honours_cancel_event(tmp_path):
    cancel = asyncio.Event()
    cancel.set()
    client = FakeClient(operations=[{"name": "op"}])
    context = ToolContext(client=client, settings=_settings(tmp_path), cancel_event=cancel)
    with pytest.raises(OperationCancelled):
        await VideoGenerationTool().run(ToolInput(prompt="x"), context)
