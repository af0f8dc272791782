import pytest

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import NetworkFailure
from osrs_oracle.domain.models import AppMode
from osrs_oracle.services import tool_service
from osrs_oracle.tools import ToolInput


class FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error

    async def generate_content(self, model, contents, **kwargs):
        if self.error:
            raise self.error
        return self.response


@pytest.mark.asyncio
async def test_run_tool_success():
    reply = {"candidates": [{"content": {"parts": [{"inlineData": {"mimeType": "image/png", "data": "QUJD"}}]}}]}
    outcome = await tool_service.run_tool(AppMode.IMAGE_GEN, ToolInput(prompt="rune scimitar"), FakeClient(reply), Settings())
    assert outcome.ok
    assert outcome.result.media_uri.endswith("QUJD")


@pytest.mark.asyncio
async def test_missing_upload_becomes_error_string():
    outcome = await tool_service.run_tool(AppMode.ANALYZE, ToolInput(prompt="what is it"), FakeClient(), Settings())
    assert not outcome.ok
    assert outcome.error == "Please upload a file to analyze."


@pytest.mark.asyncio
async def test_backend_failure_becomes_error_string():
    outcome = await tool_service.run_tool(AppMode.IMAGE_GEN, ToolInput(prompt="x"), FakeClient(error=NetworkFailure("boom")))
    assert outcome.error == "boom"
    assert outcome.result is None


@pytest.mark.asyncio
async def test_missing_image_becomes_error_string():
    reply = {"candidates": [{"content": {"parts": [{"text": "I can't draw that"}]}}]}
    outcome = await tool_service.run_tool(AppMode.IMAGE_GEN, ToolInput(prompt="x"), FakeClient(reply))
    assert outcome.error == "No image generated"


@pytest.mark.asyncio
async def test_unexpected_error_becomes_generic_error_string():
    outcome = await tool_service.run_tool(AppMode.IMAGE_GEN, ToolInput(prompt="x"), FakeClient(error=RuntimeError("bug")))
    assert outcome.error == tool_service.GENERIC_ERROR
    assert outcome.result is None
