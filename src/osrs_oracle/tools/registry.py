"""Look up the tool for a mode."""

from __future__ import annotations

from typing import Dict, Iterable, List

from osrs_oracle.domain.errors import ToolInputError
from osrs_oracle.domain.models import AppMode
from osrs_oracle.tools.analyze import AnalyzeTool
from osrs_oracle.tools.base import Tool
from osrs_oracle.tools.image import ImageEditTool, ImageGenerationTool
from osrs_oracle.tools.video import VideoGenerationTool


class ToolRegistry:
    def __init__(self, tools: Iterable[Tool] = ()):
        self._tools: Dict[AppMode, Tool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        self._tools[tool.mode] = tool

    def get(self, mode: AppMode) -> Tool:
        try:
            return self._tools[AppMode(mode)]
        except (KeyError, ValueError):
            raise ToolInputError(f"No tool available for mode {mode}") from None

    def modes(self) -> List[AppMode]:
        return list(self._tools)


def default_registry() -> ToolRegistry:
    return ToolRegistry([ImageGenerationTool(), ImageEditTool(), VideoGenerationTool(), AnalyzeTool()])


__all__ = ["ToolRegistry", "default_registry"]
