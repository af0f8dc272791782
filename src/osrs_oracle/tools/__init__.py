"""Media tools, one per non-chat mode."""

from osrs_oracle.tools.base import Tool, ToolContext, ToolInput, ToolResult
from osrs_oracle.tools.registry import ToolRegistry, default_registry

__all__ = ["Tool", "ToolContext", "ToolInput", "ToolResult", "ToolRegistry", "default_registry"]
