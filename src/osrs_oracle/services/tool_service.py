"""Run a media tool and turn failures into a displayable message."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from osrs_oracle.config import Settings
from osrs_oracle.domain.errors import OracleError
from osrs_oracle.domain.models import AppMode
from osrs_oracle.llm.gemini_client import GeminiClient
from osrs_oracle.logging import get_logger
from osrs_oracle.tools import ToolContext, ToolInput, ToolRegistry, ToolResult, default_registry

logger = get_logger(__name__)

GENERIC_ERROR = "An error occurred"


@dataclass
class ToolOutcome:
    result: Optional[ToolResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_tool(
    mode: AppMode,
    inputs: ToolInput,
    client: GeminiClient,
    settings: Optional[Settings] = None,
    *,
    registry: Optional[ToolRegistry] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> ToolOutcome:
    tools = registry or default_registry()
    context = ToolContext(client=client, settings=settings or Settings(), cancel_event=cancel_event)
    try:
        tool = tools.get(mode)
        result = await tool.run(inputs, context)
    except OracleError as exc:
        logger.error("Tool failed", extra={"mode": str(mode), "error_type": type(exc).__name__, "error": str(exc)})
        return ToolOutcome(error=str(exc) or GENERIC_ERROR)
    except Exception:
        logger.exception("Tool failed unexpectedly", extra={"mode": str(mode)})
        return ToolOutcome(error=GENERIC_ERROR)
    logger.info("Tool finished", extra={"mode": str(mode)})
    return ToolOutcome(result=result)


__all__ = ["ToolOutcome", "run_tool"]
