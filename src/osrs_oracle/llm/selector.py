"""Pick model, tools and reasoning budget for a chat turn."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from jinja2 import Template

from osrs_oracle.config import GeminiConfig
from osrs_oracle.domain.models import RequestConfig, TopicCategory

SEARCH_TOOL = {"google_search": {}}
MAX_INFO_WORDS = 6
MARKUP_EXAMPLES = [
    "Use the [[Abyssal whip|Slash: +82, Str: +82]] for general training.",
    "Sip a [[Prayer potion(4)|Restores Prayer points]] when low.",
]


@dataclass(frozen=True)
class ModelTarget:
    model: str
    tools: List[dict] = field(default_factory=list)
    reasoning_budget: Optional[int] = None
    prompt_suffix: str = ""

    @property
    def uses_search(self) -> bool:
        return SEARCH_TOOL in self.tools


def select_target(config: RequestConfig, gemini: Optional[GeminiConfig] = None) -> ModelTarget:
    """Decision table; extended reasoning wins over search."""
    gemini = gemini or GeminiConfig()
    if config.extended_reasoning_enabled:
        return ModelTarget(model=gemini.chat_model, reasoning_budget=gemini.thinking_budget)
    if config.search_enabled:
        return ModelTarget(
            model=gemini.search_model,
            tools=[dict(SEARCH_TOOL)],
            prompt_suffix=f" site:{gemini.search_domain}",
        )
    return ModelTarget(model=gemini.chat_model)


def apply_prompt(target: ModelTarget, text: str) -> str:
    return f"{text}{target.prompt_suffix}"


@lru_cache(maxsize=1)
def _load_template() -> Template:
    prompt_path = Path(__file__).resolve().parent / "prompts" / "system.md.j2"
    return Template(prompt_path.read_text(encoding="utf-8"), trim_blocks=True, lstrip_blocks=True)


def build_system_instruction(category: TopicCategory) -> str:
    return _load_template().render(
        category=TopicCategory(category).value,
        max_info_words=MAX_INFO_WORDS,
        examples=MARKUP_EXAMPLES,
    )


def build_generation_config(target: ModelTarget) -> dict:
    if target.reasoning_budget is None:
        return {}
    return {"thinkingConfig": {"thinkingBudget": target.reasoning_budget}}


__all__ = [
    "ModelTarget",
    "SEARCH_TOOL",
    "select_target",
    "apply_prompt",
    "build_system_instruction",
    "build_generation_config",
]
