"""Configuration loader for OSRS Oracle."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from osrs_oracle.domain.errors import ConfigError


class AppConfig(BaseModel):
    name: str = Field(default="osrs-oracle")
    environment: str = Field(default="development")
    data_root: str = Field(default="./data")
    logs_dir: str = Field(default="./logs")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")


class GeminiConfig(BaseModel):
    base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    timeout_s: int = Field(default=120)
    api_key_env: str = Field(default="GEMINI_API_KEY")
    chat_model: str = Field(default="gemini-3-pro-preview")
    search_model: str = Field(default="gemini-2.5-flash")
    image_model: str = Field(default="gemini-3-pro-image-preview")
    edit_model: str = Field(default="gemini-2.5-flash-image")
    analyze_model: str = Field(default="gemini-3-pro-preview")
    video_model: str = Field(default="veo-3.1-fast-generate-preview")
    tts_model: str = Field(default="gemini-2.5-flash-preview-tts")
    thinking_budget: int = Field(default=32768)
    search_domain: str = Field(default="oldschool.runescape.wiki")


class VideoConfig(BaseModel):
    poll_interval_s: float = Field(default=5.0)
    max_polls: Optional[int] = Field(default=120)
    deadline_s: Optional[float] = Field(default=900.0)
    resolution: str = Field(default="720p")


class SpeechConfig(BaseModel):
    voice: str = Field(default="Fenrir")


class Settings(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)
    video: VideoConfig = Field(default_factory=VideoConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)

    @property
    def media_dir(self) -> Path:
        return Path(self.app.data_root) / "media"


DEFAULT_CONFIG_PATH = Path("config/default.yaml")

_INT_KEYS = {"timeout_s", "max_polls"}
_FLOAT_KEYS = {"poll_interval_s", "deadline_s"}


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc


def _apply_env_overrides(data: dict) -> dict:
    overrides = {
        ("app", "environment"): os.getenv("APP_ENV"),
        ("app", "data_root"): os.getenv("DATA_ROOT"),
        ("app", "logs_dir"): os.getenv("LOGS_DIR"),
        ("logging", "level"): os.getenv("LOG_LEVEL"),
        ("gemini", "base_url"): os.getenv("GEMINI_BASE_URL"),
        ("gemini", "timeout_s"): os.getenv("GEMINI_TIMEOUT_S"),
        ("gemini", "chat_model"): os.getenv("GEMINI_CHAT_MODEL"),
        ("gemini", "search_model"): os.getenv("GEMINI_SEARCH_MODEL"),
        ("video", "poll_interval_s"): os.getenv("VIDEO_POLL_INTERVAL_S"),
        ("video", "max_polls"): os.getenv("VIDEO_MAX_POLLS"),
        ("video", "deadline_s"): os.getenv("VIDEO_DEADLINE_S"),
    }
    for (section, key), value in overrides.items():
        if value is None:
            continue
        if section not in data or data[section] is None:
            data[section] = {}
        if key in _INT_KEYS:
            try:
                data[section][key] = int(value)
                continue
            except ValueError:
                # keep original if conversion fails
                pass
        if key in _FLOAT_KEYS:
            try:
                data[section][key] = float(value)
                continue
            except ValueError:
                pass
        data[section][key] = value
    return data


def load_config(path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML and environment variables."""
    load_dotenv()
    config_path = path or DEFAULT_CONFIG_PATH
    raw = _load_yaml(config_path)
    merged = _apply_env_overrides(raw)
    try:
        settings = Settings(**merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {config_path}: {exc}") from exc

    for directory in [Path(settings.app.data_root), Path(settings.app.logs_dir), settings.media_dir]:
        directory.mkdir(parents=True, exist_ok=True)
    return settings


__all__ = [
    "Settings",
    "AppConfig",
    "LoggingConfig",
    "GeminiConfig",
    "VideoConfig",
    "SpeechConfig",
    "load_config",
]
