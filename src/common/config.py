"""Configuration loader for the publishing pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Generic, TypeVar

import yaml
from dotenv import load_dotenv

load_dotenv()

T = TypeVar("T")

CONFIG_DIR = Path(__file__).resolve().parent.parent.parent / "configs"


@dataclass
class FeedsConfig:
    parser: str = "feedparser"  # "feedparser" or "regex"
    request_timeout: int = 15
    preferred_item_cap: int = 5
    item_cap: int = 3
    description_max_chars: int = 500
    user_agent: str = "newsroom-pipeline/1.0 (+RSS reader; NewsBot)"


@dataclass
class AIConfig:
    base_url: str = "https://ai.gateway.lovable.dev/v1"
    text_model: str = "google/gemini-2.5-flash"
    image_model: str = "google/gemini-2.5-flash-image-preview"
    api_key_env: str = "AI_GATEWAY_API_KEY"

    @property
    def api_key(self) -> str | None:
        return os.environ.get(self.api_key_env)


@dataclass
class ImagesConfig:
    timeout_seconds: float = 25.0


@dataclass
class PublishConfig:
    breaking_window_minutes: int = 15
    item_delay_seconds: float = 2.0
    max_count: int = 20
    excerpt_max_chars: int = 200


@dataclass
class AuthConfig:
    service_key_env: str = "SERVICE_ROLE_KEY"
    cron_secret_name: str = "cron_secret"

    @property
    def service_key(self) -> str | None:
        return os.environ.get(self.service_key_env)


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class PipelineConfig:
    feeds: FeedsConfig = field(default_factory=FeedsConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    images: ImagesConfig = field(default_factory=ImagesConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def find_config_path(config_name: str | None, config_dir: Path = CONFIG_DIR) -> Path:
    """Find the YAML file for a config name.

    Falls back to the ``NEWSROOM_CONFIG`` env var, then ``prod``. The directory
    can be overridden with ``NEWSROOM_CONFIG_DIR``.
    """
    if config_name is None:
        config_name = os.environ.get("NEWSROOM_CONFIG", "prod")

    override_dir = os.environ.get("NEWSROOM_CONFIG_DIR")
    if override_dir:
        config_dir = Path(override_dir)

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_name: str | None = None) -> PipelineConfig:
    """Load configuration from YAML file."""
    return parse_config(load_yaml(find_config_path(config_name)))


def _section(data: dict, name: str, cls: type[T]) -> T:
    raw = data.get(name) or {}
    known = {key: value for key, value in raw.items() if key in cls.__dataclass_fields__}
    return cls(**known)


def parse_config(data: dict) -> PipelineConfig:
    """Parse a config dictionary into a PipelineConfig, ignoring unknown keys."""
    return PipelineConfig(
        feeds=_section(data, "feeds", FeedsConfig),
        ai=_section(data, "ai", AIConfig),
        images=_section(data, "images", ImagesConfig),
        publish=_section(data, "publish", PublishConfig),
        auth=_section(data, "auth", AuthConfig),
        server=_section(data, "server", ServerConfig),
    )


class ConfigSingleton(Generic[T]):
    """Get/set/reset holder for a lazily loaded global config."""

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        self._config = config

    def reset(self) -> None:
        self._config = None


_manager: ConfigSingleton[PipelineConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
