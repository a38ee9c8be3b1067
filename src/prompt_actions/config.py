"""Configuration loading and saving (TOML)."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from prompt_actions.constants import (
    API_KEY_ENV_VAR,
    CONFIG_FILE,
    DEFAULT_API_FORMAT,
    DEFAULT_MODEL,
    PREVIEW_WIDTH,
    WEB_DEFAULT_HOST,
    WEB_DEFAULT_PORT,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass
class ProviderConfig:
    """LLM provider configuration."""

    api_format: str = DEFAULT_API_FORMAT  # "gemini" | "openai"
    api_key: str = ""
    model: str = DEFAULT_MODEL
    custom_endpoint: str = ""  # empty = vendor default Gemini host
    timeout: float | None = None  # None = no timeout

    @property
    def resolved_api_key(self) -> str:
        """API key from config, falling back to the environment."""
        return self.api_key or os.environ.get(API_KEY_ENV_VAR, "")

    def masked(self) -> dict[str, Any]:
        """Config as a dict with the API key hidden, for display."""
        key = self.resolved_api_key
        return {
            "api_format": self.api_format,
            "api_key": f"{key[:4]}…" if key else "",
            "model": self.model,
            "custom_endpoint": self.custom_endpoint,
            "timeout": self.timeout,
        }


@dataclass
class WebConfig:
    """Web dashboard configuration."""

    host: str = WEB_DEFAULT_HOST
    port: int = WEB_DEFAULT_PORT


@dataclass
class UIConfig:
    """Presentation configuration."""

    notifications: bool = True
    preview_width: int = PREVIEW_WIDTH


@dataclass
class AppConfig:
    """Root application configuration."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    web: WebConfig = field(default_factory=WebConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file, falling back to defaults."""
        config_path = path or CONFIG_FILE
        config = cls()

        if not config_path.exists():
            logger.info("No config file found at %s, using defaults", config_path)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = _merge_config(config, data)
            logger.info("Loaded config from %s", config_path)
        except Exception:
            logger.exception("Failed to load config from %s, using defaults", config_path)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        config_path = path or CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = _config_to_dict(self)
        with open(config_path, "wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", config_path)


def merge_section(section: object, values: dict[str, Any]) -> None:
    """Copy known keys from ``values`` onto a config section, ignoring the rest."""
    for key, val in values.items():
        if hasattr(section, key):
            setattr(section, key, val)
        else:
            logger.warning("Ignoring unknown config key '%s'", key)


def _merge_config(config: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Merge a TOML dict into an AppConfig, preserving defaults for missing keys."""
    if "provider" in data:
        merge_section(config.provider, data["provider"])

    if "web" in data:
        merge_section(config.web, data["web"])

    if "ui" in data:
        merge_section(config.ui, data["ui"])

    return config


def _config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to a dict suitable for TOML serialization."""
    from dataclasses import asdict

    data = asdict(config)
    # Remove None values (TOML doesn't support null)
    return _strip_none(data)


def _strip_none(d: dict[str, Any]) -> dict[str, Any]:
    """Recursively remove None values from a dict."""
    result: dict[str, Any] = {}
    for k, v in d.items():
        if isinstance(v, dict):
            result[k] = _strip_none(v)
        elif v is not None:
            result[k] = v
    return result
