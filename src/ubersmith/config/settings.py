# src/ubersmith/config/settings.py
"""
Client settings (Pydantic).

Settings are loaded from `src/ubersmith/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `UBERSMITH_CONFIG_PATH`
- environment variables (e.g., `UBERSMITH_HOST`, `UBERSMITH_USER`, `UBERSMITH_TOKEN`)

Environment values are plain strings; Pydantic coerces them (`"false"` -> False, `"30"` -> 30.0).
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from ubersmith.core.env import load_dotenv_if_present


def _yaml_mapping(text: str, source: str) -> dict[str, Any]:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {source}; expected a mapping.")
    return data


def _packaged_yaml(filename: str) -> dict[str, Any]:
    """Parse one of the YAML files shipped in `ubersmith.config`."""
    text = resources.files("ubersmith.config").joinpath(filename).read_text(encoding="utf-8")
    return _yaml_mapping(text, filename)


class AppSettings(BaseModel):
    log_level: str = "INFO"


class ApiSettings(BaseModel):
    host: str = ""
    user: str = ""
    token: str = Field(default="", repr=False)
    debug: bool = False
    verify_tls: bool = True
    timeout_seconds: float | None = Field(default=30, gt=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)


# (env var, section, key)
_ENV_OVERRIDES: tuple[tuple[str, str, str], ...] = (
    ("UBERSMITH_LOG_LEVEL", "app", "log_level"),
    ("UBERSMITH_HOST", "api", "host"),
    ("UBERSMITH_USER", "api", "user"),
    ("UBERSMITH_TOKEN", "api", "token"),
    ("UBERSMITH_DEBUG", "api", "debug"),
    ("UBERSMITH_VERIFY_TLS", "api", "verify_tls"),
    ("UBERSMITH_TIMEOUT_SECONDS", "api", "timeout_seconds"),
)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay the whitelisted environment variables onto the raw settings payload."""
    data = dict(data)
    for env_name, section, key in _ENV_OVERRIDES:
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        section_data = dict(data.get(section) or {})
        section_data[key] = value.strip()
        data[section] = section_data
    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("UBERSMITH_CONFIG_PATH")
    if config_path:
        raw = _yaml_mapping(Path(config_path).read_text(encoding="utf-8"), config_path)
    else:
        raw = _packaged_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _packaged_yaml("logging.yaml")
