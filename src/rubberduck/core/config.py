"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (RUBBERDUCK_* prefix)
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from rubberduck.core.errors import ConfigError

CONFIG_ENV_VAR = "RUBBERDUCK_CONFIG"
DEFAULT_CONFIG_NAME = ".rubberduck.toml"


class AppConfig(BaseSettings):
    """Scratch-note settings, overridable from a config file or RUBBERDUCK_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="RUBBERDUCK_",
        extra="ignore",
    )

    scratch_dir: Path | None = Field(
        default=None,
        description="Directory holding daily notes. Defaults to ~/Documents/rubberducks.",
    )
    file_suffix: str = Field(
        default="-scratch.md", description="Suffix appended to the YYYYMMDD note name."
    )
    editor_env_vars: list[str] = Field(
        default_factory=lambda: ["NEOVIM", "EDITOR"],
        description="Environment variables consulted, in order, for the editor command.",
    )
    default_editor: str = Field(
        default="nvim", description="Editor command used when no editor variable is set."
    )
    log_level: str = Field(default="INFO", description="Log level for scratch output.")

    @field_validator("scratch_dir", mode="after")
    @classmethod
    def expand_scratch_dir(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @field_validator("file_suffix", mode="after")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v or "/" in v or os.sep in v:
            raise ValueError("file_suffix must be a non-empty file name fragment")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Ensure environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    candidate = config_path or env_vars.get(CONFIG_ENV_VAR)
    if candidate:
        return Path(candidate).expanduser()
    try:
        return Path.home() / DEFAULT_CONFIG_NAME
    except RuntimeError:
        # No home directory; the scratch flow reports that on its own.
        return Path(DEFAULT_CONFIG_NAME)


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    suffix = path.suffix.lower()
    parser = json.loads if suffix == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Detect which fields are overridden by environment variables."""
    prefix = AppConfig.model_config.get("env_prefix", "")
    overrides: set[str] = set()
    for field in AppConfig.model_fields:
        if f"{prefix}{field}".upper() in env_vars:
            overrides.add(field)
    return overrides


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    If the file is invalid, returns default config + error message.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(config_path, env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    try:
        with context_manager:
            config = AppConfig(**file_data)
    except (ValidationError, SettingsError) as exc:
        error = f"{error}; {exc}" if error else str(exc)
        config = AppConfig.model_construct()

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result
