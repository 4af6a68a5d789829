# src/cfarag/config.py
"""Configuration loading for the cfarag CLI and API server.

It handles:
- Finding and loading cfarag.yaml config files
- Loading .env files for API keys
- Building Settings objects from YAML and CFARAG_* environment variables
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from cfarag.providers.litellm import ChatModels, EmbeddingModels
from cfarag.settings import Settings

# Default paths
DEFAULT_MATERIALS_DIR = "./training-materials"
DEFAULT_DATA_DIR = "./cfarag_data"
CONFIG_FILES = ["cfarag.yaml", "cfarag.yml", ".cfaragrc"]
ENV_FILE = ".env"
ENV_PREFIX = "CFARAG_"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


@dataclass
class AppConfig:
    """Everything needed to build a QuestionPipeline."""

    llm_model: str
    embedding_model: str
    materials_dir: str
    data_dir: str
    settings: Settings
    llm_api_key: str | None = None
    warnings: list[str] | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from a .env file if it exists.

    Existing environment variables are never overridden.
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a config file in the start directory or its parents."""
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


VALID_ROOT_KEYS = {
    "llm_model",
    "embedding_model",
    "materials_dir",
    "data_dir",
    "settings",
}

VALID_SETTINGS_KEYS = set(Settings.model_fields) | {"rate_limit_profile"}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys."""
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file (empty dict if none is found)."""
    config_path = Path(config_path) if config_path is not None else find_config_file()
    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config


def _env_value(name: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + name.upper())
    if value is None or value == "":
        return None
    return value


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from CFARAG_* environment variables.

    Only explicitly set variables are returned, so YAML values survive
    unless overridden. Pydantic converts the strings to field types.
    """
    result: dict[str, Any] = {}
    for name in VALID_SETTINGS_KEYS:
        value = _env_value(name)
        if value is not None:
            result[name] = value
    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Settings class defaults
    """
    config = config or {}
    yaml_settings = dict(config.get("settings") or {})
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}
    merged = {key: value for key, value in merged.items() if key in VALID_SETTINGS_KEYS}

    rate_limit_profile = merged.pop("rate_limit_profile", None)
    if rate_limit_profile:
        return Settings.with_profile(rate_limit_profile, **merged)
    return Settings(**merged)


def get_app_config(
    materials_dir: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AppConfig | ConfigError:
    """Resolve configuration for the pipeline.

    Explicit arguments win over env vars, which win over YAML.

    Returns:
        AppConfig, or ConfigError if the configuration is invalid
    """
    load_env_file()
    try:
        config = load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        return ConfigError(
            message=f"Could not read config file: {e}",
            suggestion="Check the YAML syntax in cfarag.yaml",
        )

    try:
        settings = build_settings(config)
    except ValueError as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section or CFARAG_* environment variables",
        )

    effective_materials_dir = (
        materials_dir
        or _env_value("materials_dir")
        or config.get("materials_dir")
        or DEFAULT_MATERIALS_DIR
    )
    if not Path(effective_materials_dir).is_dir():
        return ConfigError(
            message=f"Training materials directory not found: {effective_materials_dir}",
            suggestion="Set materials_dir in cfarag.yaml or CFARAG_MATERIALS_DIR",
        )

    return AppConfig(
        llm_model=_env_value("llm_model") or config.get("llm_model") or ChatModels.GPT_4O,
        embedding_model=(
            _env_value("embedding_model")
            or config.get("embedding_model")
            or EmbeddingModels.TEXT_3_SMALL
        ),
        materials_dir=str(effective_materials_dir),
        data_dir=str(
            data_dir or _env_value("data_dir") or config.get("data_dir") or DEFAULT_DATA_DIR
        ),
        settings=settings,
        llm_api_key=_env_value("llm_api_key"),
        warnings=validate_config(config),
    )
