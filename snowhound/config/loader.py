"""YAML config loader with environment overrides and dotted-key lookup."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from snowhound.config.schema import AppConfig

logger = logging.getLogger(__name__)

# env var -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "OPENWEATHER_API_KEY": ("keys", "openweather_api_key"),
    "WEATHERAPI_KEY": ("keys", "weatherapi_key"),
    "SNOWHOUND_ENABLE_MOCK_DATA": ("features", "enable_mock_data"),
    "SNOWHOUND_USE_BACKEND": ("features", "use_backend"),
    "SNOWHOUND_API_BASE_URL": ("backend", "api_base_url"),
    "SNOWHOUND_API_TIMEOUT": ("backend", "api_timeout_seconds"),
    "SNOWHOUND_DB_PATH": ("cache", "db_path"),
}


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """Load and validate config from a YAML file, then apply env overrides.

    A missing or empty file yields the defaults.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.info("Config file %s not found, using defaults", path)

    raw = apply_env_overrides(raw, os.environ if environ is None else environ)
    return AppConfig(**raw)


def apply_env_overrides(raw: dict[str, Any], environ: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of raw with any set environment variables layered on top."""
    merged = {k: dict(v) if isinstance(v, dict) else v for k, v in raw.items()}
    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value is None or value == "":
            continue
        merged.setdefault(section, {})[field] = value
    return merged


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'cache.ttl_minutes'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def api_key_status(config: AppConfig) -> dict[str, bool]:
    """Which providers have credentials. NWS needs none."""
    return {
        "openweathermap": bool(config.keys.openweather_api_key),
        "weatherapi": bool(config.keys.weatherapi_key),
        "nws": True,
    }
