"""Tests for config loading, env overrides and dotted-key lookup."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError as PydanticValidationError

from snowhound.config.loader import (
    api_key_status,
    apply_env_overrides,
    get_config_value,
    load_config,
)
from snowhound.config.schema import AppConfig


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml", environ={})
        assert config == AppConfig()
        assert config.cache.ttl_minutes == 60
        assert config.depth.max_history == 30

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path, environ={})
        assert config.features.use_backend is False
        assert config.http.user_agent == "SnowHound Weather App"

    def test_load_from_yaml(self, tmp_path: Path):
        path = tmp_path / "cfg.yaml"
        with open(path, "w") as f:
            yaml.dump(
                {
                    "features": {"use_backend": True},
                    "backend": {"api_base_url": "http://backend:9000"},
                    "cache": {"ttl_minutes": 5},
                },
                f,
            )
        config = load_config(path, environ={})
        assert config.features.use_backend is True
        assert config.backend.api_base_url == "http://backend:9000"
        assert config.cache.ttl_minutes == 5

    def test_env_overrides_yaml(self, tmp_path: Path):
        path = tmp_path / "cfg.yaml"
        with open(path, "w") as f:
            yaml.dump({"keys": {"weatherapi_key": "from-yaml"}}, f)
        config = load_config(
            path,
            environ={
                "WEATHERAPI_KEY": "from-env",
                "OPENWEATHER_API_KEY": "ow",
                "SNOWHOUND_ENABLE_MOCK_DATA": "true",
                "SNOWHOUND_API_TIMEOUT": "12.5",
            },
        )
        assert config.keys.weatherapi_key == "from-env"
        assert config.keys.openweather_api_key == "ow"
        assert config.features.enable_mock_data is True
        assert config.backend.api_timeout_seconds == 12.5

    def test_empty_env_value_ignored(self):
        merged = apply_env_overrides({"keys": {"weatherapi_key": "k"}}, {"WEATHERAPI_KEY": ""})
        assert merged["keys"]["weatherapi_key"] == "k"

    def test_apply_env_overrides_does_not_mutate_input(self):
        raw = {"keys": {"weatherapi_key": "k"}}
        apply_env_overrides(raw, {"WEATHERAPI_KEY": "other"})
        assert raw["keys"]["weatherapi_key"] == "k"

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"cache": {"ttl": 5}}, f)
        with pytest.raises(PydanticValidationError):
            load_config(path, environ={})

    def test_out_of_range_timeout_rejected(self):
        with pytest.raises(PydanticValidationError):
            AppConfig(http={"timeout_seconds": 120})

    def test_config_is_immutable(self):
        config = AppConfig()
        with pytest.raises(PydanticValidationError):
            config.features.use_backend = True


class TestConfigValues:
    def test_get_dotted_key(self):
        assert get_config_value(AppConfig(), "rate_limit.max_requests") == 50

    def test_get_missing_key(self):
        with pytest.raises(KeyError):
            get_config_value(AppConfig(), "cache.nonexistent")

    def test_api_key_status(self, config: AppConfig):
        assert api_key_status(config) == {
            "openweathermap": True,
            "weatherapi": True,
            "nws": True,
        }
        assert api_key_status(AppConfig())["weatherapi"] is False
        assert api_key_status(AppConfig())["nws"] is True
