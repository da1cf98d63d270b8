"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
from unittest.mock import patch

import pytest
import yaml

from afetnet.core.config import (
    DEFAULT_BULLETIN_URL,
    DEFAULT_LIVE_FEED_URL,
    Config,
    SimulationSettings,
)
from afetnet.shell.config_loader import (
    _parse_simulation,
    _resolve_value,
    load_config,
    load_config_from_dict,
    load_config_from_env,
)


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        """Non-string values are returned unchanged."""
        assert _resolve_value(123) == 123
        assert _resolve_value(None) is None
        assert _resolve_value(True) is True

    def test_returns_plain_string_unchanged(self):
        assert _resolve_value("https://example.com") == "https://example.com"

    def test_resolves_env_var_placeholder(self):
        """Resolves ${VAR} placeholders from environment."""
        with patch.dict(os.environ, {"TEST_VAR": "test_value"}):
            assert _resolve_value("${TEST_VAR}") == "test_value"

    def test_returns_placeholder_if_env_var_not_set(self):
        """Returns original placeholder if env var not set."""
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"


class TestParseSimulation:
    def test_empty_uses_defaults(self):
        assert _parse_simulation({}) == SimulationSettings()

    def test_overrides(self):
        settings = _parse_simulation({"min_interval_seconds": 5, "retention_hours": 1})

        assert settings.min_interval_seconds == 5.0
        assert settings.retention_hours == 1.0
        assert settings.max_interval_seconds == 300.0


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == Config()

    def test_full_config(self):
        data = {
            "sources": {
                "live_feed_url": "https://mirror.example/live",
                "bulletin_url": "https://mirror.example/lst0.asp",
                "request_timeout_seconds": 4,
                "bulletin_encoding": "utf-8",
            },
            "defaults": {"limit": 20, "max_limit": 100, "min_magnitude": 2.5},
            "simulation": {"first_delay_seconds": 0.5},
        }

        config = load_config_from_dict(data)

        assert config.live_feed_url == "https://mirror.example/live"
        assert config.bulletin_url == "https://mirror.example/lst0.asp"
        assert config.request_timeout_seconds == 4.0
        assert config.bulletin_encoding == "utf-8"
        assert config.default_limit == 20
        assert config.max_limit == 100
        assert config.default_min_magnitude == 2.5
        assert config.simulation.first_delay_seconds == 0.5

    def test_null_sections_are_tolerated(self):
        config = load_config_from_dict({"sources": None, "defaults": None, "simulation": None})
        assert config == Config()

    def test_resolves_url_placeholders(self):
        data = {"sources": {"live_feed_url": "${LIVE_URL}"}}

        with patch.dict(os.environ, {"LIVE_URL": "https://env.example/live"}):
            config = load_config_from_dict(data)

        assert config.live_feed_url == "https://env.example/live"


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"defaults": {"limit": 10}}), encoding="utf-8")

        config = load_config(path)

        assert config.default_limit == 10
        assert config.live_feed_url == DEFAULT_LIVE_FEED_URL

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == Config()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path) == Config()

    def test_uses_config_path_env_var(self, tmp_path):
        path = tmp_path / "from_env.yaml"
        path.write_text("defaults:\n  min_magnitude: 3.0\n", encoding="utf-8")

        with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
            config = load_config()

        assert config.default_min_magnitude == 3.0

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sources: [unclosed", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            load_config(path)


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_defaults_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config_from_env()

        assert config.live_feed_url == DEFAULT_LIVE_FEED_URL
        assert config.bulletin_url == DEFAULT_BULLETIN_URL
        assert config.default_limit == 50

    def test_reads_environment(self):
        env = {
            "LIVE_FEED_URL": "https://env.example/live",
            "BULLETIN_URL": "https://env.example/lst0.asp",
            "REQUEST_TIMEOUT": "2.5",
            "DEFAULT_LIMIT": "15",
            "MIN_MAGNITUDE": "4",
        }

        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.live_feed_url == "https://env.example/live"
        assert config.bulletin_url == "https://env.example/lst0.asp"
        assert config.request_timeout_seconds == 2.5
        assert config.default_limit == 15
        assert config.default_min_magnitude == 4.0
