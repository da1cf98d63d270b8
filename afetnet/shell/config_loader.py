"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, SimulationSettings) are defined in afetnet/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from afetnet.core.config import (
    DEFAULT_BULLETIN_URL,
    DEFAULT_LIVE_FEED_URL,
    Config,
    SimulationSettings,
)


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} environment placeholder.

    Non-string values and strings without a placeholder are returned
    unchanged. An unset variable leaves the placeholder in place, which
    validate_config() reports.

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_simulation(data: dict[str, Any]) -> SimulationSettings:
    """Parse broadcaster timing from config data."""
    defaults = SimulationSettings()
    return SimulationSettings(
        first_delay_seconds=float(data.get("first_delay_seconds", defaults.first_delay_seconds)),
        min_interval_seconds=float(data.get("min_interval_seconds", defaults.min_interval_seconds)),
        max_interval_seconds=float(data.get("max_interval_seconds", defaults.max_interval_seconds)),
        retention_hours=float(data.get("retention_hours", defaults.retention_hours)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    sources = data.get("sources", {}) or {}
    defaults = data.get("defaults", {}) or {}

    return Config(
        live_feed_url=_resolve_value(sources.get("live_feed_url", DEFAULT_LIVE_FEED_URL)),
        bulletin_url=_resolve_value(sources.get("bulletin_url", DEFAULT_BULLETIN_URL)),
        request_timeout_seconds=float(sources.get("request_timeout_seconds", 10)),
        bulletin_encoding=sources.get("bulletin_encoding", "iso-8859-9"),
        default_limit=int(defaults.get("limit", 50)),
        max_limit=int(defaults.get("max_limit", 500)),
        default_min_magnitude=float(defaults.get("min_magnitude", 0.0)),
        simulation=_parse_simulation(data.get("simulation", {}) or {}),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: live=%s bulletin=%s timeout=%ss",
        config.live_feed_url,
        config.bulletin_url,
        config.request_timeout_seconds,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for deployments without a YAML file.

    Environment variables:
        LIVE_FEED_URL: Live JSON feed endpoint
        BULLETIN_URL: Legacy bulletin endpoint
        REQUEST_TIMEOUT: Per-request timeout in seconds
        DEFAULT_LIMIT: Default number of records returned
        MIN_MAGNITUDE: Default minimum magnitude

    Returns:
        Config object from environment
    """
    return Config(
        live_feed_url=os.environ.get("LIVE_FEED_URL", DEFAULT_LIVE_FEED_URL),
        bulletin_url=os.environ.get("BULLETIN_URL", DEFAULT_BULLETIN_URL),
        request_timeout_seconds=float(os.environ.get("REQUEST_TIMEOUT", "10")),
        default_limit=int(os.environ.get("DEFAULT_LIMIT", "50")),
        default_min_magnitude=float(os.environ.get("MIN_MAGNITUDE", "0")),
    )
