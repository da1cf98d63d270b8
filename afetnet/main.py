"""Cloud Function Entry Point.

This module provides the entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration, builds the service and
hands the request to the HTTP handler.
"""

import logging
import os

import functions_framework
from flask import Request, Response

from afetnet.core.config import Config, validate_config
from afetnet.earthquake_service import EarthquakeService
from afetnet.shell.config_loader import load_config, load_config_from_env
from afetnet.shell.http_handler import handle_earthquakes


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _get_config() -> Config:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        config = load_config(config_path)
    elif os.environ.get("LIVE_FEED_URL") or os.environ.get("BULLETIN_URL"):
        config = load_config_from_env()
    else:
        config = load_config()

    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    for error in result.critical_errors:
        logger.error("Config %s: %s", error.field, error.message)

    return config


def build_service() -> EarthquakeService:
    """Composition root: one service per configuration load."""
    return EarthquakeService(_get_config())


@functions_framework.http
def earthquakes(request: Request) -> Response:
    """HTTP Cloud Function entry point.

    Args:
        request: Flask request object

    Returns:
        JSON response with the latest earthquakes
    """
    logger.info("Handling earthquake request: %s", dict(request.args))
    return handle_earthquakes(request, build_service())
