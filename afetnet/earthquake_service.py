"""Earthquake Service - Wires Functional Core and Imperative Shell.

Produces the best available earthquake list by trying the live JSON
feed first and the legacy bulletin second. The two attempts are
isolated: whatever goes wrong in the first never stops the second.

Callers can tell "no data" apart from "no matches": total failure
raises EarthquakeDataUnavailableError, while a successful fetch with
nothing above the magnitude filter returns an empty list.
"""

import logging
import math
from typing import Callable

import requests

from afetnet.core.bulletin import parse_bulletin
from afetnet.core.config import Config
from afetnet.core.earthquake import EarthquakeRecord, RecordSource, filter_by_magnitude
from afetnet.core.live_feed import MalformedFeedError, normalize_live_feed
from afetnet.shell.kandilli_client import KandilliClient


logger = logging.getLogger(__name__)


UNAVAILABLE_MESSAGE = (
    "Unable to fetch earthquake data. "
    "Please check your internet connection and try again."
)

# Failures that move the service on to the next source
SOURCE_ERRORS = (requests.RequestException, MalformedFeedError, ValueError, OverflowError)


class EarthquakeDataUnavailableError(Exception):
    """Raised when every earthquake source failed."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(UNAVAILABLE_MESSAGE)


class EarthquakeService:
    """Aggregates the live feed and the legacy bulletin.

    Construct one per application (or per test) and pass it to the
    code that needs it.
    """

    def __init__(
        self,
        config: Config | None = None,
        client: KandilliClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Application configuration (defaults if not provided)
            client: Kandilli client (created from config if not provided)
        """
        self.config = config or Config()
        self.client = client or KandilliClient(
            live_url=self.config.live_feed_url,
            bulletin_url=self.config.bulletin_url,
            timeout=self.config.request_timeout_seconds,
            bulletin_encoding=self.config.bulletin_encoding,
        )
        self.last_source: RecordSource | None = None

    def _fetch_live(self, limit: int) -> list[EarthquakeRecord]:
        payload = self.client.fetch_live()
        return normalize_live_feed(payload, limit=limit)

    def _fetch_bulletin(self, limit: int) -> list[EarthquakeRecord]:
        text = self.client.fetch_bulletin()
        return parse_bulletin(text, limit=limit)

    def get_latest_earthquakes(
        self,
        limit: int | None = None,
        min_magnitude: float | None = None,
    ) -> list[EarthquakeRecord]:
        """Get the latest earthquakes from the best available source.

        1. Live feed: fetch, normalize, filter. Non-empty -> return.
        2. Legacy bulletin: fetch, parse, filter. Non-empty -> return.
        3. Both failed -> raise. Otherwise nothing matched -> [].

        Args:
            limit: Maximum records to take from a source (before filtering)
            min_magnitude: Minimum magnitude (inclusive)

        Returns:
            Records from a single source, in source order

        Raises:
            ValueError: If limit or min_magnitude is invalid
            EarthquakeDataUnavailableError: If both sources failed
        """
        if limit is None:
            limit = self.config.default_limit
        if min_magnitude is None:
            min_magnitude = self.config.default_min_magnitude

        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        if math.isnan(min_magnitude) or min_magnitude < 0:
            raise ValueError(f"min_magnitude must be >= 0, got {min_magnitude}")

        attempts: list[tuple[RecordSource, Callable[[int], list[EarthquakeRecord]]]] = [
            (RecordSource.LIVE_FEED, self._fetch_live),
            (RecordSource.LEGACY_BULLETIN, self._fetch_bulletin),
        ]

        errors: list[str] = []
        any_success = False

        for source, fetch in attempts:
            try:
                records = fetch(limit)
            except SOURCE_ERRORS as e:
                error_msg = f"{source.value} failed: {e}"
                logger.warning(error_msg)
                errors.append(error_msg)
                continue

            any_success = True
            filtered = filter_by_magnitude(records, min_magnitude=min_magnitude)

            if filtered:
                logger.info(
                    "Using %s: %d earthquakes (M>=%.1f)",
                    source.value,
                    len(filtered),
                    min_magnitude,
                )
                self.last_source = source
                return filtered

            logger.info(
                "%s returned %d records, none at M>=%.1f",
                source.value,
                len(records),
                min_magnitude,
            )

        self.last_source = None

        if not any_success:
            logger.error("All earthquake sources failed: %s", "; ".join(errors))
            raise EarthquakeDataUnavailableError(errors)

        return []
