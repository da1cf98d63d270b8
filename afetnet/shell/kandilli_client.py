"""Kandilli API Client - Imperative Shell.

This module handles HTTP communication with the two Kandilli
Observatory sources: the live JSON feed and the legacy plaintext
bulletin. All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from afetnet.core.config import DEFAULT_BULLETIN_URL, DEFAULT_LIVE_FEED_URL


logger = logging.getLogger(__name__)


# Default timeout for each request (seconds)
DEFAULT_TIMEOUT = 10

LIVE_FEED_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "AfetNet Mobile App",
}

# The bulletin host rejects requests that don't look like a browser
BULLETIN_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


class KandilliClient:
    """Client for fetching earthquake data from Kandilli sources.

    This is part of the imperative shell - it handles HTTP I/O. Each
    fetch uses its own timeout, so a slow source never shortens the
    time allowed for the other.
    """

    def __init__(
        self,
        live_url: str = DEFAULT_LIVE_FEED_URL,
        bulletin_url: str = DEFAULT_BULLETIN_URL,
        timeout: float = DEFAULT_TIMEOUT,
        bulletin_encoding: str = "iso-8859-9",
    ) -> None:
        """Initialize Kandilli client.

        Args:
            live_url: Live JSON feed URL
            bulletin_url: Legacy bulletin URL
            timeout: Request timeout in seconds
            bulletin_encoding: Encoding used to decode the bulletin page
        """
        self.live_url = live_url
        self.bulletin_url = bulletin_url
        self.timeout = timeout
        self.bulletin_encoding = bulletin_encoding

    def fetch_live(self) -> Any:
        """Fetch the live JSON feed.

        This method performs HTTP I/O.

        Returns:
            Decoded JSON document (expected shape: {"result": [...]})

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the body is not valid JSON
        """
        logger.info("Fetching live feed from %s", self.live_url)

        response = requests.get(
            self.live_url,
            headers=LIVE_FEED_HEADERS,
            timeout=self.timeout,
        )
        response.raise_for_status()

        data = response.json()

        if isinstance(data, dict) and isinstance(data.get("result"), list):
            logger.info("Fetched %d entries from live feed", len(data["result"]))

        return data

    def fetch_bulletin(self) -> str:
        """Fetch the legacy bulletin page.

        This method performs HTTP I/O.

        Returns:
            Page body as text

        Raises:
            requests.RequestException: If the request fails
        """
        logger.info("Fetching legacy bulletin from %s", self.bulletin_url)

        response = requests.get(
            self.bulletin_url,
            headers=BULLETIN_HEADERS,
            timeout=self.timeout,
        )
        response.raise_for_status()

        # The page doesn't declare a charset in its headers
        response.encoding = self.bulletin_encoding
        text = response.text

        logger.info("Fetched legacy bulletin (%d characters)", len(text))

        return text
