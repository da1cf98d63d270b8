"""Tests for EarthquakeService.

The Kandilli client is mocked; parsing and filtering run for real.
"""

from unittest.mock import Mock

import pytest
import requests

from afetnet.core.config import Config
from afetnet.core.earthquake import RecordSource
from afetnet.earthquake_service import (
    UNAVAILABLE_MESSAGE,
    EarthquakeDataUnavailableError,
    EarthquakeService,
)


def live_entry(entry_id: str, mag: float) -> dict:
    return {
        "earthquake_id": entry_id,
        "title": "SINDIRGI (BALIKESIR)",
        "date_time": "2024-01-15 12:34:56",
        "mag": mag,
        "depth": 7.0,
        "geojson": {"type": "Point", "coordinates": [28.1, 39.2]},
    }


BULLETIN_TEXT = "\n".join([
    "<pre>",
    "Tarih      Saat      Enlem(N)  Boylam(E) Derinlik(km)  MD   ML   Mw    "
    "Yer                                             Cozum Niteligi",
    "2024.01.15 12:34:56  38.1234   27.1234        7.0      -.-  4.5  -.-   "
    "IZMIR (BUCA)                                     İlksel",
    "2024.01.15 12:30:00  37.0000   36.0000       10.0      -.-  2.0  -.-   "
    "HATAY (ANTAKYA)                                  İlksel",
    "</pre>",
])


@pytest.fixture
def client():
    client = Mock()
    client.fetch_live.return_value = {
        "status": True,
        "result": [live_entry("a", 4.6), live_entry("b", 2.1)],
    }
    client.fetch_bulletin.return_value = BULLETIN_TEXT
    return client


@pytest.fixture
def service(client):
    return EarthquakeService(config=Config(), client=client)


class TestGetLatestEarthquakes:
    """Tests for the live-then-bulletin fallback."""

    def test_live_success_skips_bulletin(self, service, client):
        """A non-empty live result is returned without touching the bulletin."""
        result = service.get_latest_earthquakes(limit=50, min_magnitude=0)

        assert [r.id for r in result] == ["a", "b"]
        assert all(r.source == RecordSource.LIVE_FEED for r in result)
        assert service.last_source == RecordSource.LIVE_FEED
        client.fetch_bulletin.assert_not_called()

    def test_magnitude_filter_applied(self, service):
        result = service.get_latest_earthquakes(min_magnitude=3.0)
        assert [r.id for r in result] == ["a"]

    def test_defaults_come_from_config(self, client):
        service = EarthquakeService(
            config=Config(default_limit=1, default_min_magnitude=0.0),
            client=client,
        )

        result = service.get_latest_earthquakes()

        assert [r.id for r in result] == ["a"]

    def test_falls_back_on_connection_error(self, service, client):
        """A failing live feed moves on to the bulletin."""
        client.fetch_live.side_effect = requests.ConnectionError("network down")

        result = service.get_latest_earthquakes(min_magnitude=0)

        assert [r.location for r in result] == ["IZMIR (BUCA)", "HATAY (ANTAKYA)"]
        assert all(r.source == RecordSource.LEGACY_BULLETIN for r in result)
        assert service.last_source == RecordSource.LEGACY_BULLETIN

    def test_falls_back_on_malformed_payload(self, service, client):
        client.fetch_live.return_value = {"status": False, "result": None}

        result = service.get_latest_earthquakes()

        assert len(result) == 2
        assert service.last_source == RecordSource.LEGACY_BULLETIN

    def test_falls_back_on_invalid_json(self, service, client):
        client.fetch_live.side_effect = ValueError("Expecting value")

        result = service.get_latest_earthquakes()

        assert len(result) == 2

    def test_falls_back_when_live_has_no_matches(self, service, client):
        """Live succeeded but nothing met the filter; bulletin is tried."""
        client.fetch_live.return_value = {
            "result": [live_entry("a", 4.4), live_entry("b", 2.1)],
        }

        result = service.get_latest_earthquakes(min_magnitude=4.5)

        assert [r.magnitude for r in result] == [4.5]
        assert service.last_source == RecordSource.LEGACY_BULLETIN
        client.fetch_live.assert_called_once()
        client.fetch_bulletin.assert_called_once()

    def test_falls_back_when_live_date_out_of_range(self, service, client):
        """A live entry dated 0001-01-01 is dropped and the bulletin serves."""
        entry = {**live_entry("a", 4.6), "date_time": "0001-01-01 00:00:00"}
        client.fetch_live.return_value = {"result": [entry]}

        result = service.get_latest_earthquakes(min_magnitude=4.0)

        assert [r.magnitude for r in result] == [4.5]
        assert service.last_source == RecordSource.LEGACY_BULLETIN

    def test_falls_back_on_overflow_error(self, service, client):
        client.fetch_live.side_effect = OverflowError("date value out of range")

        result = service.get_latest_earthquakes()

        assert len(result) == 2
        assert service.last_source == RecordSource.LEGACY_BULLETIN

    def test_both_fail_raises(self, service, client):
        client.fetch_live.side_effect = requests.Timeout("live timed out")
        client.fetch_bulletin.side_effect = requests.HTTPError("503")

        with pytest.raises(EarthquakeDataUnavailableError) as exc_info:
            service.get_latest_earthquakes()

        assert str(exc_info.value) == UNAVAILABLE_MESSAGE
        assert len(exc_info.value.errors) == 2
        assert exc_info.value.errors[0].startswith("live_feed failed")
        assert exc_info.value.errors[1].startswith("legacy_bulletin failed")
        assert service.last_source is None

    def test_success_without_matches_returns_empty(self, service, client):
        """No earthquakes above the filter is not an error."""
        result = service.get_latest_earthquakes(min_magnitude=9.0)

        assert result == []
        assert service.last_source is None

    def test_live_fails_and_bulletin_empty_returns_empty(self, service, client):
        client.fetch_live.side_effect = requests.ConnectionError("down")
        client.fetch_bulletin.return_value = "<html>maintenance</html>"

        assert service.get_latest_earthquakes() == []

    def test_limit_passed_to_both_sources(self, service, client):
        client.fetch_live.return_value = {"result": [live_entry(str(i), 1.0) for i in range(5)]}

        result = service.get_latest_earthquakes(limit=2, min_magnitude=3.0)

        # Live gave 2 records, neither >= 3.0; bulletin limited to 2 as well
        assert [r.magnitude for r in result] == [4.5]

    @pytest.mark.parametrize("kwargs", [
        {"limit": 0},
        {"limit": -5},
        {"min_magnitude": -1.0},
        {"min_magnitude": float("nan")},
    ])
    def test_invalid_arguments_raise(self, service, client, kwargs):
        with pytest.raises(ValueError):
            service.get_latest_earthquakes(**kwargs)

        client.fetch_live.assert_not_called()

    def test_unexpected_error_propagates(self, service, client):
        """Programming errors are not treated as source failures."""
        client.fetch_live.side_effect = KeyError("bug")

        with pytest.raises(KeyError):
            service.get_latest_earthquakes()
