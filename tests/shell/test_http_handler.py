"""Tests for the HTTP handler.

Requests are built with Flask's Request.from_values(); the service is a
Mock, so no network access happens.
"""

import json
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from flask import Request

from afetnet.core.config import Config
from afetnet.core.earthquake import EarthquakeRecord, RecordSource
from afetnet.earthquake_service import EarthquakeDataUnavailableError
from afetnet.shell.http_handler import (
    BadRequest,
    EarthquakeQuery,
    handle_earthquakes,
    parse_query,
)


def make_record(record_id: str, latitude: float, longitude: float, magnitude: float = 4.0):
    return EarthquakeRecord(
        id=record_id,
        magnitude=magnitude,
        location="Sındırgı (Balıkesir)",
        depth_km=7.0,
        occurred_at=datetime(2024, 1, 15, 9, 34, 56, tzinfo=timezone.utc),
        latitude=latitude,
        longitude=longitude,
        source=RecordSource.LIVE_FEED,
    )


ISTANBUL = make_record("ist", 41.0082, 28.9784)
VAN = make_record("van", 38.4891, 43.4089)


@pytest.fixture
def service():
    service = Mock()
    service.config = Config()
    service.get_latest_earthquakes.return_value = [ISTANBUL, VAN]
    service.last_source = RecordSource.LIVE_FEED
    return service


def get(query: dict | None = None, method: str = "GET") -> Request:
    return Request.from_values(path="/", query_string=query or {}, method=method)


def body_of(response) -> dict:
    return json.loads(response.get_data(as_text=True))


class TestParseQuery:
    """Tests for parse_query() validation."""

    def parse(self, args):
        return parse_query(args, default_limit=50, max_limit=500, default_min_magnitude=0.0)

    def test_defaults(self):
        assert self.parse({}) == EarthquakeQuery(limit=50, min_magnitude=0.0)

    def test_explicit_values(self):
        query = self.parse({"limit": "10", "min_magnitude": "3.5"})

        assert query.limit == 10
        assert query.min_magnitude == 3.5

    def test_location_filter(self):
        query = self.parse({"lat": "41", "lon": "29", "radius_km": "100"})
        assert (query.latitude, query.longitude, query.radius_km) == (41.0, 29.0, 100.0)

    @pytest.mark.parametrize("args", [
        {"limit": "abc"},
        {"limit": "0"},
        {"limit": "501"},
        {"limit": "2.5"},
        {"min_magnitude": "-1"},
        {"min_magnitude": "nan"},
        {"min_magnitude": "big"},
        {"lat": "41", "lon": "29"},
        {"lat": "95", "lon": "29", "radius_km": "10"},
        {"lat": "41", "lon": "29", "radius_km": "0"},
        {"lat": "41", "lon": "inf", "radius_km": "10"},
    ])
    def test_rejects_invalid(self, args):
        with pytest.raises(BadRequest):
            self.parse(args)


class TestHandleEarthquakes:
    """Tests for handle_earthquakes()."""

    def test_success(self, service):
        response = handle_earthquakes(get({"limit": "20", "min_magnitude": "2"}), service)

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        body = body_of(response)
        assert body["count"] == 2
        assert body["source"] == "live_feed"
        assert [e["id"] for e in body["earthquakes"]] == ["ist", "van"]
        assert body["earthquakes"][0]["location"] == "Sındırgı (Balıkesir)"
        assert "fetched_at" in body
        service.get_latest_earthquakes.assert_called_once_with(limit=20, min_magnitude=2.0)

    def test_uses_config_defaults(self, service):
        service.config = Config(default_limit=7, default_min_magnitude=1.5)

        handle_earthquakes(get(), service)

        service.get_latest_earthquakes.assert_called_once_with(limit=7, min_magnitude=1.5)

    def test_radius_filter(self, service):
        """Only records within radius_km of lat/lon are returned."""
        response = handle_earthquakes(
            get({"lat": "41.0", "lon": "29.0", "radius_km": "50"}),
            service,
        )

        body = body_of(response)
        assert response.status_code == 200
        assert [e["id"] for e in body["earthquakes"]] == ["ist"]
        assert body["count"] == 1

    def test_empty_result_is_200(self, service):
        service.get_latest_earthquakes.return_value = []
        service.last_source = None

        response = handle_earthquakes(get(), service)

        assert response.status_code == 200
        assert body_of(response) == {
            "earthquakes": [],
            "count": 0,
            "source": None,
            "fetched_at": body_of(response)["fetched_at"],
        }

    def test_bad_request(self, service):
        response = handle_earthquakes(get({"limit": "lots"}), service)

        assert response.status_code == 400
        assert "limit" in body_of(response)["error"]
        service.get_latest_earthquakes.assert_not_called()

    def test_unavailable(self, service):
        service.get_latest_earthquakes.side_effect = EarthquakeDataUnavailableError(
            ["live_feed failed: timeout", "legacy_bulletin failed: 503"]
        )

        response = handle_earthquakes(get(), service)

        assert response.status_code == 503
        assert body_of(response)["error"].startswith("Unable to fetch earthquake data")

    def test_options_preflight(self, service):
        response = handle_earthquakes(get(method="OPTIONS"), service)

        assert response.status_code == 204
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        service.get_latest_earthquakes.assert_not_called()

    def test_method_not_allowed(self, service):
        response = handle_earthquakes(get(method="POST"), service)
        assert response.status_code == 405
