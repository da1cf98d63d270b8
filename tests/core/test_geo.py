"""Unit tests for geographic calculations."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from afetnet.core.earthquake import EarthquakeRecord, RecordSource
from afetnet.core.geo import calculate_distance, filter_within_radius, is_valid_coordinate


def make_record(record_id: str, latitude: float, longitude: float) -> EarthquakeRecord:
    return EarthquakeRecord(
        id=record_id,
        magnitude=3.0,
        location="",
        depth_km=5.0,
        occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        latitude=latitude,
        longitude=longitude,
        source=RecordSource.LIVE_FEED,
    )


class TestCalculateDistance:
    """Tests for calculate_distance() Haversine implementation."""

    def test_same_point_is_zero(self):
        assert calculate_distance(41.0, 29.0, 41.0, 29.0) == 0.0

    def test_istanbul_to_ankara(self):
        """Istanbul to Ankara is roughly 350 km as the crow flies."""
        dist = calculate_distance(41.0082, 28.9784, 39.9334, 32.8597)
        assert 340 < dist < 360

    def test_symmetric(self):
        a = calculate_distance(38.4, 27.1, 37.0, 35.3)
        b = calculate_distance(37.0, 35.3, 38.4, 27.1)
        assert a == pytest.approx(b)


class TestIsValidCoordinate:
    @pytest.mark.parametrize("lat,lon,expected", [
        (0, 0, True),
        (90, 180, True),
        (-90, -180, True),
        (90.1, 0, False),
        (0, 180.5, False),
        (-91, 0, False),
    ])
    def test_ranges(self, lat, lon, expected):
        assert is_valid_coordinate(lat, lon) is expected


class TestFilterWithinRadius:
    def test_keeps_only_nearby(self):
        izmir = make_record("izmir", 38.4192, 27.1287)
        manisa = make_record("manisa", 38.6191, 27.4289)
        van = make_record("van", 38.4891, 43.4089)

        result = filter_within_radius([izmir, manisa, van], 38.42, 27.13, 100)

        assert [r.id for r in result] == ["izmir", "manisa"]

    def test_empty_input(self):
        assert filter_within_radius([], 0, 0, 10) == []

    def test_boundary_is_inclusive(self):
        record = make_record("r", 0.0, 1.0)
        distance = calculate_distance(0.0, 1.0, 0.0, 0.0)

        assert filter_within_radius([record], 0.0, 0.0, distance) == [record]
        assert filter_within_radius([replace(record, longitude=1.01)], 0.0, 0.0, distance) == []
