"""Geographic calculations - Pure functions.

Distance and coordinate checks for earthquake locations.
"""

import math

from afetnet.core.earthquake import EarthquakeRecord


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check that a point lies in valid geographic ranges."""
    return -90 <= latitude <= 90 and -180 <= longitude <= 180


def filter_within_radius(
    records: list[EarthquakeRecord],
    center_lat: float,
    center_lon: float,
    radius_km: float,
) -> list[EarthquakeRecord]:
    """Keep records whose epicenter is within radius_km of a point.

    Pure function.
    """
    return [
        r for r in records
        if calculate_distance(r.latitude, r.longitude, center_lat, center_lon) <= radius_km
    ]
