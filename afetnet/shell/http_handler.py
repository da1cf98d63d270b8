"""HTTP Handler - Serves earthquake data to the mobile app.

Part of the imperative shell - translates HTTP requests into calls on
EarthquakeService and its results into JSON responses.
"""

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from flask import Request, Response

from afetnet.core.geo import filter_within_radius, is_valid_coordinate
from afetnet.earthquake_service import EarthquakeDataUnavailableError, EarthquakeService


logger = logging.getLogger(__name__)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}


class BadRequest(ValueError):
    """Raised for invalid query parameters."""


@dataclass(frozen=True)
class EarthquakeQuery:
    """Validated query parameters.

    Attributes:
        limit: Maximum records to fetch
        min_magnitude: Minimum magnitude (inclusive)
        latitude: Center latitude for radius filtering (optional)
        longitude: Center longitude for radius filtering (optional)
        radius_km: Radius for filtering (optional)
    """
    limit: int
    min_magnitude: float
    latitude: float | None = None
    longitude: float | None = None
    radius_km: float | None = None


def _json_response(data: dict[str, Any], status: int = 200) -> Response:
    """Create a JSON response with CORS headers."""
    response = Response(
        json.dumps(data, default=str, ensure_ascii=False),
        status=status,
        mimetype="application/json",
    )
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response


def _float_arg(args: Any, name: str) -> float | None:
    raw = args.get(name)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise BadRequest(f"{name} must be a number, got {raw!r}")
    if math.isnan(value) or math.isinf(value):
        raise BadRequest(f"{name} must be a finite number")
    return value


def parse_query(args: Any, default_limit: int, max_limit: int, default_min_magnitude: float) -> EarthquakeQuery:
    """Validate query parameters.

    Args:
        args: Request args mapping
        default_limit: Limit when none given
        max_limit: Largest accepted limit
        default_min_magnitude: Magnitude filter when none given

    Returns:
        EarthquakeQuery

    Raises:
        BadRequest: If a parameter is malformed or out of range
    """
    raw_limit = args.get("limit")
    if raw_limit is None or raw_limit == "":
        limit = default_limit
    else:
        try:
            limit = int(raw_limit)
        except ValueError:
            raise BadRequest(f"limit must be an integer, got {raw_limit!r}")
        if not 1 <= limit <= max_limit:
            raise BadRequest(f"limit must be between 1 and {max_limit}")

    min_magnitude = _float_arg(args, "min_magnitude")
    if min_magnitude is None:
        min_magnitude = default_min_magnitude
    elif min_magnitude < 0:
        raise BadRequest("min_magnitude must be >= 0")

    latitude = _float_arg(args, "lat")
    longitude = _float_arg(args, "lon")
    radius_km = _float_arg(args, "radius_km")

    location_args = (latitude, longitude, radius_km)
    if any(v is not None for v in location_args):
        if any(v is None for v in location_args):
            raise BadRequest("lat, lon and radius_km must be given together")
        if not is_valid_coordinate(latitude, longitude):
            raise BadRequest("lat/lon out of range")
        if radius_km <= 0:
            raise BadRequest("radius_km must be positive")

    return EarthquakeQuery(
        limit=limit,
        min_magnitude=min_magnitude,
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
    )


def handle_earthquakes(request: Request, service: EarthquakeService) -> Response:
    """API endpoint: latest earthquakes.

    Query params:
        limit: Number of records to fetch (default from config)
        min_magnitude: Minimum magnitude (default from config)
        lat, lon, radius_km: Optional "near me" filter

    Returns:
        200 with {earthquakes, count, source, fetched_at} (count may be 0),
        400 for invalid parameters,
        503 when no source could be reached
    """
    if request.method == "OPTIONS":
        response = Response("", status=204)
        for key, value in CORS_HEADERS.items():
            response.headers[key] = value
        return response

    if request.method != "GET":
        return _json_response({"error": "Method not allowed"}, status=405)

    config = service.config
    try:
        query = parse_query(
            request.args,
            default_limit=config.default_limit,
            max_limit=config.max_limit,
            default_min_magnitude=config.default_min_magnitude,
        )
    except BadRequest as e:
        return _json_response({"error": str(e)}, status=400)

    try:
        records = service.get_latest_earthquakes(
            limit=query.limit,
            min_magnitude=query.min_magnitude,
        )
    except EarthquakeDataUnavailableError as e:
        return _json_response({"error": str(e)}, status=503)

    if query.radius_km is not None:
        records = filter_within_radius(
            records,
            query.latitude,
            query.longitude,
            query.radius_km,
        )

    source = service.last_source.value if service.last_source else None

    return _json_response({
        "earthquakes": [r.to_dict() for r in records],
        "count": len(records),
        "source": source,
        "fetched_at": datetime.now(timezone.utc).isoformat(),
    })
