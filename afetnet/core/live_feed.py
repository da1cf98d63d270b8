"""Live feed normalization - Pure functions.

Maps the Kandilli live JSON feed into EarthquakeRecords. The feed names
the same value differently across revisions ("mag" vs "magnitude",
"date_time" vs "date"), so each value is looked up through an ordered
alias table: the first name present wins.

The feed is trusted more than the legacy bulletin. Missing or malformed
fields fall back to defaults (0 or "") instead of dropping the record.
The one exception is the timestamp: a record with no parseable time is
dropped, since every EarthquakeRecord must carry a valid occurred_at.
"""

import logging
import math
from typing import Any, Sequence

from afetnet.core.earthquake import (
    EarthquakeRecord,
    RecordSource,
    parse_timestamp,
    synthesize_record_id,
)
from afetnet.core.geo import is_valid_coordinate


logger = logging.getLogger(__name__)


# Alias tables, in precedence order
ID_FIELDS = ("earthquake_id", "_id")
MAGNITUDE_FIELDS = ("mag", "magnitude")
TIME_FIELDS = ("date_time", "date", "created_at")
DEPTH_FIELDS = ("depth",)
LOCATION_FIELDS = ("title",)


class MalformedFeedError(ValueError):
    """Raised when a live feed payload doesn't have the expected shape."""


def first_present(obj: dict[str, Any], fields: Sequence[str]) -> Any:
    """Return the value of the first field that is present and non-empty.

    Pure function.

    Args:
        obj: Source object
        fields: Candidate field names, highest precedence first

    Returns:
        The first non-None, non-empty value, or None
    """
    for name in fields:
        value = obj.get(name)
        if value is not None and value != "":
            return value
    return None


def first_magnitude(obj: dict[str, Any]) -> float:
    """Look up the magnitude through MAGNITUDE_FIELDS, treating 0 as missing.

    Pure function. Some feed revisions send "mag": 0 next to a real
    "magnitude", so a zero (or unparseable) value falls through to the
    next alias. Returns 0.0 if no alias holds a positive number.
    """
    for name in MAGNITUDE_FIELDS:
        value = _to_float(obj.get(name))
        if value > 0:
            return value
    return 0.0


def _to_float(value: Any, default: float = 0.0) -> float:
    """float(value), or default for anything unparseable or non-finite."""
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return result if math.isfinite(result) else default


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _nested_name(properties: Any, key: str) -> str | None:
    """Read location_properties[key]["name"] if it's there."""
    if not isinstance(properties, dict):
        return None
    entry = properties.get(key)
    if not isinstance(entry, dict):
        return None
    return _to_text(entry.get("name"))


def extract_coordinates(obj: dict[str, Any]) -> tuple[float, float]:
    """Read (latitude, longitude) from geojson.coordinates.

    Pure function. GeoJSON orders coordinates [longitude, latitude];
    this returns them as (latitude, longitude). Missing values become 0,
    and a pair outside the valid ranges becomes (0, 0).
    """
    geojson = obj.get("geojson")
    coords: Any = geojson.get("coordinates") if isinstance(geojson, dict) else None

    if not isinstance(coords, (list, tuple)):
        return (0.0, 0.0)

    longitude = _to_float(coords[0]) if len(coords) > 0 else 0.0
    latitude = _to_float(coords[1]) if len(coords) > 1 else 0.0

    if not is_valid_coordinate(latitude, longitude):
        return (0.0, 0.0)

    return (latitude, longitude)


def normalize_live_record(obj: dict[str, Any]) -> EarthquakeRecord | None:
    """Normalize a single live feed object.

    Pure function.

    Args:
        obj: One entry from the feed's "result" array

    Returns:
        EarthquakeRecord, or None if the object has no parseable timestamp
    """
    occurred_at = parse_timestamp(first_present(obj, TIME_FIELDS))
    if occurred_at is None:
        return None

    latitude, longitude = extract_coordinates(obj)
    magnitude = first_magnitude(obj)
    depth_km = max(_to_float(first_present(obj, DEPTH_FIELDS)), 0.0)

    record_id = _to_text(first_present(obj, ID_FIELDS))
    if not record_id:
        record_id = synthesize_record_id(occurred_at, latitude, longitude)

    location_properties = obj.get("location_properties")

    return EarthquakeRecord(
        id=record_id,
        magnitude=magnitude,
        location=_to_text(first_present(obj, LOCATION_FIELDS)) or "",
        depth_km=depth_km,
        occurred_at=occurred_at,
        latitude=latitude,
        longitude=longitude,
        source=RecordSource.LIVE_FEED,
        provider=_to_text(obj.get("provider")) or "kandilli",
        closest_city=_nested_name(location_properties, "closestCity"),
        epicenter=_nested_name(location_properties, "epiCenter"),
        revision=_to_text(obj.get("rev")),
    )


def normalize_live_feed(payload: Any, limit: int | None = None) -> list[EarthquakeRecord]:
    """Normalize a full live feed response.

    Pure function (logging aside).

    Args:
        payload: Decoded JSON document, expected as {"result": [...]}
        limit: Only the first `limit` entries are considered

    Returns:
        Normalized records in feed order

    Raises:
        MalformedFeedError: If the payload has no "result" list
    """
    if not isinstance(payload, dict):
        raise MalformedFeedError("Live feed payload is not a JSON object")

    entries = payload.get("result")
    if not isinstance(entries, list):
        raise MalformedFeedError("Live feed payload has no 'result' list")

    if limit is not None:
        entries = entries[:limit]

    records = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object live feed entry: %r", entry)
            continue

        record = normalize_live_record(entry)
        if record is None:
            logger.warning(
                "Dropping live feed entry %s: unparseable timestamp",
                entry.get("earthquake_id", "<no id>"),
            )
            continue

        records.append(record)

    return records
