"""Earthquake data models - Pure functions.

This module defines the canonical EarthquakeRecord that both the live
JSON feed and the legacy text bulletin are normalized into, plus the
pure helpers shared by both parsers. All functions are pure with no
side effects.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from afetnet.core.severity import (
    SeverityLevel,
    classify_severity,
    is_aftershock,
    severity_color,
)


# Kandilli publishes times in Turkey local time (UTC+3, no DST since 2016)
TURKEY_TZ = timezone(timedelta(hours=3), name="TRT")

_DOTTED_TIMESTAMP = re.compile(
    r"^(\d{4})\.(\d{2})\.(\d{2})[ T](\d{2}):(\d{2}):(\d{2})$"
)


class RecordSource(str, Enum):
    """Where an earthquake record came from."""
    LIVE_FEED = "live_feed"
    LEGACY_BULLETIN = "legacy_bulletin"


@dataclass(frozen=True)
class EarthquakeRecord:
    """Immutable, normalized earthquake record.

    Severity, color and the aftershock flag are derived from magnitude
    and are never stored independently.

    Attributes:
        id: Unique record ID (source ID or synthesized from time + coordinates)
        magnitude: Earthquake magnitude, >= 0
        location: Free-text place name
        depth_km: Depth in kilometers, >= 0
        occurred_at: Event timestamp (UTC)
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        source: Which upstream source produced the record
        quality: Source quality/revision flag (optional)
        provider: Upstream provider name (live feed only)
        closest_city: Nearest city reported by the live feed
        epicenter: Epicenter region reported by the live feed
        revision: Live feed revision marker
    """
    id: str
    magnitude: float
    location: str
    depth_km: float
    occurred_at: datetime
    latitude: float
    longitude: float
    source: RecordSource
    quality: str | None = None
    provider: str | None = None
    closest_city: str | None = None
    epicenter: str | None = None
    revision: str | None = None

    @property
    def severity(self) -> SeverityLevel:
        return classify_severity(self.magnitude)

    @property
    def color(self) -> str:
        return severity_color(self.magnitude)

    @property
    def is_aftershock(self) -> bool:
        return is_aftershock(self.magnitude)

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "id": self.id,
            "magnitude": self.magnitude,
            "location": self.location,
            "depth_km": self.depth_km,
            "occurred_at": self.occurred_at.isoformat(),
            "latitude": self.latitude,
            "longitude": self.longitude,
            "source": self.source.value,
            "severity": self.severity.value,
            "color": self.color,
            "is_aftershock": self.is_aftershock,
            "quality": self.quality,
            "provider": self.provider,
            "closest_city": self.closest_city,
            "epicenter": self.epicenter,
            "revision": self.revision,
        }


def parse_timestamp(
    value: Any,
    default_tz: timezone = TURKEY_TZ,
) -> datetime | None:
    """Parse a source timestamp into a UTC datetime.

    Pure function. Accepts ISO-8601 strings (with "T" or space separator,
    with or without offset) and the dotted "YYYY.MM.DD HH:MM:SS" form used
    by Kandilli. Naive values are interpreted in default_tz. Numbers are
    taken as epoch seconds.

    Args:
        value: Raw timestamp value
        default_tz: Timezone for values without an offset

    Returns:
        Timezone-aware UTC datetime, or None if the value can't be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Epoch seconds, as in the live feed's created_at
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None

        match = _DOTTED_TIMESTAMP.match(text)
        try:
            if match:
                parsed = datetime(*(int(part) for part in match.groups()))
            else:
                # fromisoformat() only accepts "Z" from Python 3.11 on
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)

    # Converting dates at the ends of the calendar can leave datetime's range
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def synthesize_record_id(occurred_at: datetime, latitude: float, longitude: float) -> str:
    """Build a stable ID from time and coordinates for sources without IDs.

    The time is written in Turkey local time. Times that can't be shifted
    to it (the last hours of year 9999) are written as given.
    """
    try:
        local = occurred_at.astimezone(TURKEY_TZ)
    except (OverflowError, ValueError):
        local = occurred_at
    return f"kandilli_{local:%Y.%m.%d_%H:%M:%S}_{latitude}_{longitude}"


def filter_by_magnitude(
    records: list[EarthquakeRecord],
    min_magnitude: float | None = None,
    max_magnitude: float | None = None,
) -> list[EarthquakeRecord]:
    """Filter records by magnitude range.

    Pure function.

    Args:
        records: Records to filter
        min_magnitude: Minimum magnitude (inclusive), None for no minimum
        max_magnitude: Maximum magnitude (inclusive), None for no maximum

    Returns:
        Filtered list of records, original order preserved
    """
    result = records

    if min_magnitude is not None:
        result = [r for r in result if r.magnitude >= min_magnitude]

    if max_magnitude is not None:
        result = [r for r in result if r.magnitude <= max_magnitude]

    return result


def filter_by_time(
    records: list[EarthquakeRecord],
    after: datetime | None = None,
    before: datetime | None = None,
) -> list[EarthquakeRecord]:
    """Filter records by time range.

    Pure function.
    """
    result = records

    if after is not None:
        result = [r for r in result if r.occurred_at > after]

    if before is not None:
        result = [r for r in result if r.occurred_at < before]

    return result


def sort_newest_first(records: list[EarthquakeRecord]) -> list[EarthquakeRecord]:
    """Sort records by time, newest first. Pure function."""
    return sorted(records, key=lambda r: r.occurred_at, reverse=True)


def _age(occurred_at: datetime, now: datetime) -> tuple[int, int, int]:
    """Whole minutes, hours and days between occurred_at and now."""
    minutes = int((now - occurred_at).total_seconds() // 60)
    hours = minutes // 60
    return minutes, hours, hours // 24


def format_time_ago(occurred_at: datetime, now: datetime) -> str:
    """Format the age of an event the way the app's list rows show it.

    Pure function.

    Args:
        occurred_at: Event time
        now: Reference time

    Returns:
        "just now", "N min ago", "N h ago" or "N days ago"
    """
    minutes, hours, days = _age(occurred_at, now)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours} h ago"
    return f"{days} days ago"


def format_time_ago_tr(occurred_at: datetime, now: datetime) -> str:
    """Turkish form of format_time_ago(), as the app displays it.

    Pure function. Returns "Şimdi", "N dk önce", "N sa önce" or
    "N gün önce".
    """
    minutes, hours, days = _age(occurred_at, now)

    if minutes < 1:
        return "Şimdi"
    if minutes < 60:
        return f"{minutes} dk önce"
    if hours < 24:
        return f"{hours} sa önce"
    return f"{days} gün önce"
