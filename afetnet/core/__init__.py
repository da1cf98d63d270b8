"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Severity classification
- Earthquake record model and filters
- Legacy bulletin parsing
- Live feed normalization
- Synthetic disaster generation

All functions here are deterministic and have no I/O.
"""

from afetnet.core.severity import SeverityLevel, classify_severity, severity_color
from afetnet.core.earthquake import EarthquakeRecord, RecordSource, filter_by_magnitude
from afetnet.core.bulletin import parse_bulletin
from afetnet.core.live_feed import MalformedFeedError, normalize_live_feed
from afetnet.core.disaster import (
    DisasterEvent,
    DisasterSeverity,
    DisasterType,
    generate_random_disaster,
)

__all__ = [
    # Severity
    "SeverityLevel",
    "classify_severity",
    "severity_color",
    # Earthquake
    "EarthquakeRecord",
    "RecordSource",
    "filter_by_magnitude",
    # Parsers
    "parse_bulletin",
    "normalize_live_feed",
    "MalformedFeedError",
    # Disaster simulation
    "DisasterEvent",
    "DisasterSeverity",
    "DisasterType",
    "generate_random_disaster",
]
