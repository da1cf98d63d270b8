"""Legacy bulletin parsing - Pure functions.

Parses the fixed-column plaintext listing published by Kandilli
Observatory (lst0.asp) into EarthquakeRecords. The page wraps a table
like:

    Tarih      Saat      Enlem(N)  Boylam(E) Derinlik(km)  MD   ML   Mw    Yer          Cozum Niteligi
    ---------- --------  --------  -------   ----------    ------------    -----------  --------------
    2024.01.15 12:34:56  38.1234   27.1234        7.0      -.-  2.1  -.-   IZMIR (BUCA)  İlksel

Parsing is best-effort: a malformed line is skipped, never fatal. Any
change to the column order or header text upstream silently yields no
rows; the tests pin the grammar below.
"""

import logging
import re
from dataclasses import dataclass

from afetnet.core.earthquake import (
    EarthquakeRecord,
    RecordSource,
    TURKEY_TZ,
    parse_timestamp,
)
from afetnet.core.geo import is_valid_coordinate


logger = logging.getLogger(__name__)


BULLETIN_GRAMMAR_VERSION = 1

# Data rows start on the line after this column header
HEADER_SENTINEL = "Tarih      Saat      Enlem(N)  Boylam(E)"

# Shorter lines are blank, separators or page chrome
MIN_LINE_LENGTH = 50

# Kandilli writes "-.-" for a magnitude estimate it does not have
MISSING_MAGNITUDE = "-.-"

_NUMBER = r"-?\d+(?:\.\d+)?"
_MAGNITUDE = r"-\.-|\d+(?:\.\d+)?"

ROW_PATTERN = re.compile(
    rf"^(?P<date>\d{{4}}\.\d{{2}}\.\d{{2}})\s+"
    rf"(?P<time>\d{{2}}:\d{{2}}:\d{{2}})\s+"
    rf"(?P<latitude>{_NUMBER})\s+"
    rf"(?P<longitude>{_NUMBER})\s+"
    rf"(?P<depth>{_NUMBER})\s+"
    rf"(?P<md>{_MAGNITUDE})\s+"
    rf"(?P<ml>{_MAGNITUDE})\s+"
    rf"(?P<mw>{_MAGNITUDE})\s+"
    rf"(?P<location>\S.*?)\s+"
    rf"(?P<quality>\w+(?:\s+\([^)]*\))?)$"
)


@dataclass(frozen=True)
class BulletinRow:
    """One tokenized bulletin line, before magnitude resolution.

    Attributes:
        date: Raw date token (YYYY.MM.DD)
        time: Raw time token (HH:MM:SS)
        latitude: Epicenter latitude
        longitude: Epicenter longitude
        depth_km: Depth in kilometers
        md: Duration magnitude, None if missing
        ml: Local magnitude, None if missing
        mw: Moment magnitude, None if missing
        location: Free-text place name
        quality: Solution quality flag ("İlksel" or "REVIZE01 (...)")
    """
    date: str
    time: str
    latitude: float
    longitude: float
    depth_km: float
    md: float | None
    ml: float | None
    mw: float | None
    location: str
    quality: str


def _parse_magnitude(token: str) -> float | None:
    if token == MISSING_MAGNITUDE:
        return None
    return float(token)


def tokenize_line(line: str) -> BulletinRow | None:
    """Split a single bulletin line into its columns.

    Pure function.

    Args:
        line: Raw line (leading/trailing whitespace is ignored)

    Returns:
        BulletinRow, or None if the line doesn't follow the grammar
    """
    match = ROW_PATTERN.match(line.strip())
    if match is None:
        return None

    try:
        return BulletinRow(
            date=match["date"],
            time=match["time"],
            latitude=float(match["latitude"]),
            longitude=float(match["longitude"]),
            depth_km=float(match["depth"]),
            md=_parse_magnitude(match["md"]),
            ml=_parse_magnitude(match["ml"]),
            mw=_parse_magnitude(match["mw"]),
            location=match["location"].strip(),
            quality=match["quality"],
        )
    except ValueError:
        return None


def resolve_magnitude(row: BulletinRow) -> float | None:
    """Pick the magnitude to report for a row.

    Pure function. Preference order is ML, then MW, then MD; an estimate
    is used only if present and positive.

    Returns:
        Magnitude, or None if no estimate is usable
    """
    for candidate in (row.ml, row.mw, row.md):
        if candidate is not None and candidate > 0:
            return candidate
    return None


def row_to_record(row: BulletinRow) -> EarthquakeRecord | None:
    """Build an EarthquakeRecord from a tokenized row.

    Pure function.

    Returns:
        EarthquakeRecord, or None if the row has no usable magnitude,
        an invalid timestamp or out-of-range coordinates
    """
    magnitude = resolve_magnitude(row)
    if magnitude is None:
        return None

    occurred_at = parse_timestamp(f"{row.date} {row.time}", default_tz=TURKEY_TZ)
    if occurred_at is None:
        return None

    if not is_valid_coordinate(row.latitude, row.longitude):
        return None

    return EarthquakeRecord(
        id=f"kandilli_{row.date}_{row.time}_{row.latitude}_{row.longitude}",
        magnitude=magnitude,
        location=row.location,
        depth_km=max(row.depth_km, 0.0),
        occurred_at=occurred_at,
        latitude=row.latitude,
        longitude=row.longitude,
        source=RecordSource.LEGACY_BULLETIN,
        quality=row.quality,
    )


def parse_bulletin(text: str, limit: int = 50) -> list[EarthquakeRecord]:
    """Parse a bulletin page into earthquake records.

    Pure function (logging aside). Lines before HEADER_SENTINEL are
    discarded; after it, short or malformed lines and rows without a
    usable magnitude are skipped.

    Args:
        text: Raw bulletin page (HTML-wrapped plaintext)
        limit: Maximum number of records to return

    Returns:
        Records in page order (newest first on the live page); may be empty
    """
    records: list[EarthquakeRecord] = []
    data_started = False
    skipped = 0

    for raw_line in text.splitlines():
        if len(records) >= limit:
            break

        line = raw_line.strip()

        if not data_started:
            if HEADER_SENTINEL in line:
                data_started = True
            continue

        if len(line) < MIN_LINE_LENGTH:
            continue

        row = tokenize_line(line)
        record = row_to_record(row) if row is not None else None

        if record is None:
            skipped += 1
            continue

        records.append(record)

    if not data_started:
        logger.warning("Bulletin header not found; format may have changed")

    logger.debug(
        "Parsed %d bulletin records (%d lines skipped)",
        len(records),
        skipped,
    )

    return records
