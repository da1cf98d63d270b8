"""Synthetic disaster events - Pure functions.

Generators for the multi-hazard demo feed. Every generator takes the
random source and the current time as arguments, so output is fully
determined by a seeded random.Random and a fixed clock.

All magnitudes, areas and affected-population figures are random
placeholders for UI demonstration. They are not forecasts.
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable


class DisasterType(str, Enum):
    EARTHQUAKE = "earthquake"
    FIRE = "fire"
    FLOOD = "flood"
    STORM = "storm"
    LANDSLIDE = "landslide"


class DisasterSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class City:
    name: str
    latitude: float
    longitude: float


TURKISH_CITIES: tuple[City, ...] = (
    City("İstanbul", 41.0082, 28.9784),
    City("Ankara", 39.9334, 32.8597),
    City("İzmir", 38.4192, 27.1287),
    City("Bursa", 40.1826, 29.0665),
    City("Antalya", 36.8969, 30.7133),
    City("Adana", 37.0000, 35.3213),
    City("Konya", 37.8667, 32.4833),
    City("Gaziantep", 37.0662, 37.3833),
    City("Şanlıurfa", 37.1591, 38.7969),
    City("Kocaeli", 40.8533, 29.8815),
    City("Mersin", 36.8000, 34.6333),
    City("Diyarbakır", 37.9144, 40.2306),
    City("Hatay", 36.4018, 36.3498),
    City("Manisa", 38.6191, 27.4289),
    City("Kayseri", 38.7312, 35.4787),
    City("Samsun", 41.2928, 36.3313),
    City("Balıkesir", 39.6484, 27.8826),
    City("Kahramanmaraş", 37.5858, 36.9371),
    City("Van", 38.4891, 43.4089),
    City("Aydın", 37.8560, 27.8416),
    City("Denizli", 37.7765, 29.0864),
    City("Sakarya", 40.6940, 30.4358),
    City("Tekirdağ", 40.9833, 27.5167),
    City("Muğla", 37.2153, 28.3636),
    City("Eskişehir", 39.7767, 30.5206),
    City("Malatya", 38.3552, 38.3095),
    City("Erzurum", 39.9334, 41.2769),
    City("Trabzon", 41.0015, 39.7178),
    City("Elazığ", 38.6810, 39.2264),
)

FIRE_KINDS = ("Forest fire", "Factory fire", "Residential fire", "Vehicle fire")


@dataclass(frozen=True)
class DisasterEvent:
    """Immutable synthetic disaster event.

    Only the fields relevant to the event's type are set; the rest stay
    None.

    Attributes:
        id: Unique event ID ("<type>_<epoch ms>_<suffix>")
        type: Hazard type
        severity: Severity level
        title: Short headline
        location: City name
        latitude: City latitude
        longitude: City longitude
        timestamp: Generation time (UTC)
        description: One-sentence description
        affected_population: Synthetic affected-population figure
        status: Always "active"
        magnitude: Earthquake magnitude
        depth_km: Earthquake depth
        area_hectares: Burned area
        fire_kind: Kind of fire
        water_level_m: Flood water level
        rainfall_mm: Flood rainfall
        wind_speed_kmh: Storm wind speed
        volume_m3: Landslide volume
    """
    id: str
    type: DisasterType
    severity: DisasterSeverity
    title: str
    location: str
    latitude: float
    longitude: float
    timestamp: datetime
    description: str
    affected_population: int
    status: str = "active"
    magnitude: float | None = None
    depth_km: int | None = None
    area_hectares: int | None = None
    fire_kind: str | None = None
    water_level_m: float | None = None
    rainfall_mm: int | None = None
    wind_speed_kmh: int | None = None
    volume_m3: int | None = None

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return (latitude, longitude) tuple."""
        return (self.latitude, self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict, omitting unset fields."""
        data = {
            "id": self.id,
            "type": self.type.value,
            "severity": self.severity.value,
            "title": self.title,
            "location": self.location,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": self.timestamp.isoformat(),
            "description": self.description,
            "affected_population": self.affected_population,
            "status": self.status,
        }
        optional = {
            "magnitude": self.magnitude,
            "depth_km": self.depth_km,
            "area_hectares": self.area_hectares,
            "fire_kind": self.fire_kind,
            "water_level_m": self.water_level_m,
            "rainfall_mm": self.rainfall_mm,
            "wind_speed_kmh": self.wind_speed_kmh,
            "volume_m3": self.volume_m3,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


def _event_id(kind: DisasterType, rng: random.Random, now: datetime) -> str:
    suffix = "".join(rng.choice("abcdefghijklmnopqrstuvwxyz0123456789") for _ in range(9))
    return f"{kind.value}_{int(now.timestamp() * 1000)}_{suffix}"


def _rand_int(rng: random.Random, low: int, span: int) -> int:
    """Integer in [low, low + span)."""
    return int(rng.random() * span + low)


def pick_city(rng: random.Random) -> City:
    return rng.choice(TURKISH_CITIES)


def generate_earthquake(rng: random.Random, now: datetime) -> DisasterEvent:
    """M3.0-7.0 at 5-55 km depth."""
    city = pick_city(rng)
    magnitude = round(rng.random() * 4 + 3, 1)
    depth = _rand_int(rng, 5, 50)

    if magnitude >= 6.0:
        severity = DisasterSeverity.CRITICAL
    elif magnitude >= 5.0:
        severity = DisasterSeverity.HIGH
    elif magnitude >= 4.0:
        severity = DisasterSeverity.MEDIUM
    else:
        severity = DisasterSeverity.LOW

    return DisasterEvent(
        id=_event_id(DisasterType.EARTHQUAKE, rng, now),
        type=DisasterType.EARTHQUAKE,
        severity=severity,
        title=f"Magnitude {magnitude} earthquake",
        location=city.name,
        latitude=city.latitude,
        longitude=city.longitude,
        timestamp=now,
        description=(
            f"A magnitude {magnitude} earthquake struck near {city.name}. "
            f"Depth: {depth} km"
        ),
        affected_population=_rand_int(rng, 10_000, 500_000),
        magnitude=magnitude,
        depth_km=depth,
    )


def generate_fire(rng: random.Random, now: datetime) -> DisasterEvent:
    """50-1050 hectares."""
    city = pick_city(rng)
    fire_kind = rng.choice(FIRE_KINDS)
    area = _rand_int(rng, 50, 1000)

    if area >= 500:
        severity = DisasterSeverity.CRITICAL
    elif area >= 200:
        severity = DisasterSeverity.HIGH
    elif area >= 100:
        severity = DisasterSeverity.MEDIUM
    else:
        severity = DisasterSeverity.LOW

    return DisasterEvent(
        id=_event_id(DisasterType.FIRE, rng, now),
        type=DisasterType.FIRE,
        severity=severity,
        title=fire_kind,
        location=city.name,
        latitude=city.latitude,
        longitude=city.longitude,
        timestamp=now,
        description=f"{fire_kind} reported in {city.name}. Affected area: {area} hectares",
        affected_population=_rand_int(rng, 1_000, 100_000),
        area_hectares=area,
        fire_kind=fire_kind,
    )


def generate_flood(rng: random.Random, now: datetime) -> DisasterEvent:
    """0.5-3.5 m water level, 20-170 mm rainfall."""
    city = pick_city(rng)
    water_level = round(rng.random() * 3 + 0.5, 1)
    rainfall = _rand_int(rng, 20, 150)

    if water_level >= 2.5:
        severity = DisasterSeverity.CRITICAL
    elif water_level >= 1.5:
        severity = DisasterSeverity.HIGH
    elif water_level >= 1.0:
        severity = DisasterSeverity.MEDIUM
    else:
        severity = DisasterSeverity.LOW

    return DisasterEvent(
        id=_event_id(DisasterType.FLOOD, rng, now),
        type=DisasterType.FLOOD,
        severity=severity,
        title="Flooding",
        location=city.name,
        latitude=city.latitude,
        longitude=city.longitude,
        timestamp=now,
        description=(
            f"Heavy rainfall caused flooding in {city.name}. "
            f"Water level: {water_level} m"
        ),
        affected_population=_rand_int(rng, 5_000, 200_000),
        water_level_m=water_level,
        rainfall_mm=rainfall,
    )


def generate_storm(rng: random.Random, now: datetime) -> DisasterEvent:
    """40-120 km/h winds."""
    city = pick_city(rng)
    wind_speed = _rand_int(rng, 40, 80)

    if wind_speed >= 100:
        severity = DisasterSeverity.CRITICAL
    elif wind_speed >= 80:
        severity = DisasterSeverity.HIGH
    elif wind_speed >= 60:
        severity = DisasterSeverity.MEDIUM
    else:
        severity = DisasterSeverity.LOW

    return DisasterEvent(
        id=_event_id(DisasterType.STORM, rng, now),
        type=DisasterType.STORM,
        severity=severity,
        title="Severe storm",
        location=city.name,
        latitude=city.latitude,
        longitude=city.longitude,
        timestamp=now,
        description=f"A severe storm with {wind_speed} km/h winds is affecting {city.name}",
        affected_population=_rand_int(rng, 2_000, 150_000),
        wind_speed_kmh=wind_speed,
    )


def generate_landslide(rng: random.Random, now: datetime) -> DisasterEvent:
    """500-10500 m³. Landslides are never below medium severity."""
    city = pick_city(rng)
    volume = _rand_int(rng, 500, 10_000)

    if volume >= 5000:
        severity = DisasterSeverity.CRITICAL
    elif volume >= 2000:
        severity = DisasterSeverity.HIGH
    else:
        severity = DisasterSeverity.MEDIUM

    return DisasterEvent(
        id=_event_id(DisasterType.LANDSLIDE, rng, now),
        type=DisasterType.LANDSLIDE,
        severity=severity,
        title="Landslide",
        location=city.name,
        latitude=city.latitude,
        longitude=city.longitude,
        timestamp=now,
        description=f"A landslide occurred near {city.name}. Estimated volume: {volume} m³",
        affected_population=_rand_int(rng, 500, 50_000),
        volume_m3=volume,
    )


GENERATORS: tuple[Callable[[random.Random, datetime], DisasterEvent], ...] = (
    generate_earthquake,
    generate_fire,
    generate_flood,
    generate_storm,
    generate_landslide,
)


def generate_random_disaster(rng: random.Random, now: datetime) -> DisasterEvent:
    """Pick one of the five generators uniformly and run it."""
    generator = rng.choice(GENERATORS)
    return generator(rng, now)


def filter_by_type(
    events: list[DisasterEvent],
    disaster_type: DisasterType,
) -> list[DisasterEvent]:
    """Pure function."""
    return [e for e in events if e.type == disaster_type]


def filter_by_severity(
    events: list[DisasterEvent],
    severity: DisasterSeverity,
) -> list[DisasterEvent]:
    """Pure function."""
    return [e for e in events if e.severity == severity]


def prune_expired(
    events: list[DisasterEvent],
    now: datetime,
    retention: timedelta,
) -> list[DisasterEvent]:
    """Drop events older than the retention window.

    Pure function. An event is kept only if its timestamp is strictly
    after now - retention.
    """
    cutoff = now - retention
    return [e for e in events if e.timestamp > cutoff]
