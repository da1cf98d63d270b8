"""Severity classification - Pure functions.

Maps earthquake magnitude to a severity level, a display color and a
Turkish label. All three are derived from a single threshold table so
they always agree on tier boundaries.
"""

from dataclasses import dataclass
from enum import Enum


class SeverityLevel(str, Enum):
    """Five-level categorical severity derived from magnitude."""
    VERY_LOW = "very_low"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


@dataclass(frozen=True)
class SeverityTier:
    """One row of the severity table.

    Attributes:
        lower_bound: Inclusive minimum magnitude for this tier
        level: Severity level
        color: Hex color token used by the UI
        label_tr: Turkish display label
    """
    lower_bound: float
    level: SeverityLevel
    color: str
    label_tr: str


# Ordered from highest to lowest; the last row catches everything else.
SEVERITY_TIERS: tuple[SeverityTier, ...] = (
    SeverityTier(7.0, SeverityLevel.VERY_HIGH, "#FF3B30", "Çok Yüksek"),
    SeverityTier(6.0, SeverityLevel.HIGH, "#FF9500", "Yüksek"),
    SeverityTier(5.0, SeverityLevel.MEDIUM, "#FFCC00", "Orta"),
    SeverityTier(4.0, SeverityLevel.LOW, "#34C759", "Düşük"),
    SeverityTier(float("-inf"), SeverityLevel.VERY_LOW, "#007AFF", "Çok Düşük"),
)

AFTERSHOCK_THRESHOLD = 4.0


def severity_tier(magnitude: float) -> SeverityTier:
    """Find the tier a magnitude falls into.

    Pure function. Total over all floats; NaN lands in the lowest tier
    because every comparison against NaN is False.
    """
    for tier in SEVERITY_TIERS:
        if magnitude >= tier.lower_bound:
            return tier
    return SEVERITY_TIERS[-1]


def classify_severity(magnitude: float) -> SeverityLevel:
    """Get the severity level for a magnitude.

    Pure function.
    """
    return severity_tier(magnitude).level


def severity_color(magnitude: float) -> str:
    """Get the display color for a magnitude.

    Pure function.
    """
    return severity_tier(magnitude).color


def severity_label_tr(magnitude: float) -> str:
    """Get the Turkish severity label for a magnitude.

    Pure function.
    """
    return severity_tier(magnitude).label_tr


def is_aftershock(magnitude: float) -> bool:
    """Label small events as aftershocks.

    This is a display heuristic kept for compatibility with the mobile
    app. Real aftershock status depends on the relationship to a
    mainshock, not on absolute magnitude.
    """
    return magnitude < AFTERSHOCK_THRESHOLD


def event_kind(magnitude: float) -> str:
    """Return "aftershock" or "mainshock" using the same heuristic."""
    return "aftershock" if is_aftershock(magnitude) else "mainshock"
