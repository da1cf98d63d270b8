"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import math
from dataclasses import dataclass, field


# Kandilli live feed (JSON) and legacy bulletin (plaintext in HTML)
DEFAULT_LIVE_FEED_URL = "https://api.orhanaydogdu.com.tr/deprem/kandilli/live"
DEFAULT_BULLETIN_URL = "http://www.koeri.boun.edu.tr/scripts/lst0.asp"


@dataclass
class SimulationSettings:
    """Timing for the simulated disaster broadcaster.

    Attributes:
        first_delay_seconds: Delay before the first event after start
        min_interval_seconds: Minimum delay between events (inclusive)
        max_interval_seconds: Maximum delay between events (exclusive)
        retention_hours: Events older than this are pruned
    """
    first_delay_seconds: float = 2.0
    min_interval_seconds: float = 30.0
    max_interval_seconds: float = 300.0
    retention_hours: float = 24.0


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        live_feed_url: Live JSON feed endpoint
        bulletin_url: Legacy bulletin endpoint
        request_timeout_seconds: Per-request timeout for each source
        bulletin_encoding: Text encoding of the bulletin page
        default_limit: Records returned when the caller gives no limit
        max_limit: Upper bound on the limit accepted over HTTP
        default_min_magnitude: Magnitude filter when the caller gives none
        simulation: Broadcaster timing
    """
    live_feed_url: str = DEFAULT_LIVE_FEED_URL
    bulletin_url: str = DEFAULT_BULLETIN_URL
    request_timeout_seconds: float = 10.0
    bulletin_encoding: str = "iso-8859-9"
    default_limit: int = 50
    max_limit: int = 500
    default_min_magnitude: float = 0.0
    simulation: SimulationSettings = field(default_factory=SimulationSettings)


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def _validate_url(value: str, field_name: str) -> list[ValidationError]:
    if not value:
        return [ValidationError(field=field_name, message="URL is empty")]

    if value.startswith("${"):
        return [ValidationError(
            field=field_name,
            message="URL not resolved (still contains placeholder)",
        )]

    if not value.startswith(("http://", "https://")):
        return [ValidationError(
            field=field_name,
            message=f"URL must start with http:// or https://, got {value!r}",
        )]

    if value.startswith("http://"):
        return [ValidationError(
            field=field_name,
            message="URL uses plain HTTP",
            severity="warning",
        )]

    return []


def validate_simulation(settings: SimulationSettings) -> list[ValidationError]:
    """Validate broadcaster timing.

    Pure function.
    """
    errors = []

    if settings.first_delay_seconds < 0:
        errors.append(ValidationError(
            field="simulation.first_delay_seconds",
            message=f"Must be >= 0, got {settings.first_delay_seconds}",
        ))

    if settings.min_interval_seconds <= 0:
        errors.append(ValidationError(
            field="simulation.min_interval_seconds",
            message=f"Must be positive, got {settings.min_interval_seconds}",
        ))

    if settings.min_interval_seconds > settings.max_interval_seconds:
        errors.append(ValidationError(
            field="simulation",
            message=(
                f"min_interval_seconds ({settings.min_interval_seconds}) > "
                f"max_interval_seconds ({settings.max_interval_seconds})"
            ),
        ))

    if settings.retention_hours <= 0:
        errors.append(ValidationError(
            field="simulation.retention_hours",
            message=f"Must be positive, got {settings.retention_hours}",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(_validate_url(config.live_feed_url, "live_feed_url"))
    errors.extend(_validate_url(config.bulletin_url, "bulletin_url"))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if config.default_limit < 1:
        errors.append(ValidationError(
            field="default_limit",
            message=f"Limit must be at least 1, got {config.default_limit}",
        ))

    if config.max_limit < config.default_limit:
        errors.append(ValidationError(
            field="max_limit",
            message=f"max_limit ({config.max_limit}) < default_limit ({config.default_limit})",
        ))

    if math.isnan(config.default_min_magnitude) or config.default_min_magnitude < 0:
        errors.append(ValidationError(
            field="default_min_magnitude",
            message=f"Magnitude filter must be >= 0, got {config.default_min_magnitude}",
        ))

    errors.extend(validate_simulation(config.simulation))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
