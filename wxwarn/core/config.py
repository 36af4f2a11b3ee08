"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import math
from dataclasses import dataclass, field
from urllib.parse import urlparse

from wxwarn.core.zones import IDENTIFIER_FIELD


# Bulk archive of all active NWS watch/warning/advisory polygons
DEFAULT_ARCHIVE_URL = (
    "https://tgftp.nws.noaa.gov/SL.us008001/DF.sha/DC.cap/DS.WWA/current_all.tar.gz"
)

DEFAULT_ALERTS_API_BASE = "https://api.weather.gov"

# api.weather.gov rejects requests without a contact User-Agent
DEFAULT_USER_AGENT = "(wxwarn, wxwarn@example.com)"

DEFAULT_ACCEPT = "application/geo+json"

DEFAULT_SHAPEFILE_NAME = "current_all.shp"

# Dover, NH
DEFAULT_LATITUDE = 43.2683199
DEFAULT_LONGITUDE = -70.8635506


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        archive_url: URL of the gzipped tar archive of alert polygons
        alerts_api_base: Base URL of the alerts API
        user_agent: Contact string sent as User-Agent
        accept: Accept header for alert requests
        timeout_seconds: Request timeout (None = transport default)
        shapefile_name: Name of the .shp file inside the archive
        identifier_field: Attribute holding the CAP identifier
        default_latitude: Latitude used when none is given
        default_longitude: Longitude used when none is given
    """
    archive_url: str = DEFAULT_ARCHIVE_URL
    alerts_api_base: str = DEFAULT_ALERTS_API_BASE
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = DEFAULT_ACCEPT
    timeout_seconds: float | None = None
    shapefile_name: str = DEFAULT_SHAPEFILE_NAME
    identifier_field: str = IDENTIFIER_FIELD
    default_latitude: float = DEFAULT_LATITUDE
    default_longitude: float = DEFAULT_LONGITUDE


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


def validate_url(url: str, field_name: str) -> list[ValidationError]:
    """Validate that a URL is absolute http(s).

    Pure function.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return [ValidationError(
            field=field_name,
            message=f"Expected an absolute http(s) URL, got '{url}'",
        )]
    return []


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function. Non-finite values are errors. Out-of-range values are
    only warnings since they are passed through to the matcher unchanged.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not (math.isfinite(lat) and math.isfinite(lon)):
        errors.append(ValidationError(
            field=field_name,
            message=f"Coordinates must be finite, got ({lat}, {lon})",
        ))
        return errors

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
            severity="warning",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
            severity="warning",
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

    errors.extend(validate_url(config.archive_url, "archive_url"))
    errors.extend(validate_url(config.alerts_api_base, "alerts_api_base"))

    if not config.user_agent.strip():
        errors.append(ValidationError(
            field="user_agent",
            message="User-Agent must not be empty",
        ))

    if config.timeout_seconds is not None and config.timeout_seconds <= 0:
        errors.append(ValidationError(
            field="timeout_seconds",
            message=f"Timeout must be positive, got {config.timeout_seconds}",
        ))

    if not config.shapefile_name.lower().endswith(".shp"):
        errors.append(ValidationError(
            field="shapefile_name",
            message=f"Expected a .shp file name, got '{config.shapefile_name}'",
        ))

    if not config.identifier_field:
        errors.append(ValidationError(
            field="identifier_field",
            message="Identifier field must not be empty",
        ))

    errors.extend(validate_coordinates(
        config.default_latitude,
        config.default_longitude,
        "default_coordinates",
    ))

    if "geo+json" not in config.accept:
        errors.append(ValidationError(
            field="accept",
            message=f"Accept header '{config.accept}' may not return GeoJSON",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
