"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Alert API response parsing
- Point-in-polygon zone matching
- Alert identifier extraction
- Output formatting
- Configuration validation

All functions here are deterministic and have no I/O.
"""

from wxwarn.core.alert import Alert, parse_alert
from wxwarn.core.zones import (
    AlertZone,
    Coordinate,
    extract_alert_id,
    extract_alert_ids,
    find_containing_zones,
)
from wxwarn.core.formatter import AlertLookup, format_lookup, format_lookups
from wxwarn.core.errors import (
    WxWarnError,
    TransportError,
    IoError,
    DecodeError,
    SchemaError,
    AlertDecodeError,
)

__all__ = [
    # Alert
    "Alert",
    "parse_alert",
    # Zones
    "AlertZone",
    "Coordinate",
    "extract_alert_id",
    "extract_alert_ids",
    "find_containing_zones",
    # Formatter
    "AlertLookup",
    "format_lookup",
    "format_lookups",
    # Errors
    "WxWarnError",
    "TransportError",
    "IoError",
    "DecodeError",
    "SchemaError",
    "AlertDecodeError",
]
