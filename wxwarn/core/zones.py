"""Alert zone matching - Pure functions.

This module decides which alert zone polygons contain a query point and
pulls the alert identifier out of a zone's attribute record.
All functions are pure with no I/O.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Point, Polygon, shape

from wxwarn.core.errors import SchemaError


logger = logging.getLogger(__name__)


# Attribute holding the CAP identifier in the NWS warnings shapefile
IDENTIFIER_FIELD = "CAP_ID"


@dataclass(frozen=True)
class Coordinate:
    """Query location in the shapefile's own (unprojected) frame.

    No range validation is done; out-of-range values are passed through.

    Attributes:
        latitude: y coordinate
        longitude: x coordinate
    """
    latitude: float
    longitude: float

    def to_point(self) -> Point:
        """Return the shapely point (x = longitude, y = latitude)."""
        return Point(self.longitude, self.latitude)


@dataclass(frozen=True)
class AlertZone:
    """One alert polygon decoded from the shapefile.

    Attributes:
        geometry: GeoJSON-like geometry mapping (Polygon or MultiPolygon)
        attributes: Attribute record, field name to typed value
    """
    geometry: Mapping[str, Any]
    attributes: Mapping[str, Any] = field(default_factory=dict)


def to_multipolygon(geometry: Mapping[str, Any]) -> MultiPolygon:
    """Convert a zone geometry into a MultiPolygon.

    Pure function. Polygons (with or without holes) are wrapped so every
    zone is tested the same way.

    Args:
        geometry: GeoJSON-like mapping or object with __geo_interface__

    Returns:
        MultiPolygon covering the zone

    Raises:
        ValueError: If the geometry is not polygonal
    """
    geom = shape(geometry)

    if isinstance(geom, MultiPolygon):
        return geom
    if isinstance(geom, Polygon):
        return MultiPolygon([geom])

    raise ValueError(f"Expected polygonal geometry, got {geom.geom_type}")


def zone_contains(zone: AlertZone, point: Point) -> bool:
    """Check if a zone contains a point.

    Pure function. Points on the boundary count as contained. A geometry
    that cannot be converted never contains anything.

    Args:
        zone: Alert zone to check
        point: Query point (x = longitude, y = latitude)

    Returns:
        True if the zone contains the point
    """
    try:
        multipolygon = to_multipolygon(zone.geometry)
    except (ShapelyError, ValueError, TypeError, KeyError, AttributeError) as e:
        logger.warning(
            "Skipping zone with unusable geometry (%s): %s",
            zone.attributes.get(IDENTIFIER_FIELD),
            e,
        )
        return False

    return multipolygon.covers(point)


def find_containing_zones(
    zones: Iterable[AlertZone],
    coordinate: Coordinate,
) -> list[AlertZone]:
    """Filter zones to those containing the coordinate.

    Pure function. Consumes the whole iterable before returning, so a
    decode failure part way through raises before any match is used.

    Args:
        zones: Zones in storage order
        coordinate: Query location

    Returns:
        Matching zones, in input order
    """
    point = coordinate.to_point()
    return [zone for zone in zones if zone_contains(zone, point)]


def extract_alert_id(
    zone: AlertZone,
    field_name: str = IDENTIFIER_FIELD,
) -> str:
    """Get the CAP identifier from a zone's attribute record.

    Pure function.

    Args:
        zone: Matched alert zone
        field_name: Attribute holding the identifier

    Returns:
        The identifier string

    Raises:
        SchemaError: If the field is missing or not a non-null string
    """
    if field_name not in zone.attributes:
        raise SchemaError(
            f"Field '{field_name}' is not within the record",
            field=field_name,
        )

    value = zone.attributes[field_name]
    if not isinstance(value, str):
        raise SchemaError(
            f"Expected '{field_name}' to be a character field",
            field=field_name,
            found=type(value).__name__,
        )

    return value


def extract_alert_ids(
    zones: Iterable[AlertZone],
    field_name: str = IDENTIFIER_FIELD,
) -> list[str]:
    """Get identifiers for all matched zones, in order.

    Pure function. Raises on the first bad record, so nothing has been
    fetched or printed yet when a SchemaError surfaces.
    """
    return [extract_alert_id(zone, field_name) for zone in zones]
