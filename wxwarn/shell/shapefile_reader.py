"""Alert Polygon Shapefile Reader - Imperative Shell.

This module decodes the extracted warnings shapefile with fiona.
All file I/O is contained here; matching logic is in the core module.
"""

import logging
from pathlib import Path
from typing import Iterator

import fiona
from fiona.errors import FionaError

from wxwarn.core.config import DEFAULT_SHAPEFILE_NAME
from wxwarn.core.errors import DecodeError
from wxwarn.core.zones import AlertZone


logger = logging.getLogger(__name__)


POLYGON_GEOMETRY_TYPES = ("Polygon", "MultiPolygon", "3D Polygon", "3D MultiPolygon")


def read_alert_zones(
    directory: str | Path,
    shapefile_name: str = DEFAULT_SHAPEFILE_NAME,
) -> Iterator[AlertZone]:
    """Read alert zones from the extracted archive.

    This function performs file I/O. It is a generator: the file is
    opened on first iteration and the sequence cannot be restarted.
    Zones come out in on-disk storage order.

    Args:
        directory: Directory holding the shapefile components
        shapefile_name: Name of the .shp file

    Yields:
        AlertZone for each record

    Raises:
        DecodeError: If the file is missing, not a polygon layer or corrupt
    """
    path = Path(directory) / shapefile_name

    if not path.exists():
        raise DecodeError("Could not open polygon-shapefile", path=str(path))

    try:
        with fiona.open(path) as src:
            geometry_type = src.schema.get("geometry")
            if geometry_type not in POLYGON_GEOMETRY_TYPES:
                raise DecodeError(
                    "Shapefile does not contain polygons",
                    path=str(path),
                    geometry_type=geometry_type,
                )

            expected = len(src)
            logger.info("Reading %d alert zones from %s", expected, path.name)

            # GDAL logs truncated records and stops iterating without raising
            read = 0
            for feature in src:
                read += 1
                if feature.geometry is None:
                    # Null shape records carry no area to match against
                    continue
                yield AlertZone(
                    geometry=feature.geometry.__geo_interface__,
                    attributes=dict(feature.properties),
                )

            if read != expected:
                raise DecodeError(
                    "Could not read polygon-shapefile",
                    path=str(path),
                    read=read,
                    expected=expected,
                )
    except FionaError as e:
        raise DecodeError(
            "Could not read polygon-shapefile",
            path=str(path),
            reason=str(e),
        ) from e
