"""Shared fixtures: sample alert documents and on-the-fly shapefiles."""

import copy
import io
import tarfile
from pathlib import Path

import fiona
import pytest


SAMPLE_ALERT = {
    "@context": [
        "https://geojson.org/geojson-ld/geojson-context.jsonld",
        {
            "@version": "1.1",
            "wx": "https://api.weather.gov/ontology#",
            "@vocab": "https://api.weather.gov/ontology#",
        },
    ],
    "id": "https://api.weather.gov/alerts/urn:oid:2.49.0.1.840.0.abc123.001.1",
    "type": "Feature",
    "geometry": None,
    "properties": {
        "@id": "https://api.weather.gov/alerts/urn:oid:2.49.0.1.840.0.abc123.001.1",
        "@type": "wx:Alert",
        "id": "urn:oid:2.49.0.1.840.0.abc123.001.1",
        "areaDesc": "Coastal Rockingham; Coastal York",
        "geocode": {
            "SAME": ["033015", "023031"],
            "UGC": ["NHZ014", "MEZ023"],
        },
        "affectedZones": [
            "https://api.weather.gov/zones/forecast/NHZ014",
            "https://api.weather.gov/zones/forecast/MEZ023",
        ],
        "references": [
            {
                "@id": "https://api.weather.gov/alerts/urn:oid:2.49.0.1.840.0.prior.001.1",
                "identifier": "urn:oid:2.49.0.1.840.0.prior.001.1",
                "sender": "w-nws.webmaster@noaa.gov",
                "sent": "2023-01-22T15:02:00-05:00",
            },
        ],
        "sent": "2023-01-23T03:47:00-05:00",
        "effective": "2023-01-23T03:47:00-05:00",
        "onset": "2023-01-23T07:00:00-05:00",
        "expires": "2023-01-23T16:00:00-05:00",
        "ends": "2023-01-23T19:00:00-05:00",
        "status": "Actual",
        "messageType": "Update",
        "category": "Met",
        "severity": "Moderate",
        "certainty": "Likely",
        "urgency": "Expected",
        "event": "Winter Weather Advisory",
        "sender": "w-nws.webmaster@noaa.gov",
        "senderName": "NWS Gray ME",
        "headline": "Winter Weather Advisory issued January 23 at 3:47AM EST",
        "description": "* WHAT...Snow expected. Total accumulations of 3 to 6 inches.",
        "instruction": "Slow down and use caution while traveling.",
        "response": "Execute",
        "parameters": {
            "AWIPSidentifier": ["WSWGYX"],
            "WMOidentifier": ["WWUS41 KGYX 230847"],
            "NWSheadline": ["WINTER WEATHER ADVISORY REMAINS IN EFFECT"],
            "BLOCKCHANNEL": ["EAS", "NWEM", "CMAS"],
            "VTEC": ["/O.CON.KGYX.WW.Y.0007.230123T1200Z-230124T0000Z/"],
            "eventEndingTime": ["2023-01-23T19:00:00-05:00"],
        },
    },
}


@pytest.fixture
def alert_json():
    """A fresh, mutable copy of a realistic alerts API body."""
    return copy.deepcopy(SAMPLE_ALERT)


def square(min_x: float, min_y: float, max_x: float, max_y: float) -> dict:
    """GeoJSON Polygon for an axis-aligned box."""
    return {
        "type": "Polygon",
        "coordinates": [[
            (min_x, min_y),
            (min_x, max_y),
            (max_x, max_y),
            (max_x, min_y),
            (min_x, min_y),
        ]],
    }


def write_shapefile(
    directory: Path,
    features: list[tuple[dict, dict]],
    properties_schema: dict[str, str] | None = None,
    geometry_type: str = "Polygon",
    name: str = "current_all.shp",
) -> Path:
    """Write (geometry, properties) pairs to a shapefile with fiona."""
    if properties_schema is None:
        properties_schema = {
            "CAP_ID": "str:254",
            "PROD_TYPE": "str:80",
            "ISSUANCE": "str:20",
        }

    path = Path(directory) / name
    schema = {"geometry": geometry_type, "properties": properties_schema}

    with fiona.open(path, "w", driver="ESRI Shapefile", schema=schema) as dst:
        for geometry, properties in features:
            dst.write({"geometry": geometry, "properties": properties})

    return path


def build_archive(directory: Path, stem: str = "current_all") -> bytes:
    """Gzipped tarball of every <stem>.* file in directory."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for path in sorted(Path(directory).glob(f"{stem}.*")):
            archive.add(path, arcname=path.name)
    return buffer.getvalue()


@pytest.fixture
def zone_features():
    """Two overlapping zones and one far away.

    Dover, NH (43.2683199, -70.8635506) falls inside the first two.
    """
    return [
        (square(-71.0, 43.0, -70.5, 43.5), {
            "CAP_ID": "urn:oid:2.49.0.1.840.0.first.001.1",
            "PROD_TYPE": "Winter Weather Advisory",
            "ISSUANCE": "202301230847",
        }),
        (square(-72.0, 42.0, -70.0, 44.0), {
            "CAP_ID": "urn:oid:2.49.0.1.840.0.second.001.1",
            "PROD_TYPE": "Wind Advisory",
            "ISSUANCE": "202301230901",
        }),
        (square(-100.0, 30.0, -99.0, 31.0), {
            "CAP_ID": "urn:oid:2.49.0.1.840.0.texas.001.1",
            "PROD_TYPE": "Heat Advisory",
            "ISSUANCE": "202301231000",
        }),
    ]


@pytest.fixture
def archive_bytes(tmp_path, zone_features):
    """Gzipped tar archive holding the zone_features shapefile."""
    source = tmp_path / "source"
    source.mkdir()
    write_shapefile(source, zone_features)
    return build_archive(source)
