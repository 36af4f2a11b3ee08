"""Command-line Entry Point.

Display NOAA weather alerts for a given lat/lon:

    $ wxwarn --lat=43.2683199 --lon=-70.8635506

Grabs the NWS alerts shapefile, checks whether any alert polygon contains
the coordinate and prints the full alert text for each one that does.
"""

import argparse
import logging
import math
import os
import sys

import requests
import yaml

from wxwarn.core.config import Config, validate_config
from wxwarn.core.errors import WxWarnError
from wxwarn.core.zones import Coordinate
from wxwarn.orchestrator import Orchestrator, ProcessingResult
from wxwarn.shell.config_loader import load_config


logger = logging.getLogger(__name__)


def _finite_float(value: str) -> float:
    """argparse type for a finite float."""
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: '{value}'")
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"not a finite number: '{value}'")
    return number


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wxwarn",
        description="Display NOAA weather alerts for a given lat/lon",
    )
    parser.add_argument(
        "--lat",
        type=_finite_float,
        default=None,
        help="Latitude (default: from config, 43.2683199)",
    )
    parser.add_argument(
        "--lon",
        type=_finite_float,
        default=None,
        help="Longitude (default: from config, -70.8635506)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML config (default: $CONFIG_PATH or config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("LOG_LEVEL", "WARNING"),
        help="Logging level written to stderr (default: $LOG_LEVEL or WARNING)",
    )
    return parser


def print_alert(lat: float, lon: float, config: Config | None = None) -> ProcessingResult:
    """Print every active alert whose zone contains (lat, lon).

    Raises:
        WxWarnError: On any fatal error (archive download, unpacking,
            shapefile decoding or a zone without an alert identifier)
    """
    with requests.Session() as session:
        orchestrator = Orchestrator(config or Config(), session=session)
        return orchestrator.process(Coordinate(latitude=lat, longitude=lon))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Could not load configuration: %s", e)
        return 1

    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            logger.error("Config %s: %s", error.field, error.message)
        return 1

    lat = args.lat if args.lat is not None else config.default_latitude
    lon = args.lon if args.lon is not None else config.default_longitude

    try:
        result = print_alert(lat, lon, config)
    except WxWarnError as e:
        logger.error("%s", e)
        return 1

    logger.info("Completed: %s", result.summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
