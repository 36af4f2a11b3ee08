"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components. It's the "glue" that
makes the application work.
"""

import logging
import sys
import tempfile
from dataclasses import dataclass
from typing import TextIO

import requests

from wxwarn.core.alert import parse_alert
from wxwarn.core.config import Config
from wxwarn.core.errors import TransportError
from wxwarn.core.formatter import AlertLookup, format_lookup
from wxwarn.core.zones import (
    AlertZone,
    Coordinate,
    extract_alert_ids,
    find_containing_zones,
)
from wxwarn.shell.archive_client import ArchiveClient, extract_archive
from wxwarn.shell.nws_client import AlertsClient
from wxwarn.shell.shapefile_reader import read_alert_zones


logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Result of one alert lookup run.

    Attributes:
        zones_scanned: Alert zones decoded from the shapefile
        zones_matched: Zones containing the query point
        lookups: Per-match results, in match order
    """
    zones_scanned: int
    zones_matched: int
    lookups: list[AlertLookup]

    @property
    def alerts_resolved(self) -> list[AlertLookup]:
        return [lookup for lookup in self.lookups if lookup.success]

    @property
    def alerts_failed(self) -> list[AlertLookup]:
        return [lookup for lookup in self.lookups if not lookup.success]

    @property
    def summary(self) -> str:
        """Human-readable summary of the processing result."""
        return (
            f"Scanned {self.zones_scanned} zones, "
            f"{self.zones_matched} matched, "
            f"{len(self.alerts_resolved)} alerts resolved, "
            f"{len(self.alerts_failed)} failed"
        )


class Orchestrator:
    """Coordinates alert zone lookup for one coordinate.

    This class wires together:
    - Archive client (downloads and unpacks the polygon archive)
    - Shapefile reader (decodes alert zones)
    - Core functions (containment, identifier extraction, formatting)
    - Alerts client (fetches full alert records)

    Fatal errors (TransportError on the archive, IoError, DecodeError,
    SchemaError) propagate to the caller. Alert lookups that fail are
    reported in the output and the run continues.
    """

    def __init__(
        self,
        config: Config,
        session: requests.Session | None = None,
        archive_client: ArchiveClient | None = None,
        alerts_client: AlertsClient | None = None,
        output: TextIO | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            session: HTTP session shared by both clients (created if not provided)
            archive_client: Archive client (created if not provided)
            alerts_client: Alerts API client (created if not provided)
            output: Stream results are written to (defaults to stdout)
        """
        self.config = config
        self.session = session or requests.Session()
        self.archive_client = archive_client or ArchiveClient(
            self.session,
            archive_url=config.archive_url,
            timeout=config.timeout_seconds,
        )
        self.alerts_client = alerts_client or AlertsClient(
            self.session,
            base_url=config.alerts_api_base,
            user_agent=config.user_agent,
            accept=config.accept,
            timeout=config.timeout_seconds,
        )
        self.output = output if output is not None else sys.stdout

    def _load_zones(self) -> list[AlertZone]:
        """Download, unpack and decode the alert zones.

        The scratch directory is removed once the zones are in memory.
        """
        with tempfile.TemporaryDirectory(
            prefix="wxwarn-",
            ignore_cleanup_errors=True,
        ) as scratch_dir:
            archive_path = self.archive_client.download(scratch_dir)
            expand_path = extract_archive(archive_path)
            return list(read_alert_zones(expand_path, self.config.shapefile_name))

    def _resolve_alert(self, alert_id: str) -> AlertLookup:
        """Fetch and decode one alert.

        Transport failures and undecodable bodies both become an error
        lookup; neither stops the run.
        """
        try:
            data = self.alerts_client.fetch_alert(alert_id)
            alert = parse_alert(data)
        except (TransportError, ValueError) as e:
            logger.error("Failed to resolve alert %s: %s", alert_id, e)
            return AlertLookup(alert_id=alert_id, error=str(e))

        logger.info("Resolved alert %s: %s", alert_id, alert.properties.event)
        return AlertLookup(alert_id=alert_id, alert=alert)

    def process(self, coordinate: Coordinate) -> ProcessingResult:
        """Run a complete lookup for one coordinate.

        This is the main entry point that:
        1. Downloads and unpacks the alert polygon archive
        2. Decodes every alert zone
        3. Filters zones containing the coordinate
        4. Extracts the alert identifier of every match
        5. Fetches each alert and writes it to the output

        Args:
            coordinate: Query location

        Returns:
            ProcessingResult with details of what happened
        """
        zones = self._load_zones()
        matches = find_containing_zones(zones, coordinate)

        logger.info(
            "%d of %d zones contain (%s, %s)",
            len(matches),
            len(zones),
            coordinate.latitude,
            coordinate.longitude,
        )

        alert_ids = extract_alert_ids(matches, self.config.identifier_field)

        lookups: list[AlertLookup] = []
        for match_count, alert_id in enumerate(alert_ids, start=1):
            lookup = self._resolve_alert(alert_id)
            lookups.append(lookup)
            self.output.write(format_lookup(lookup, match_count))

        self.output.flush()

        return ProcessingResult(
            zones_scanned=len(zones),
            zones_matched=len(matches),
            lookups=lookups,
        )
