"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Warnings archive client (HTTP, temp files, tar extraction)
- Shapefile reader (file I/O)
- NWS alerts API client (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from wxwarn.shell.archive_client import ArchiveClient, extract_archive
from wxwarn.shell.shapefile_reader import read_alert_zones
from wxwarn.shell.nws_client import AlertsClient
from wxwarn.shell.config_loader import load_config, Config

__all__ = [
    "ArchiveClient",
    "extract_archive",
    "read_alert_zones",
    "AlertsClient",
    "load_config",
    "Config",
]
