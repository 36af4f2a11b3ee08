"""NWS Alerts API Client - Imperative Shell.

This module handles HTTP communication with the api.weather.gov alerts
endpoint. All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from wxwarn.core.config import (
    DEFAULT_ACCEPT,
    DEFAULT_ALERTS_API_BASE,
    DEFAULT_USER_AGENT,
)
from wxwarn.core.errors import TransportError


logger = logging.getLogger(__name__)


class AlertsClient:
    """Client for fetching alert records from the NWS alerts API.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str = DEFAULT_ALERTS_API_BASE,
        user_agent: str = DEFAULT_USER_AGENT,
        accept: str = DEFAULT_ACCEPT,
        timeout: float | None = None,
    ) -> None:
        """Initialize alerts client.

        Args:
            session: Shared HTTP session
            base_url: Alerts API base URL
            user_agent: Contact string required by the API
            accept: Accept header value
            timeout: Request timeout in seconds (None = no timeout)
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.accept = accept
        self.timeout = timeout

    def _build_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
        }

    def alert_url(self, alert_id: str) -> str:
        """URL of a single alert record."""
        return f"{self.base_url}/alerts/{alert_id}"

    def fetch_alert(self, alert_id: str) -> dict[str, Any]:
        """Fetch one alert record.

        This method performs HTTP I/O.

        Args:
            alert_id: CAP identifier from the shapefile

        Returns:
            Raw decoded JSON body

        Raises:
            TransportError: If the request fails or returns a non-2xx status
            ValueError: If the body is not valid JSON
        """
        url = self.alert_url(alert_id)

        logger.info("Fetching alert %s", alert_id)

        try:
            response = self.session.get(
                url,
                headers=self._build_headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(
                "Alert request failed",
                url=url,
                reason=str(e),
            ) from e

        return response.json()
