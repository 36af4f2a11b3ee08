"""Display NOAA weather alerts for a given lat/lon."""

from wxwarn.main import print_alert

__all__ = ["print_alert"]
