"""Alert text formatting - Pure functions.

This module renders resolved alerts as the plain text written to stdout.
All functions are pure with no side effects.
"""

from dataclasses import dataclass

from wxwarn.core.alert import Alert


SEPARATOR = "==============================="

ERROR_NOTICE = "ERROR"


@dataclass(frozen=True)
class AlertLookup:
    """Outcome of resolving one matched zone.

    Exactly one of alert / error is set.

    Attributes:
        alert_id: CAP identifier taken from the zone
        alert: Resolved alert (None if the lookup failed)
        error: Error message if failed
    """
    alert_id: str
    alert: Alert | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if the alert was resolved."""
        return self.alert is not None


def format_alert(alert: Alert) -> str:
    """Format the display fields of an alert.

    Pure function. Headline, description, instruction and area
    description, each followed by a blank line.

    Args:
        alert: Resolved alert

    Returns:
        Multi-line text block
    """
    props = alert.properties
    fields = [props.headline, props.description, props.instruction, props.area_desc]
    return "".join(f"{value}\n\n" for value in fields)


def format_lookup(lookup: AlertLookup, match_count: int) -> str:
    """Format one lookup result, with its leading separator.

    Pure function. The separator is written whenever at least one zone has
    matched, which includes the very first result.

    Args:
        lookup: Result for one matched zone
        match_count: Number of zones matched so far, including this one

    Returns:
        Text to write for this result
    """
    parts = []
    if match_count >= 1:
        parts.append(f"{SEPARATOR}\n")

    if lookup.alert is not None:
        parts.append(format_alert(lookup.alert))
    else:
        parts.append(f"{ERROR_NOTICE}\n")

    return "".join(parts)


def format_lookups(lookups: list[AlertLookup]) -> str:
    """Format a whole run's results.

    Pure function. An empty list renders as an empty string.
    """
    return "".join(
        format_lookup(lookup, count)
        for count, lookup in enumerate(lookups, start=1)
    )
