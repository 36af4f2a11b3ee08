"""Alert data models and parsing - Pure functions.

This module decodes NWS alerts API (GeoJSON-LD) responses into typed
Alert objects. All functions are pure with no side effects.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from wxwarn.core.errors import AlertDecodeError


@dataclass(frozen=True)
class ContextClass:
    """Structured JSON-LD context entry.

    Attributes:
        version: JSON-LD version ("@version")
        wx: Weather vocabulary URL
        vocab: Default vocabulary ("@vocab")
    """
    version: str
    wx: str
    vocab: str


# A context entry is either a structured object or a bare URL string
ContextElement = Union[ContextClass, str]


@dataclass(frozen=True)
class Geocode:
    """Zone codes the alert applies to.

    Attributes:
        same: SAME (FIPS-derived) location codes
        ugc: UGC zone/county codes
    """
    same: tuple[str, ...] = ()
    ugc: tuple[str, ...] = ()


@dataclass(frozen=True)
class Parameters:
    """CAP protocol parameters. Each value is a repeated field."""
    awips_identifier: tuple[str, ...] = ()
    wmo_identifier: tuple[str, ...] = ()
    nws_headline: tuple[str, ...] = ()
    block_channel: tuple[str, ...] = ()
    vtec: tuple[str, ...] = ()
    event_ending_time: tuple[str, ...] = ()
    expired_references: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Reference:
    """Pointer to a related or prior alert.

    Attributes:
        id: Alert API URL ("@id")
        identifier: CAP identifier
        sender: Sender address
        sent: Sent timestamp (ISO 8601 string)
    """
    id: str
    identifier: str
    sender: str
    sent: str


@dataclass(frozen=True)
class Properties:
    """Alert body.

    Timestamps are kept as the ISO 8601 strings the API sends;
    onset and ends may be null.
    """
    id: str
    properties_type: str
    properties_id: str
    area_desc: str
    headline: str
    description: str
    instruction: str
    sent: str
    effective: str
    expires: str
    status: str
    message_type: str
    category: str
    severity: str
    certainty: str
    urgency: str
    event: str
    sender: str
    sender_name: str
    response: str
    geocode: Geocode = field(default_factory=Geocode)
    parameters: Parameters = field(default_factory=Parameters)
    affected_zones: tuple[str, ...] = ()
    references: tuple[Reference, ...] = ()
    onset: str | None = None
    ends: str | None = None


@dataclass(frozen=True)
class Alert:
    """Immutable alert record returned by the alerts API.

    Attributes:
        context: JSON-LD context entries ("@context")
        id: Alert URL
        alert_type: GeoJSON classification tag ("type"), normally "Feature"
        geometry: Geometry echo, kept as raw JSON (often null)
        properties: Alert body
    """
    context: tuple[ContextElement, ...]
    id: str
    alert_type: str
    geometry: Any
    properties: Properties


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise AlertDecodeError(
            f"Expected string for '{key}'",
            location=where,
            found=type(value).__name__,
        )
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise AlertDecodeError(
            f"Expected string or null for '{key}'",
            location=where,
            found=type(value).__name__,
        )
    return value


def _str_list(data: dict[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise AlertDecodeError(
            f"Expected list of strings for '{key}'",
            location=where,
        )
    return tuple(value)


def _require_object(data: dict[str, Any], key: str, where: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise AlertDecodeError(
            f"Expected object for '{key}'",
            location=where,
            found=type(value).__name__,
        )
    return value


def parse_context_element(raw: Any) -> ContextElement:
    """Parse one "@context" entry.

    Pure function. The structured form is tried first; a bare string is
    the fallback. Anything else is rejected.

    Raises:
        AlertDecodeError: If the entry is neither form
    """
    if isinstance(raw, dict):
        try:
            return ContextClass(
                version=_require_str(raw, "@version", "@context"),
                wx=_require_str(raw, "wx", "@context"),
                vocab=_require_str(raw, "@vocab", "@context"),
            )
        except AlertDecodeError:
            pass

    if isinstance(raw, str):
        return raw

    raise AlertDecodeError(
        "Context entry is neither a context object nor a string",
        found=type(raw).__name__,
    )


def parse_reference(raw: Any) -> Reference:
    """Parse a single entry of properties.references."""
    if not isinstance(raw, dict):
        raise AlertDecodeError("Expected object for reference")

    return Reference(
        id=_require_str(raw, "@id", "references"),
        identifier=_require_str(raw, "identifier", "references"),
        sender=_require_str(raw, "sender", "references"),
        sent=_require_str(raw, "sent", "references"),
    )


def parse_parameters(raw: dict[str, Any]) -> Parameters:
    """Parse properties.parameters.

    Pure function. expiredReferences stays None when absent so callers can
    tell "absent" from "empty".
    """
    expired = None
    if raw.get("expiredReferences") is not None:
        expired = _str_list(raw, "expiredReferences", "parameters")

    return Parameters(
        awips_identifier=_str_list(raw, "AWIPSidentifier", "parameters"),
        wmo_identifier=_str_list(raw, "WMOidentifier", "parameters"),
        nws_headline=_str_list(raw, "NWSheadline", "parameters"),
        block_channel=_str_list(raw, "BLOCKCHANNEL", "parameters"),
        vtec=_str_list(raw, "VTEC", "parameters"),
        event_ending_time=_str_list(raw, "eventEndingTime", "parameters"),
        expired_references=expired,
    )


def parse_properties(raw: dict[str, Any]) -> Properties:
    """Parse the properties block of an alert.

    Pure function. A null instruction is normalized to an empty string so
    the four display fields are always strings.
    """
    where = "properties"
    geocode = _require_object(raw, "geocode", where)
    references = raw.get("references", [])
    if not isinstance(references, list):
        raise AlertDecodeError("Expected list for 'references'", location=where)

    return Properties(
        id=_require_str(raw, "@id", where),
        properties_type=_require_str(raw, "@type", where),
        properties_id=_require_str(raw, "id", where),
        area_desc=_require_str(raw, "areaDesc", where),
        headline=_require_str(raw, "headline", where),
        description=_require_str(raw, "description", where),
        instruction=_optional_str(raw, "instruction", where) or "",
        sent=_require_str(raw, "sent", where),
        effective=_require_str(raw, "effective", where),
        expires=_require_str(raw, "expires", where),
        status=_require_str(raw, "status", where),
        message_type=_require_str(raw, "messageType", where),
        category=_require_str(raw, "category", where),
        severity=_require_str(raw, "severity", where),
        certainty=_require_str(raw, "certainty", where),
        urgency=_require_str(raw, "urgency", where),
        event=_require_str(raw, "event", where),
        sender=_require_str(raw, "sender", where),
        sender_name=_require_str(raw, "senderName", where),
        response=_require_str(raw, "response", where),
        geocode=Geocode(
            same=_str_list(geocode, "SAME", "geocode"),
            ugc=_str_list(geocode, "UGC", "geocode"),
        ),
        parameters=parse_parameters(_require_object(raw, "parameters", where)),
        affected_zones=_str_list(raw, "affectedZones", where),
        references=tuple(parse_reference(r) for r in references),
        onset=_optional_str(raw, "onset", where),
        ends=_optional_str(raw, "ends", where),
    )


def parse_alert(data: Any) -> Alert:
    """Parse an alerts API response body into an Alert.

    Pure function: takes the decoded JSON document, returns a typed Alert.

    Args:
        data: Decoded JSON body of GET /alerts/{id}

    Returns:
        Alert object

    Raises:
        AlertDecodeError: If the document does not match the schema
    """
    if not isinstance(data, dict):
        raise AlertDecodeError("Alert document is not a JSON object")

    context = data.get("@context", [])
    if not isinstance(context, list):
        raise AlertDecodeError("Expected list for '@context'", location="alert")

    return Alert(
        context=tuple(parse_context_element(c) for c in context),
        id=_require_str(data, "id", "alert"),
        alert_type=_require_str(data, "type", "alert"),
        geometry=data.get("geometry"),
        properties=parse_properties(_require_object(data, "properties", "alert")),
    )
