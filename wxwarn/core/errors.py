"""Error types - Pure data structures.

Every failure the pipeline can raise is a subclass of WxWarnError.
Whether a failure is fatal is decided by the orchestrator, not here:

- TransportError: a request could not be sent or completed
- IoError: a local file could not be written, copied or opened
- DecodeError: malformed gzip/tar stream or unusable shapefile
- SchemaError: a matched zone lacks a usable alert identifier
- AlertDecodeError: an alert body does not match the Alert schema
"""

from typing import Any


class WxWarnError(Exception):
    """Base exception for all wxwarn errors.

    Attributes:
        message: Human-readable description
        details: Extra context (URL, path, field name, ...)
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in sorted(self.details.items()))
        return f"{self.message} ({context})"


class TransportError(WxWarnError):
    """HTTP request failed (connection error, timeout or bad status)."""


class IoError(WxWarnError):
    """Local filesystem operation failed."""


class DecodeError(WxWarnError):
    """Archive or shapefile could not be decoded."""


class SchemaError(WxWarnError):
    """Attribute record lacks the identifier field or has the wrong type."""


class AlertDecodeError(WxWarnError, ValueError):
    """Alert API response does not match the expected schema."""
