"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The Config model is defined in wxwarn/core/config.py to avoid
information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from wxwarn.core.config import Config


logger = logging.getLogger(__name__)


# Environment variables read by load_config_from_env()
ENV_VARS = {
    "archive_url": "WXWARN_ARCHIVE_URL",
    "alerts_api_base": "WXWARN_ALERTS_API",
    "user_agent": "WXWARN_USER_AGENT",
    "timeout_seconds": "WXWARN_TIMEOUT",
}


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. An unset
    variable leaves the placeholder in place.
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        env_value = os.environ.get(value[2:-1])
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", value[2:-1])

    return value


def _parse_timeout(value: Any) -> float | None:
    """Parse a timeout; None or empty means no timeout."""
    if value is None or value == "":
        return None
    return _parse_float(value, "timeout_seconds")


def _get(data: dict[str, Any], key: str, default: Any) -> Any:
    """Look up key, treating an empty YAML value as unset."""
    value = data.get(key)
    return default if value is None else value


def _parse_float(value: Any, key: str) -> float:
    try:
        return float(value)
    except TypeError as e:
        raise ValueError(f"Configuration '{key}' must be a number") from e


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object

    Raises:
        ValueError: If data or its http section is not a mapping, or a
            number field cannot be parsed
    """
    if not isinstance(data, dict):
        raise ValueError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    defaults = Config()
    http = data.get("http") or {}
    if not isinstance(http, dict):
        raise ValueError(
            f"Configuration 'http' must be a mapping, got {type(http).__name__}"
        )

    return Config(
        archive_url=_resolve_value(_get(data, "archive_url", defaults.archive_url)),
        alerts_api_base=_resolve_value(
            _get(data, "alerts_api_base", defaults.alerts_api_base)
        ),
        user_agent=_resolve_value(_get(http, "user_agent", defaults.user_agent)),
        accept=_get(http, "accept", defaults.accept),
        timeout_seconds=_parse_timeout(_resolve_value(http.get("timeout_seconds"))),
        shapefile_name=_get(data, "shapefile_name", defaults.shapefile_name),
        identifier_field=_get(data, "identifier_field", defaults.identifier_field),
        default_latitude=_parse_float(
            _get(data, "default_latitude", defaults.default_latitude),
            "default_latitude",
        ),
        default_longitude=_parse_float(
            _get(data, "default_longitude", defaults.default_longitude),
            "default_longitude",
        ),
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
        ValueError: If config file is not a mapping or holds a bad value
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return load_config_from_env()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return load_config_from_env()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: archive=%s, alerts_api=%s",
        config.archive_url,
        config.alerts_api_base,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        WXWARN_ARCHIVE_URL: URL of the alert polygon archive
        WXWARN_ALERTS_API: Alerts API base URL
        WXWARN_USER_AGENT: Contact string sent as User-Agent
        WXWARN_TIMEOUT: Request timeout in seconds

    Returns:
        Config object from environment (defaults for unset variables)
    """
    data: dict[str, Any] = {"http": {}}

    for key in ("archive_url", "alerts_api_base"):
        value = os.environ.get(ENV_VARS[key])
        if value:
            data[key] = value

    for key in ("user_agent", "timeout_seconds"):
        value = os.environ.get(ENV_VARS[key])
        if value:
            data["http"][key] = value

    return load_config_from_dict(data)
