"""Tests for the Configuration Loader module.

Tests configuration loading from YAML files and environment variables.
"""

import os
from unittest.mock import patch

import pytest
import yaml

from wxwarn.core.config import DEFAULT_ARCHIVE_URL, DEFAULT_USER_AGENT, Config
from wxwarn.shell.config_loader import (
    _parse_timeout,
    _resolve_value,
    load_config,
    load_config_from_dict,
    load_config_from_env,
)


class TestResolveValue:
    """Tests for _resolve_value function."""

    def test_returns_non_string_unchanged(self):
        """Non-string values are returned unchanged."""
        assert _resolve_value(30) == 30
        assert _resolve_value(None) is None

    def test_returns_plain_string_unchanged(self):
        assert _resolve_value("https://api.weather.gov") == "https://api.weather.gov"

    def test_resolves_env_var_placeholder(self):
        with patch.dict(os.environ, {"TEST_UA": "(me, me@example.com)"}):
            assert _resolve_value("${TEST_UA}") == "(me, me@example.com)"

    def test_returns_placeholder_if_env_var_not_set(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _resolve_value("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"


class TestParseTimeout:
    """Tests for _parse_timeout function."""

    def test_none_means_no_timeout(self):
        assert _parse_timeout(None) is None
        assert _parse_timeout("") is None

    def test_parses_number(self):
        assert _parse_timeout("12.5") == 12.5
        assert _parse_timeout(30) == 30.0

    def test_rejects_garbage(self):
        with pytest.raises(ValueError):
            _parse_timeout("soon")


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict function."""

    def test_empty_dict_gives_defaults(self):
        assert load_config_from_dict({}) == Config()

    def test_reads_all_fields(self):
        config = load_config_from_dict({
            "archive_url": "https://mirror.example.com/current_all.tar.gz",
            "alerts_api_base": "https://alerts.example.com",
            "http": {
                "user_agent": "(example.com, ops@example.com)",
                "accept": "application/ld+json",
                "timeout_seconds": 20,
            },
            "shapefile_name": "warnings.shp",
            "identifier_field": "ALERT_ID",
            "default_latitude": 40.0,
            "default_longitude": -75.0,
        })

        assert config.archive_url == "https://mirror.example.com/current_all.tar.gz"
        assert config.alerts_api_base == "https://alerts.example.com"
        assert config.user_agent == "(example.com, ops@example.com)"
        assert config.accept == "application/ld+json"
        assert config.timeout_seconds == 20.0
        assert config.shapefile_name == "warnings.shp"
        assert config.identifier_field == "ALERT_ID"
        assert config.default_latitude == 40.0
        assert config.default_longitude == -75.0

    def test_null_http_section_gives_defaults(self):
        config = load_config_from_dict({"http": None})

        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.timeout_seconds is None

    def test_expands_env_placeholders(self):
        with patch.dict(os.environ, {"UA": "(env, env@example.com)"}):
            config = load_config_from_dict({"http": {"user_agent": "${UA}"}})

        assert config.user_agent == "(env, env@example.com)"

    def test_empty_values_give_defaults(self):
        """Keys present with no value in YAML fall back to defaults."""
        config = load_config_from_dict({
            "default_latitude": None,
            "default_longitude": None,
            "shapefile_name": None,
            "http": {"user_agent": None, "timeout_seconds": None},
        })

        assert config == Config()

    def test_non_numeric_latitude_raises_value_error(self):
        with pytest.raises(ValueError, match="default_latitude"):
            load_config_from_dict({"default_latitude": [43.0]})

    def test_non_mapping_http_raises_value_error(self):
        with pytest.raises(ValueError, match="http"):
            load_config_from_dict({"http": ["user_agent"]})

    def test_non_mapping_document_raises_value_error(self):
        with pytest.raises(ValueError, match="mapping"):
            load_config_from_dict(["archive_url"])


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({
            "alerts_api_base": "https://alerts.example.com",
            "http": {"timeout_seconds": 5},
        }))

        config = load_config(path)

        assert config.alerts_api_base == "https://alerts.example.com"
        assert config.timeout_seconds == 5.0
        assert config.archive_url == DEFAULT_ARCHIVE_URL

    def test_missing_file_gives_defaults(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(tmp_path / "nope.yaml")

        assert config == Config()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        with patch.dict(os.environ, {}, clear=True):
            assert load_config(path) == Config()

    def test_uses_config_path_env(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("identifier_field: ALERT_ID\n")

        with patch.dict(os.environ, {"CONFIG_PATH": str(path)}):
            config = load_config()

        assert config.identifier_field == "ALERT_ID"

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("http: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(path)

    def test_empty_coordinate_value_gives_default(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_latitude:\ndefault_longitude: -75.0\n")

        config = load_config(path)

        assert config.default_latitude == Config().default_latitude
        assert config.default_longitude == -75.0

    def test_list_document_raises_value_error(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- archive_url\n- alerts_api_base\n")

        with pytest.raises(ValueError):
            load_config(path)


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    def test_no_env_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert load_config_from_env() == Config()

    def test_reads_env_vars(self):
        env = {
            "WXWARN_ARCHIVE_URL": "https://mirror.example.com/current_all.tar.gz",
            "WXWARN_ALERTS_API": "https://alerts.example.com",
            "WXWARN_USER_AGENT": "(env, env@example.com)",
            "WXWARN_TIMEOUT": "15",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.archive_url == env["WXWARN_ARCHIVE_URL"]
        assert config.alerts_api_base == env["WXWARN_ALERTS_API"]
        assert config.user_agent == env["WXWARN_USER_AGENT"]
        assert config.timeout_seconds == 15.0
