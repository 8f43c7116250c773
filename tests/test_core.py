"""
Tests for updatewatch.core module.

Tests check orchestration including:
- Single resource checks with injected and registered resolvers
- Fetch failures turned into FAILED statuses
- Scheme errors propagating from check_resource
- Whole watch file checks with per-resource error capture
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests_mock

from updatewatch.core import check_config, check_resource, resource_scheme
from updatewatch.exceptions import (
    ConfigError,
    InvalidResourceError,
    NetworkError,
    SchemeDisagreementError,
    VersionSchemeMismatchError,
)
from updatewatch.logging import get_logger, set_global_logger
from updatewatch.resolvers.polymart import POLYMART_URL
from updatewatch.resolvers.songoda import SONGODA_URL
from updatewatch.resolvers.spigot import SPIGOT_URL
from updatewatch.versioning import CALENDAR

pytestmark = pytest.mark.unit


class TestResourceScheme:
    """Tests for resource_scheme helper."""

    def test_no_scheme(self, sample_resource):
        """Test that resources without a scheme return None."""
        assert resource_scheme(sample_resource) is None

    def test_named_scheme(self, sample_resource):
        """Test that a configured scheme name is looked up."""
        assert resource_scheme({**sample_resource, "scheme": "calendar"}) is CALENDAR

    def test_unknown_scheme(self, sample_resource):
        """Test that an unknown scheme name raises ConfigError."""
        with pytest.raises(ConfigError, match="Unknown version scheme"):
            resource_scheme({**sample_resource, "scheme": "romver"})

    def test_non_string_scheme(self, sample_resource):
        """Test that a non-string scheme raises ConfigError."""
        with pytest.raises(ConfigError, match="must be a string"):
            resource_scheme({**sample_resource, "scheme": 3})


class TestCheckResource:
    """Tests for check_resource function."""

    def test_update_available(self, sample_resource, static_resolver):
        """Test that a newer distributed version is reported."""
        status = check_resource(sample_resource, resolver=static_resolver("1.3.0"))
        assert status.status == "MINOR_AVAILABLE"
        assert status.distributed_version == "1.3.0"
        assert status.current_version == "1.2.3"

    def test_up_to_date(self, sample_resource, static_resolver):
        """Test that the same version is UNAVAILABLE."""
        status = check_resource(sample_resource, resolver=static_resolver("1.2.3"))
        assert status.status == "UNAVAILABLE"

    def test_network_error_is_failed(self, sample_resource, static_resolver):
        """Test that a failed fetch becomes a FAILED status."""
        resolver = static_resolver(error=NetworkError("connection refused"))
        status = check_resource(sample_resource, resolver=resolver)
        assert status.status == "FAILED"
        assert status.distributed_version is None

    def test_invalid_resource_is_failed(self, sample_resource, static_resolver):
        """Test that an unknown remote resource becomes a FAILED status."""
        resolver = static_resolver(error=InvalidResourceError("no such resource"))
        assert check_resource(sample_resource, resolver=resolver).status == "FAILED"

    def test_timeout_passed_to_resolver(self, sample_resource):
        """Test that the resource timeout is handed to the resolver."""
        resolver = MagicMock()
        resolver.get_version.return_value = "1.2.3"
        check_resource({**sample_resource, "timeout": 3}, resolver=resolver)
        resolver.get_version.assert_called_once()
        assert resolver.get_version.call_args.args[1] == 3

    def test_explicit_scheme_mismatch_propagates(self, sample_resource, static_resolver):
        """Test that versions outside the configured scheme raise."""
        resource = {**sample_resource, "scheme": "basic"}
        with pytest.raises(VersionSchemeMismatchError):
            check_resource(resource, resolver=static_resolver("1.3"))

    def test_scheme_disagreement_propagates(self, sample_resource, static_resolver):
        """Test that disagreeing detected schemes raise."""
        with pytest.raises(SchemeDisagreementError):
            check_resource(sample_resource, resolver=static_resolver("1.3"))

    def test_missing_current_version(self, sample_resource, static_resolver):
        """Test that a resource without current_version raises ConfigError."""
        resource = dict(sample_resource)
        del resource["current_version"]
        with pytest.raises(ConfigError, match="No 'current_version' defined"):
            check_resource(resource, resolver=static_resolver("1.0.0"))

    def test_missing_resolver_name(self, sample_resource):
        """Test that a resource without a resolver name raises ConfigError."""
        resource = {**sample_resource, "resolver": {"resource_id": 1}}
        with pytest.raises(ConfigError, match="No 'resolver.name' defined"):
            check_resource(resource)

    def test_unknown_resolver(self, sample_resource):
        """Test that an unknown resolver name raises ConfigError."""
        resource = {**sample_resource, "resolver": {"name": "modrinth"}}
        with pytest.raises(ConfigError, match="Unknown resolver"):
            check_resource(resource)

    def test_registered_resolver(self, sample_resource):
        """Test a check going through the registered spigot resolver."""
        with requests_mock.Mocker() as m:
            m.get(SPIGOT_URL.format(id=12345), json={"current_version": "2.0.0"})
            status = check_resource(sample_resource)
        assert status.status == "MAJOR_AVAILABLE"

    def test_malformed_polymart_payload_is_failed(self, sample_resource):
        """Test that an unexpected Polymart payload becomes a FAILED status."""
        resource = {**sample_resource, "resolver": {"name": "polymart", "resource_id": 5}}
        with requests_mock.Mocker() as m:
            m.get(POLYMART_URL.format(id=5), json={"response": None})
            status = check_resource(resource)
        assert status.status == "FAILED"

    def test_registered_resolver_http_failure(self, sample_resource):
        """Test that an HTTP failure from a registered resolver is FAILED."""
        with requests_mock.Mocker() as m:
            m.get(SPIGOT_URL.format(id=12345), status_code=500)
            status = check_resource(sample_resource)
        assert status.status == "FAILED"


class TestCheckConfig:
    """Tests for check_config function."""

    def _mock_marketplaces(self, m):
        m.get(SPIGOT_URL.format(id=12345), json={"current_version": "1.3.0"})
        m.get(POLYMART_URL.format(id=678), status_code=503)
        m.get(
            SONGODA_URL.format(id=42),
            json={"data": {"versions": [{"version": "2024-02-01"}]}},
        )

    def test_checks_every_resource(self, create_yaml_file, sample_watch_data):
        """Test that each resource gets a result in file order."""
        path = create_yaml_file("watch.yaml", sample_watch_data)
        with requests_mock.Mocker() as m:
            self._mock_marketplaces(m)
            results = check_config(path)

        assert [r.resource_id for r in results] == [
            "spigot-plugin",
            "polymart-plugin",
            "songoda-plugin",
        ]
        assert [r.update.status for r in results] == [
            "MINOR_AVAILABLE",
            "FAILED",
            "MINOR_AVAILABLE",
        ]
        assert results[0].name == "Spigot Plugin"
        assert results[1].name == "polymart-plugin"
        assert results[2].resolver == "songoda"

    def test_scheme_error_recorded(self, create_yaml_file, sample_watch_data):
        """Test that a scheme error is captured without hiding other results."""
        sample_watch_data["resources"].append(
            {
                "id": "nightly",
                "current_version": "1.0.0",
                "resolver": {
                    "name": "http_json",
                    "url": "https://builds.example.com/latest",
                    "version_path": "build",
                },
            }
        )
        path = create_yaml_file("watch.yaml", sample_watch_data)
        with requests_mock.Mocker() as m:
            self._mock_marketplaces(m)
            m.get("https://builds.example.com/latest", json={"build": "nightly-42"})
            results = check_config(path)

        assert len(results) == 4
        assert results[3].update is None
        assert "Cannot find version scheme" in results[3].error
        assert results[0].update.status == "MINOR_AVAILABLE"

    def test_logs_steps(self, create_yaml_file, sample_watch_data, capsys):
        """Test that progress is reported through the global logger."""
        set_global_logger(get_logger())
        path = create_yaml_file("watch.yaml", sample_watch_data)
        with requests_mock.Mocker() as m:
            self._mock_marketplaces(m)
            check_config(path)

        out = capsys.readouterr().out
        assert "[1/3] Checking Spigot Plugin..." in out
        assert "[3/3] Checking songoda-plugin..." in out

    def test_config_error_propagates(self, create_yaml_file):
        """Test that an invalid watch file raises ConfigError."""
        path = create_yaml_file("watch.yaml", {"resources": []})
        with pytest.raises(ConfigError):
            check_config(path)
