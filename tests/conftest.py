"""
Pytest configuration and shared fixtures for updatewatch tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from updatewatch.logging import SilentLogger, get_global_logger, set_global_logger
from updatewatch.resolvers import base as resolver_base


class StaticResolver:
    """Resolver returning a fixed version (or raising) without network I/O."""

    def __init__(self, version: str | None = None, error: Exception | None = None):
        self.version = version
        self.error = error
        self.calls = 0

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        return []


@pytest.fixture(autouse=True)
def _restore_global_state():
    """
    Restore the global logger and resolver registry after every test.

    CLI commands install a printing logger and some tests register
    throwaway resolvers.
    """
    logger = get_global_logger()
    registry = dict(resolver_base._RESOLVER_REGISTRY)
    set_global_logger(SilentLogger())
    yield
    set_global_logger(logger)
    resolver_base._RESOLVER_REGISTRY.clear()
    resolver_base._RESOLVER_REGISTRY.update(registry)


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def static_resolver():
    """Factory fixture for StaticResolver instances."""
    return StaticResolver


@pytest.fixture
def sample_resource() -> dict[str, Any]:
    """Provide a single SpigotMC resource entry."""
    return {
        "id": "my-plugin",
        "name": "My Plugin",
        "current_version": "1.2.3",
        "timeout": 10,
        "resolver": {"name": "spigot", "resource_id": 12345},
    }


@pytest.fixture
def sample_watch_data() -> dict[str, Any]:
    """
    Provide sample watch file data.

    Returns a complete watch file structure with shared defaults and one
    resource per marketplace resolver.
    """
    return {
        "apiVersion": "updatewatch/v1",
        "defaults": {"timeout": 5, "interval": 3600},
        "resources": [
            {
                "id": "spigot-plugin",
                "name": "Spigot Plugin",
                "current_version": "1.2.3",
                "resolver": {"name": "spigot", "resource_id": 12345},
            },
            {
                "id": "polymart-plugin",
                "current_version": "2.0",
                "resolver": {"name": "polymart", "resource_id": 678},
            },
            {
                "id": "songoda-plugin",
                "current_version": "2024-01-15",
                "scheme": "calendar",
                "resolver": {"name": "songoda", "resource_id": 42},
            },
        ],
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("watch.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
