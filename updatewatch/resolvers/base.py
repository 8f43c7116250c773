# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Resolver base protocol and registry for updatewatch.

A resolver answers one question: what is the latest distributed version of
this resource? It is the only part of a check that touches the network.

This module defines:

- VersionResolver protocol: Interface that all resolvers must implement
- Resolver registry: Global dict mapping resolver names to implementations
- Registration and lookup functions: register_resolver() and get_resolver()

Built-in resolvers:

- spigot: SpigotMC resource API (JSON)
- spigot_legacy: SpigotMC legacy update endpoint (plain text)
- polymart: Polymart resource info API (JSON)
- songoda: Songoda products API (JSON)
- http_json: Any JSON endpoint, version located with JSONPath

Design Philosophy:
    - Resolvers are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (resolvers self-register)
    - Each resolver is stateless and instantiated on demand

Example:
    Implementing a custom resolver:
        ```python
        from typing import Any
        from updatewatch.resolvers.base import register_resolver

        class StaticResolver:
            def get_version(self, resource: dict[str, Any], timeout: float) -> str:
                return resource["resolver"]["version"]

            def validate_config(self, resource: dict[str, Any]) -> list[str]:
                return []

        register_resolver("static", StaticResolver)

        # Now it can be used in watch files:
        # resolver:
        #   name: static
        #   version: 1.0.0
        ```

"""

from __future__ import annotations

from typing import Any, Protocol

from updatewatch.exceptions import ConfigError

# -------------------------------
# Resolver Protocol
# -------------------------------


class VersionResolver(Protocol):
    """Protocol for distributed-version resolvers."""

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        """Fetch the latest distributed version of a resource.

        Args:
            resource: The resource entry from the watch file. Resolver
                settings live under resource["resolver"].
            timeout: Connect and read timeout in seconds.

        Returns:
            The distributed version string, whitespace stripped.

        Raises:
            ConfigError: If the resolver settings are missing or invalid.
            NetworkError: If the version could not be fetched.
            InvalidResourceError: If the service says the resource does not
                exist.

        """
        ...

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        """Validate resolver settings without making network calls.

        Args:
            resource: The resource entry from the watch file.

        Returns:
            List of human readable error messages. Empty if valid.

        """
        ...


# -------------------------------
# Shared helpers
# -------------------------------


def resolver_settings(resource: dict[str, Any]) -> dict[str, Any]:
    """Return the resolver block of a resource entry (empty dict if absent)."""
    settings = resource.get("resolver", {})
    return settings if isinstance(settings, dict) else {}


def resource_id_from(resource: dict[str, Any], resolver_name: str) -> int:
    """Read the numeric marketplace resource id from resolver settings.

    Raises:
        ConfigError: If resolver.resource_id is missing or not a positive
            integer.
    """
    raw = resolver_settings(resource).get("resource_id")
    if raw is None or raw == "":
        raise ConfigError(
            f"{resolver_name} resolver requires 'resolver.resource_id' in config"
        )
    try:
        resource_id = int(raw)
    except (TypeError, ValueError) as err:
        raise ConfigError(
            f"Invalid resource_id {raw!r} for {resolver_name}: must be an integer"
        ) from err
    if isinstance(raw, bool) or resource_id <= 0:
        raise ConfigError(
            f"Invalid resource_id {raw!r} for {resolver_name}: must be positive"
        )
    return resource_id


def validate_resource_id(resource: dict[str, Any]) -> list[str]:
    """validate_config() implementation shared by the marketplace resolvers."""
    errors = []
    settings = resolver_settings(resource)
    if "resource_id" not in settings:
        errors.append("Missing required field: resolver.resource_id")
    else:
        raw = settings["resource_id"]
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            errors.append("resolver.resource_id must be an integer")
        elif not str(raw).strip().isdigit() or int(raw) <= 0:
            errors.append("resolver.resource_id must be a positive integer")
    return errors


# -------------------------------
# Resolver Registry
# -------------------------------

_RESOLVER_REGISTRY: dict[str, type[VersionResolver]] = {}


def register_resolver(name: str, resolver_class: type[VersionResolver]) -> None:
    """Register a resolver by name in the global registry.

    Registering the same name twice overwrites the previous registration
    (allows monkey-patching for tests).

    Args:
        name: Resolver name as written under resolver.name in watch files.
            Lowercase with underscores.
        resolver_class: Class implementing the VersionResolver protocol.

    """
    _RESOLVER_REGISTRY[name] = resolver_class


def get_resolver(name: str) -> VersionResolver:
    """Get a new resolver instance by name.

    Args:
        name: Resolver name (e.g., "spigot"). Case-sensitive.

    Returns:
        A new instance of the requested resolver.

    Raises:
        ConfigError: If the name is not registered. The error message lists
            the available resolvers.

    """
    if name not in _RESOLVER_REGISTRY:
        available = ", ".join(sorted(_RESOLVER_REGISTRY))
        raise ConfigError(
            f"Unknown resolver: {name!r}. Available: {available or '(none)'}"
        )
    return _RESOLVER_REGISTRY[name]()


def available_resolvers() -> list[str]:
    """Names of all registered resolvers, sorted."""
    return sorted(_RESOLVER_REGISTRY)
