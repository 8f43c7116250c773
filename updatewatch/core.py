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

"""Core orchestration for updatewatch.

This module ties one check cycle together:

1. Look up the resolver named in the resource config
2. Fetch the distributed version (the only network call)
3. Compare it with the current version and classify the result

Failure Handling:

- A failed fetch (NetworkError, including InvalidResourceError) becomes an
    UpdateStatus with status FAILED. This is the only place an error is
    turned into a normal value.
- Version scheme problems (VersionSchemeError) and configuration problems
    (ConfigError) propagate to the caller of check_resource(). check_config()
    records scheme problems per resource so one bad entry does not hide the
    rest.

Example:
    Programmatic usage:
        ```python
        from pathlib import Path
        from updatewatch.core import check_config, check_resource

        status = check_resource(
            {
                "id": "my-plugin",
                "current_version": "1.2.3",
                "resolver": {"name": "spigot", "resource_id": 12345},
            }
        )
        print(status.status)

        for result in check_config(Path("watch.yaml")):
            print(result.resource_id, result.update.status)
        ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from updatewatch.config.loader import BUILTIN_DEFAULTS, load_watch_config
from updatewatch.exceptions import ConfigError, NetworkError, VersionSchemeError
from updatewatch.logging import get_global_logger
from updatewatch.policy.updates import build_status
from updatewatch.resolvers import VersionResolver, get_resolver
from updatewatch.results import CheckResult, UpdateStatus
from updatewatch.versioning import VersionScheme, get_scheme


def resource_scheme(resource: dict[str, Any]) -> VersionScheme | None:
    """Return the explicit scheme configured for a resource, if any.

    Raises:
        ConfigError: If the configured scheme name is unknown.
    """
    name = resource.get("scheme")
    if name is None or name == "":
        return None
    if not isinstance(name, str):
        raise ConfigError(f"Field 'scheme' must be a string, got {name!r}")
    return get_scheme(name)


def fetch_distributed_version(
    resource: dict[str, Any],
    resolver: VersionResolver | None = None,
) -> str | None:
    """Fetch the distributed version, or None if the fetch failed.

    Args:
        resource: Resource entry (merged with defaults).
        resolver: Resolver to use instead of the one named in the config.

    Returns:
        The distributed version string, or None on NetworkError.

    Raises:
        ConfigError: If no resolver is configured or its name is unknown.

    """
    logger = get_global_logger()
    resource_id = resource.get("id", "unknown-id")

    if resolver is None:
        settings = resource.get("resolver") or {}
        resolver_name = settings.get("name") if isinstance(settings, dict) else None
        if not resolver_name:
            raise ConfigError(f"No 'resolver.name' defined for resource: {resource_id}")
        resolver = get_resolver(resolver_name)

    timeout = resource.get("timeout", BUILTIN_DEFAULTS["timeout"])
    try:
        return resolver.get_version(resource, timeout)
    except NetworkError as err:
        logger.verbose("CHECK", f"Failed to fetch version for {resource_id}: {err}")
        return None


def check_resource(
    resource: dict[str, Any],
    *,
    resolver: VersionResolver | None = None,
) -> UpdateStatus:
    """Run one check cycle for a single resource.

    Args:
        resource: Resource entry with at least current_version and a
            resolver block (unless resolver is passed). Optional keys:
            scheme, timeout.
        resolver: Resolver instance overriding the configured one.

    Returns:
        The UpdateStatus for this cycle. FAILED when the distributed version
            could not be fetched.

    Raises:
        ConfigError: On missing current_version, unknown resolver or
            unknown scheme.
        VersionSchemeError: If the versions cannot be compared.

    """
    logger = get_global_logger()
    resource_id = resource.get("id", "unknown-id")

    current = resource.get("current_version")
    if current is None or current == "":
        raise ConfigError(f"No 'current_version' defined for resource: {resource_id}")
    current = str(current)

    scheme = resource_scheme(resource)
    distributed = fetch_distributed_version(resource, resolver)

    status = build_status(distributed, current, scheme)
    logger.verbose(
        "CHECK",
        f"{resource_id}: current={current} distributed={distributed} "
        f"-> {status.status}",
    )
    return status


def check_config(config_path: Path) -> list[CheckResult]:
    """Check every resource in a watch file once.

    Args:
        config_path: Path to the watch YAML file.

    Returns:
        One CheckResult per resource, in file order.

    Raises:
        ConfigError: If the watch file or a resource entry is invalid.

    """
    logger = get_global_logger()
    config = load_watch_config(config_path)
    resources = config["resources"]

    results = []
    for idx, resource in enumerate(resources, start=1):
        resource_id = resource.get("id", "unknown-id")
        name = resource.get("name", resource_id)
        resolver_name = (resource.get("resolver") or {}).get("name", "")
        logger.step(idx, len(resources), f"Checking {name}...")

        try:
            update = check_resource(resource)
        except VersionSchemeError as err:
            logger.verbose("CHECK", f"{resource_id}: {err}")
            results.append(
                CheckResult(resource_id, name, resolver_name, None, error=str(err))
            )
            continue

        results.append(CheckResult(resource_id, name, resolver_name, update))

    return results
