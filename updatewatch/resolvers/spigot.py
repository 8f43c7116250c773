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

"""
SpigotMC resolvers for updatewatch.

Two endpoints are supported:

spigot : SpigotResolver
    The "simple" JSON API. Returns the resource document; the version is
    in "current_version". SpigotMC describes this API as unstable and it
    can lag behind the legacy endpoint.
spigot_legacy : SpigotLegacyResolver
    The legacy update endpoint. Returns the version as plain text, or a
    body containing "Invalid" for unknown resources.

Watch File Configuration:
resolver:
  name: spigot            # or spigot_legacy
  resource_id: 12345
"""

from __future__ import annotations

from typing import Any

import requests

from updatewatch.exceptions import InvalidResourceError, NetworkError
from updatewatch.logging import get_global_logger

from .base import register_resolver, resource_id_from, validate_resource_id
from .http_json import USER_AGENT, fetch_json, find_json_value

SPIGOT_URL = "https://api.spigotmc.org/simple/0.1/index.php?action=getResource&id={id}"
SPIGOT_LEGACY_URL = "https://api.spigotmc.org/legacy/update.php?resource={id}"


class SpigotResolver:
    """Resolver for the SpigotMC simple JSON API."""

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        resource_id = resource_id_from(resource, "spigot")
        data = fetch_json(
            SPIGOT_URL.format(id=resource_id), service="SpigotMC", timeout=timeout
        )
        if isinstance(data, dict) and "error" in data:
            raise InvalidResourceError(
                f"Cannot find SpigotMC resource with id '{resource_id}': "
                f"{data['error']}"
            )
        version = find_json_value(data, "current_version", service="SpigotMC")
        get_global_logger().verbose("RESOLVER", f"SpigotMC version: {version}")
        return version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        return validate_resource_id(resource)


class SpigotLegacyResolver:
    """Resolver for the SpigotMC legacy plain-text endpoint."""

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        logger = get_global_logger()
        resource_id = resource_id_from(resource, "spigot_legacy")
        url = SPIGOT_LEGACY_URL.format(id=resource_id)

        logger.verbose("RESOLVER", f"GET {url}")
        try:
            response = requests.get(
                url, headers={"User-Agent": USER_AGENT}, timeout=timeout
            )
        except requests.exceptions.RequestException as err:
            raise NetworkError(f"Failed to call SpigotMC API: {err}") from err

        if response.status_code == 404:
            raise InvalidResourceError(
                f"Cannot find SpigotMC resource with id '{resource_id}'"
            )
        if response.status_code != 200:
            raise NetworkError(
                f"SpigotMC API did not respond with a 200 status code: "
                f"{response.status_code} {response.reason}"
            )

        version = response.text.strip()
        if "Invalid" in version:
            raise InvalidResourceError(
                f"Cannot find SpigotMC resource with id '{resource_id}'"
            )
        if not version:
            raise NetworkError("SpigotMC returned an empty version")

        logger.verbose("RESOLVER", f"SpigotMC version: {version}")
        return version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        return validate_resource_id(resource)


register_resolver("spigot", SpigotResolver)
register_resolver("spigot_legacy", SpigotLegacyResolver)
