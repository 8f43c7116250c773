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
Polymart resolver for updatewatch.

Calls the Polymart getResourceInfo API. The response wraps everything in a
"response" object carrying a "success" flag; the latest version is at
response.resource.updates.latest.version.

Watch File Configuration:
resolver:
  name: polymart
  resource_id: 1234
"""

from __future__ import annotations

from typing import Any

from updatewatch.exceptions import InvalidResourceError, NetworkError
from updatewatch.logging import get_global_logger

from .base import register_resolver, resource_id_from, validate_resource_id
from .http_json import fetch_json, find_json_value

POLYMART_URL = "https://api.polymart.org/v1/getResourceInfo/?resource_id={id}"


class PolymartResolver:
    """Resolver for Polymart resources."""

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        resource_id = resource_id_from(resource, "polymart")
        data = fetch_json(
            POLYMART_URL.format(id=resource_id), service="Polymart", timeout=timeout
        )

        # Older API revisions returned the payload without the wrapper.
        payload = data.get("response", data) if isinstance(data, dict) else data
        if not isinstance(payload, dict):
            raise NetworkError(
                f"Unexpected Polymart response for resource '{resource_id}': "
                f"{str(payload)[:200]}"
            )
        if not payload.get("success", False):
            raise InvalidResourceError(
                f"Polymart API responded with a non-successful response "
                f"for resource '{resource_id}'"
            )

        version = find_json_value(
            payload, "resource.updates.latest.version", service="Polymart"
        )
        get_global_logger().verbose("RESOLVER", f"Polymart version: {version}")
        return version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        return validate_resource_id(resource)


register_resolver("polymart", PolymartResolver)
