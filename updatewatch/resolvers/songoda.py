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
Songoda resolver for updatewatch.

Calls the Songoda products API. Versions are listed newest first under
data.versions; the first entry is the distributed version.

Watch File Configuration:
resolver:
  name: songoda
  resource_id: 42
"""

from __future__ import annotations

from typing import Any

from updatewatch.logging import get_global_logger

from .base import register_resolver, resource_id_from, validate_resource_id
from .http_json import fetch_json, find_json_value

SONGODA_URL = "https://songoda.com/api/v2/products/id/{id}"


class SongodaResolver:
    """Resolver for Songoda products."""

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        resource_id = resource_id_from(resource, "songoda")
        data = fetch_json(
            SONGODA_URL.format(id=resource_id), service="Songoda", timeout=timeout
        )
        version = find_json_value(data, "data.versions[0].version", service="Songoda")
        get_global_logger().verbose("RESOLVER", f"Songoda version: {version}")
        return version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        return validate_resource_id(resource)


register_resolver("songoda", SongodaResolver)
