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

"""Distributed-version resolvers for updatewatch.

A resolver fetches the latest distributed version of one resource. The
resolver registry allows dynamic lookup by the name written under
resolver.name in a watch file.

Available Resolvers:
    spigot : SpigotResolver
        SpigotMC simple JSON API.
    spigot_legacy : SpigotLegacyResolver
        SpigotMC legacy plain-text update endpoint.
    polymart : PolymartResolver
        Polymart getResourceInfo API.
    songoda : SongodaResolver
        Songoda products API.
    http_json : HttpJsonResolver
        Any JSON endpoint, version located with a JSONPath expression.

Example:
    Fetch a version directly:

        from updatewatch.resolvers import get_resolver

        resolver = get_resolver("spigot")
        version = resolver.get_version(
            {"resolver": {"name": "spigot", "resource_id": 12345}},
            timeout=10,
        )

"""

# Import resolver modules to trigger self-registration
from . import (
    http_json,  # noqa: F401
    polymart,  # noqa: F401
    songoda,  # noqa: F401
    spigot,  # noqa: F401
)
from .base import VersionResolver, available_resolvers, get_resolver, register_resolver

__all__ = ["VersionResolver", "available_resolvers", "get_resolver", "register_resolver"]
