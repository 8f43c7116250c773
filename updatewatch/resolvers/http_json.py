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
Generic JSON API resolver for updatewatch.

Queries any JSON endpoint and locates the distributed version with a
JSONPath expression. The marketplace resolvers (spigot, polymart, songoda)
are thin wrappers over the helpers defined here.

Watch File Configuration:
resolver:
  name: http_json
  url: "https://vendor.example/api/latest"
  version_path: "release.version"      # JSONPath to the version
  method: "GET"                        # Optional: GET or POST
  headers:                             # Optional: custom headers
    Authorization: "${API_TOKEN}"
  body:                                # Optional: POST body (JSON)
    channel: "stable"

Configuration Fields:
    - **url** (str, required): Endpoint returning JSON.
    - **version_path** (str, required): JSONPath expression for the version.
      Examples: "version", "data.latest.version", "versions[0].name"
    - **method** (str, optional): "GET" or "POST". Default is "GET".
    - **headers** (dict, optional): Extra request headers. A value written as
      "${NAME}" is replaced by the environment variable NAME.
    - **body** (dict, optional): JSON body sent with POST requests.

Error Handling:
    - ConfigError: Missing or invalid configuration, invalid JSONPath
    - NetworkError: Request failures, non-200 responses, invalid JSON,
      version path not found in the response
    - Errors are chained with 'from err' for better debugging
"""

from __future__ import annotations

import json
import os
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
import requests

from updatewatch.exceptions import ConfigError, NetworkError
from updatewatch.logging import get_global_logger

from .base import register_resolver, resolver_settings

USER_AGENT = "updatewatch"


def fetch_json(
    url: str,
    *,
    service: str,
    timeout: float,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> Any:
    """Request a URL and decode its JSON body.

    Args:
        url: Endpoint to call.
        service: Name used in error messages (e.g., "SpigotMC").
        timeout: Connect and read timeout in seconds.
        method: "GET" or "POST".
        headers: Extra request headers.
        body: JSON body for POST requests.

    Returns:
        The decoded JSON document.

    Raises:
        NetworkError: If the request fails, the status is not 200, or the
            body is not JSON.

    """
    logger = get_global_logger()

    request_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    request_headers.update(headers or {})

    logger.verbose("RESOLVER", f"{method} {url}")
    try:
        if method == "POST":
            response = requests.post(
                url, headers=request_headers, json=body or {}, timeout=timeout
            )
        else:
            response = requests.get(url, headers=request_headers, timeout=timeout)
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"Failed to call {service} API: {err}") from err

    if response.status_code != 200:
        raise NetworkError(
            f"{service} API did not respond with a 200 status code: "
            f"{response.status_code} {response.reason}"
        )

    try:
        data = response.json()
    except ValueError as err:
        raise NetworkError(
            f"Invalid JSON response from {service} API. "
            f"Response: {response.text[:200]}"
        ) from err

    logger.debug("RESOLVER", f"JSON response: {json.dumps(data, indent=2)}")
    return data


def find_json_value(data: Any, path: str, *, service: str) -> str:
    """Return the first value matched by a JSONPath expression as a string.

    Raises:
        ConfigError: If the JSONPath expression itself is invalid.
        NetworkError: If nothing matches, or the match is null/empty.
    """
    try:
        expr = jsonpath_parse(path)
    except Exception as err:
        raise ConfigError(f"Invalid JSONPath {path!r}: {err}") from err

    matches = expr.find(data)
    if not matches or matches[0].value is None:
        raise NetworkError(
            f"Version path {path!r} did not match anything in {service} response"
        )

    value = str(matches[0].value).strip()
    if not value:
        raise NetworkError(f"{service} returned an empty version at {path!r}")
    return value


def _expand_headers(headers: dict[str, Any]) -> dict[str, str]:
    """Expand "${NAME}" header values from the environment.

    Headers whose variable is unset are dropped with a verbose warning.
    """
    logger = get_global_logger()
    expanded: dict[str, str] = {}
    for key, value in headers.items():
        if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            env_value = os.environ.get(env_var)
            if not env_value:
                logger.verbose(
                    "RESOLVER", f"Warning: Environment variable {env_var} not set"
                )
                continue
            expanded[key] = env_value
        else:
            expanded[key] = str(value)
    return expanded


class HttpJsonResolver:
    """Resolver for arbitrary JSON endpoints.

    Configuration example:
        resolver:
          name: http_json
          url: "https://api.vendor.example/latest"
          version_path: "version"
    """

    def get_version(self, resource: dict[str, Any], timeout: float) -> str:
        settings = resolver_settings(resource)

        url = settings.get("url")
        if not url:
            raise ConfigError("http_json resolver requires 'resolver.url' in config")

        version_path = settings.get("version_path")
        if not version_path:
            raise ConfigError(
                "http_json resolver requires 'resolver.version_path' in config"
            )

        method = str(settings.get("method", "GET")).upper()
        if method not in ("GET", "POST"):
            raise ConfigError(f"Invalid method: {method!r}. Must be 'GET' or 'POST'")

        headers = _expand_headers(settings.get("headers") or {})
        body = settings.get("body") or {}

        data = fetch_json(
            url,
            service=url,
            timeout=timeout,
            method=method,
            headers=headers,
            body=body,
        )
        version = find_json_value(data, version_path, service=url)
        get_global_logger().verbose("RESOLVER", f"Distributed version: {version}")
        return version

    def validate_config(self, resource: dict[str, Any]) -> list[str]:
        errors = []
        settings = resolver_settings(resource)

        if "url" not in settings:
            errors.append("Missing required field: resolver.url")
        elif not isinstance(settings["url"], str) or not settings["url"].strip():
            errors.append("resolver.url must be a non-empty string")

        if "version_path" not in settings:
            errors.append("Missing required field: resolver.version_path")
        elif not isinstance(settings["version_path"], str):
            errors.append("resolver.version_path must be a string")
        else:
            try:
                jsonpath_parse(settings["version_path"])
            except Exception as err:
                errors.append(f"Invalid version_path JSONPath: {err}")

        if "method" in settings:
            method = settings["method"]
            if not isinstance(method, str) or method.upper() not in ("GET", "POST"):
                errors.append("resolver.method must be 'GET' or 'POST'")

        if "headers" in settings and not isinstance(settings["headers"], dict):
            errors.append("resolver.headers must be a dictionary")

        if "body" in settings and not isinstance(settings["body"], dict):
            errors.append("resolver.body must be a dictionary")

        return errors


register_resolver("http_json", HttpJsonResolver)
