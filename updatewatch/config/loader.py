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
Watch file loading and merging for updatewatch.

A watch file lists the resources to keep an eye on and the defaults that
apply to all of them:

    apiVersion: updatewatch/v1
    defaults:
      timeout: 10
      interval: 7200
      repeating: true
    resources:
      - id: my-plugin
        name: My Plugin
        current_version: 1.2.3
        scheme: semantic
        resolver:
          name: spigot
          resource_id: 12345

Merge Behavior
--------------
Each resource is laid over the built-in defaults and then over the file's
"defaults" mapping with "last wins" semantics:
  - **Dicts**: Recursively merged (keys from the resource override defaults)
  - **Lists**: Completely replaced (NOT appended/extended)
  - **Scalars**: Overwritten (strings, numbers, booleans)

Built-in defaults:
  - timeout: 10 seconds
  - interval: 7200 seconds (2 hours)
  - repeating: true

Version strings are always kept as strings, even when YAML reads them as
numbers (e.g. ``current_version: 1.2`` becomes "1.2").

Error Handling
--------------
- ConfigError: Missing file, YAML parse errors, empty file, non-mapping
  document, missing or malformed resources list
- ConfigError: A resource with neither an id nor a name to derive one from
- All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from updatewatch.exceptions import ConfigError
from updatewatch.logging import get_global_logger

API_VERSION = "updatewatch/v1"

BUILTIN_DEFAULTS: dict[str, Any] = {
    "timeout": 10,
    "interval": 7200,
    "repeating": True,
}

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Load a YAML file and return the parsed Python object.

    Raises:
        ConfigError: When the file does not exist, cannot be parsed, or is
            empty.
    """
    if not p.exists():
        raise ConfigError(f"Watch file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dicts with "overlay wins".

    Rules:
      - dict + dict -> deep merge
      - list + list -> overlay REPLACES base (not concatenated)
      - everything else -> overlay overwrites base

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


def _normalize_resource(resource: dict[str, Any]) -> dict[str, Any]:
    """Coerce YAML-typed fields into the shapes the checker expects.

    Modifies resource in place and returns it.
    """
    version = resource.get("current_version")
    if version is not None and not isinstance(version, str):
        resource["current_version"] = str(version)

    # "resolver: spigot" is shorthand for "resolver: {name: spigot}"
    if isinstance(resource.get("resolver"), str):
        resource["resolver"] = {"name": resource["resolver"]}

    if "id" not in resource and "name" in resource:
        resource["id"] = str(resource["name"]).strip().lower().replace(" ", "-")
    return resource


# -------------------------------
# Public API
# -------------------------------


def load_watch_config(config_path: Path) -> dict[str, Any]:
    """Load a watch file and merge defaults into every resource.

    Steps
      1) Read the watch file YAML.
      2) Merge built-in defaults with the file's "defaults" mapping.
      3) Lay each resource over the merged defaults.
      4) Normalize YAML-typed values (versions as strings, resolver shorthand).

    Args:
        config_path: Path to the watch YAML file.

    Returns:
        The configuration dict. config["resources"] is a list of fully
        merged resource dicts; config["defaults"] holds the merged defaults.

    Raises:
        ConfigError: If the file is missing, invalid YAML, empty, not a
            mapping, has no usable "resources" list, or a resource has
            neither an id nor a name.

    Example:
        >>> cfg = load_watch_config(Path("watch.yaml"))
        >>> cfg["resources"][0]["timeout"]
        10

    """
    logger = get_global_logger()

    config_path = config_path.resolve()
    logger.verbose("CONFIG", f"Loading watch file: {config_path}")

    data = _load_yaml_file(config_path)
    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML must be a mapping (dict): {config_path}")

    file_defaults = data.get("defaults") or {}
    if not isinstance(file_defaults, dict):
        raise ConfigError(f"Field 'defaults' must be a mapping: {config_path}")
    defaults = _deep_merge_dicts(BUILTIN_DEFAULTS, file_defaults)

    resources = data.get("resources")
    if not isinstance(resources, list) or not resources:
        raise ConfigError(f"No resources defined in watch file: {config_path}")

    merged_resources = []
    for idx, resource in enumerate(resources):
        if not isinstance(resource, dict):
            raise ConfigError(f"resources[{idx}] must be a mapping: {config_path}")
        merged = _normalize_resource(_deep_merge_dicts(defaults, resource))
        if not merged.get("id"):
            raise ConfigError(
                f"resources[{idx}]: Missing required field: id (or a name to derive it "
                f"from): {config_path}"
            )
        merged_resources.append(merged)
        logger.debug("CONFIG", f"resources[{idx}]: {merged}")

    logger.verbose(
        "CONFIG", f"Loaded {len(merged_resources)} resource(s) from {config_path.name}"
    )

    result = dict(data)
    result["defaults"] = defaults
    result["resources"] = merged_resources
    return result
