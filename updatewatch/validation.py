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

"""Watch file validation for updatewatch.

Checks a watch file for structural and configuration problems without
making any network calls, so mistakes surface before a watcher is started.

Example:
    Validate a watch file and handle results:
        ```python
        from pathlib import Path
        from updatewatch.validation import validate_watch_config

        result = validate_watch_config(Path("watch.yaml"))
        if result.status == "valid":
            print(f"Watch file is valid with {result.resource_count} resource(s)")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from updatewatch.config.loader import API_VERSION, _deep_merge_dicts
from updatewatch.exceptions import ConfigError
from updatewatch.logging import get_global_logger
from updatewatch.resolvers import get_resolver
from updatewatch.results import ValidationResult
from updatewatch.versioning import detect_scheme, get_scheme

__all__ = ["validate_watch_config"]


def _invalid(config_path: Path, errors: list[str], warnings: list[str]) -> ValidationResult:
    return ValidationResult(
        status="invalid",
        errors=errors,
        warnings=warnings,
        resource_count=0,
        config_path=str(config_path),
    )


def _validate_resource(
    idx: int, resource: Any, errors: list[str], warnings: list[str]
) -> None:
    prefix = f"resources[{idx}]"

    if not isinstance(resource, dict):
        errors.append(f"{prefix}: Resource must be a dictionary")
        return

    # id may be derived from name, as the loader does
    if "id" not in resource and not resource.get("name"):
        errors.append(
            f"{prefix}: Missing required field: id (or a name to derive it from)"
        )
    for field in ("current_version", "resolver"):
        if field not in resource:
            errors.append(f"{prefix}: Missing required field: {field}")

    if "id" in resource and (not isinstance(resource["id"], str) or not resource["id"]):
        errors.append(f"{prefix}: Field 'id' must be a non-empty string")

    scheme = None
    if "scheme" in resource:
        try:
            scheme = get_scheme(str(resource["scheme"]))
        except ConfigError as err:
            errors.append(f"{prefix}.scheme: {err}")

    if "current_version" in resource:
        current = resource["current_version"]
        if not isinstance(current, str):
            warnings.append(
                f"{prefix}: current_version {current!r} is not a string; "
                f"quote it in YAML to keep it exact"
            )
        current = str(current)
        if scheme is not None and not scheme.matches(current):
            errors.append(
                f"{prefix}: current_version {current!r} does not match "
                f"the {scheme.name} scheme"
            )
        elif scheme is None and detect_scheme(current) is None:
            errors.append(
                f"{prefix}: current_version {current!r} matches no known version scheme"
            )

    for field in ("timeout", "interval"):
        if field in resource:
            value = resource[field]
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{prefix}: Field '{field}' must be a number")
            elif value <= 0:
                errors.append(f"{prefix}: Field '{field}' must be positive")

    if "resolver" not in resource:
        return

    settings = resource["resolver"]
    if isinstance(settings, str):
        settings = {"name": settings}
    if not isinstance(settings, dict):
        errors.append(f"{prefix}.resolver: Must be a dictionary")
        return
    if "name" not in settings:
        errors.append(f"{prefix}.resolver: Missing required field: name")
        return

    try:
        resolver = get_resolver(settings["name"])
    except ConfigError as err:
        errors.append(f"{prefix}.resolver.name: {err}")
        return

    try:
        for error in resolver.validate_config({**resource, "resolver": settings}):
            errors.append(f"{prefix}: {error}")
    except Exception as err:
        errors.append(f"{prefix}: Resolver validation failed: {err}")


def validate_watch_config(config_path: Path) -> ValidationResult:
    """Validate a watch file without fetching anything.

    This function checks:

    1. YAML file can be parsed
    2. apiVersion is supported (warning otherwise)
    3. Each resource has current_version, resolver and an id (or a name)
    4. current_version fits the configured or a detectable scheme
    5. Resolver names exist and their settings are valid

    Args:
        config_path: Path to the watch YAML file.

    Returns:
        ValidationResult with status "valid" or "invalid".

    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []

    logger.verbose("VALIDATE", f"Validating watch file: {config_path}")

    if not config_path.exists():
        errors.append(f"Watch file not found: {config_path}")
        return _invalid(config_path, errors, warnings)

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        errors.append(f"Invalid YAML syntax: {err}")
        return _invalid(config_path, errors, warnings)
    except OSError as err:
        errors.append(f"Failed to read watch file: {err}")
        return _invalid(config_path, errors, warnings)

    if not isinstance(data, dict):
        errors.append("Watch file must be a YAML dictionary/mapping")
        return _invalid(config_path, errors, warnings)

    api_version = data.get("apiVersion")
    if api_version is None:
        warnings.append(f"Missing apiVersion (expected: {API_VERSION})")
    elif api_version != API_VERSION:
        warnings.append(
            f"apiVersion {api_version!r} may not be supported (expected: {API_VERSION})"
        )

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        errors.append("Field 'defaults' must be a dictionary")
        defaults = {}

    resources = data.get("resources")
    if not isinstance(resources, list):
        errors.append("Missing required field: resources (must be a list)")
        return _invalid(config_path, errors, warnings)
    if not resources:
        errors.append("Field 'resources' must contain at least one resource")
        return _invalid(config_path, errors, warnings)

    for idx, resource in enumerate(resources):
        if isinstance(resource, dict):
            resource = _deep_merge_dicts(defaults, resource)
        _validate_resource(idx, resource, errors, warnings)

    status = "valid" if not errors else "invalid"
    logger.verbose("VALIDATE", f"Watch file is {status} ({len(errors)} error(s))")

    return ValidationResult(
        status=status,
        errors=errors,
        warnings=warnings,
        resource_count=len(resources),
        config_path=str(config_path),
    )
