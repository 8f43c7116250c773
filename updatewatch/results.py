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

"""Public API return types for updatewatch.

This module defines dataclasses for return values from public API functions:
the status of a single update check, the per-resource result of checking a
whole watch file, and the result of validating a watch file.

All dataclasses are frozen (immutable). A watcher replaces its last status
with a new object on every check; it never mutates one.

Example:
    Using result types:
        ```python
        from updatewatch.policy.updates import build_status

        status = build_status("1.3.0", "1.2.9")
        print(status.status)        # MINOR_AVAILABLE
        print(status.is_available)  # True
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like VersionScheme) stay with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, get_args

Status = Literal[
    "UNAVAILABLE",
    "AVAILABLE",
    "MAJOR_AVAILABLE",
    "MINOR_AVAILABLE",
    "FAILED",
]

STATUSES: tuple[Status, ...] = get_args(Status)

_AVAILABLE_STATUSES = frozenset({"AVAILABLE", "MAJOR_AVAILABLE", "MINOR_AVAILABLE"})


@dataclass(frozen=True)
class UpdateStatus:
    """Outcome of one update check.

    Attributes:
        distributed_version: Latest version reported by the remote service,
            or None when it could not be fetched.
        current_version: Version the caller already has.
        status: One of UNAVAILABLE, AVAILABLE, MAJOR_AVAILABLE,
            MINOR_AVAILABLE or FAILED.
    """

    distributed_version: str | None
    current_version: str
    status: Status

    @property
    def is_available(self) -> bool:
        """True if any kind of update is available."""
        return self.status in _AVAILABLE_STATUSES


@dataclass(frozen=True)
class CheckResult:
    """Result of checking one resource from a watch file.

    Attributes:
        resource_id: Unique resource identifier from the watch file.
        name: Resource display name.
        resolver: Resolver used to fetch the distributed version.
        update: The update status, or None if the versions could not be
            compared (see error).
        error: Why the versions could not be compared, or None.
    """

    resource_id: str
    name: str
    resolver: str
    update: UpdateStatus | None
    error: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a watch file.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        resource_count: Number of resources in the watch file.
        config_path: String path to the validated watch file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    resource_count: int
    config_path: str
