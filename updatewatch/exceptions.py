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

"""Exception hierarchy for updatewatch.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors:

- ConfigError: Configuration-related errors (YAML parse, missing fields,
    unknown resolver or scheme names)
- NetworkError: Remote version lookups that failed (HTTP errors, timeouts,
    malformed API responses)
- NullArgumentError: A required argument was missing (always a caller bug)
- VersionSchemeError: Version strings that cannot be compared, either because
    they do not fit a scheme or because the two sides disagree

All exceptions inherit from UpdateWatchError, allowing users to catch all
updatewatch errors with a single except clause if needed.

Example:
    Catching specific error types:
        ```python
        from updatewatch.policy.updates import build_status
        from updatewatch.exceptions import SchemeDisagreementError

        try:
            status = build_status("2024-01-01", "1.2.3")
        except SchemeDisagreementError as e:
            print(f"Cannot compare: {e}")
        ```

    Catching all updatewatch errors:
        ```python
        from updatewatch.exceptions import UpdateWatchError

        try:
            status = check_resource(resource)
        except UpdateWatchError as e:
            print(f"updatewatch error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "UpdateWatchError",
    "ConfigError",
    "NetworkError",
    "InvalidResourceError",
    "NullArgumentError",
    "VersionSchemeError",
    "VersionSchemeMismatchError",
    "SchemeUndetectableError",
    "SchemeDisagreementError",
]


class UpdateWatchError(Exception):
    """Base exception for all updatewatch errors.

    All updatewatch-specific exceptions inherit from this class, allowing
    users to catch all updatewatch errors with a single except clause.
    """

    pass


class ConfigError(UpdateWatchError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, empty files, non-mapping documents)
    - Missing or invalid configuration fields
    - Unknown resolver names
    - Unknown version scheme names
    - Missing watch files
    """

    pass


class NetworkError(UpdateWatchError):
    """Raised when the distributed version could not be fetched.

    This exception is raised when there are problems with:

    - HTTP failures (non-200 responses, connection errors, timeouts)
    - API responses that are not valid JSON
    - API responses that do not contain a version where one is expected

    Note:
        check_resource() turns this error into a FAILED status instead of
        propagating it.
    """

    pass


class InvalidResourceError(NetworkError):
    """Raised when the remote service reports that a resource does not exist."""

    pass


class NullArgumentError(UpdateWatchError, ValueError):
    """Raised when a required argument is None or empty.

    This is always a caller bug and is never retried.
    """

    pass


class VersionSchemeError(UpdateWatchError):
    """Base class for errors about version schemes.

    Example:
        Treat any scheme problem as a failed check:
            ```python
            try:
                status = build_status(distributed, current)
            except VersionSchemeError:
                status = UpdateStatus(distributed, current, "FAILED")
            ```
    """

    pass


class VersionSchemeMismatchError(VersionSchemeError):
    """Raised when a version string does not conform to the asserted scheme."""

    pass


class SchemeUndetectableError(VersionSchemeError):
    """Raised when a version string matches no registered scheme."""

    pass


class SchemeDisagreementError(VersionSchemeError):
    """Raised when the current and distributed versions detect to different schemes."""

    pass
