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

"""Update status classification for updatewatch.

Turns a pair of version strings into the UpdateStatus handed to
notification callbacks: detect (or accept) a scheme, compare, classify.

Example:
    Build a status from two versions:

        from updatewatch.policy.updates import build_status

        status = build_status(distributed="2.0.0", current="1.9.9")
        status.status  # "MAJOR_AVAILABLE"

        # distributed version could not be fetched
        build_status(distributed=None, current="1.9.9").status  # "FAILED"

"""

from __future__ import annotations

from updatewatch.exceptions import (
    NullArgumentError,
    SchemeDisagreementError,
    SchemeUndetectableError,
)
from updatewatch.results import Status, UpdateStatus
from updatewatch.versioning import (
    VersionChange,
    VersionScheme,
    compare_versions,
    detect_scheme,
)

_CHANGE_TO_STATUS: dict[VersionChange, Status] = {
    "NONE": "UNAVAILABLE",
    "MAJOR": "MAJOR_AVAILABLE",
    "YEAR": "MAJOR_AVAILABLE",
    "MINOR": "MINOR_AVAILABLE",
    "MONTH": "MINOR_AVAILABLE",
    "PATCH": "AVAILABLE",
    "PRE_RELEASE": "AVAILABLE",
    "METADATA": "AVAILABLE",
    "DAY": "AVAILABLE",
}


def change_to_status(change: VersionChange) -> Status:
    """Map a comparison result onto the user-facing status."""
    try:
        return _CHANGE_TO_STATUS[change]
    except KeyError:
        raise ValueError(f"Unknown version change: {change!r}") from None


def classify(
    distributed: str | None,
    current: str,
    change: VersionChange,
) -> UpdateStatus:
    """Build the UpdateStatus for an already computed change.

    A missing distributed version always yields FAILED and the change is
    ignored.
    """
    if distributed is None:
        return UpdateStatus(None, current, "FAILED")
    return UpdateStatus(distributed, current, change_to_status(change))


def resolve_scheme(distributed: str, current: str) -> VersionScheme:
    """Detect the scheme shared by both versions.

    Args:
        distributed: Latest version reported by the remote service.
        current: Version the caller already has.

    Returns:
        The scheme both strings detect to.

    Raises:
        SchemeUndetectableError: If either string matches no scheme.
        SchemeDisagreementError: If the strings detect to different schemes.

    """
    distributed_scheme = detect_scheme(distributed)
    current_scheme = detect_scheme(current)

    if distributed_scheme is None or current_scheme is None:
        raise SchemeUndetectableError(
            f"Cannot find version scheme for {distributed!r}/{current!r}"
        )
    if distributed_scheme != current_scheme:
        raise SchemeDisagreementError(
            f"Current and distributed version schemes must match: "
            f"{current!r} is {current_scheme.name}, "
            f"{distributed!r} is {distributed_scheme.name}"
        )
    return distributed_scheme


def build_status(
    distributed: str | None,
    current: str,
    scheme: VersionScheme | None = None,
) -> UpdateStatus:
    """Compare a distributed version against the current one.

    Args:
        distributed: Latest version from the remote service, or None if it
            could not be obtained.
        current: Version the caller already has.
        scheme: Scheme to compare under. Detected from both versions when
            omitted.

    Returns:
        UpdateStatus whose status is FAILED (no distributed version),
            UNAVAILABLE, AVAILABLE, MINOR_AVAILABLE or MAJOR_AVAILABLE.

    Raises:
        NullArgumentError: If current is None or empty.
        VersionSchemeError: If no common scheme can be resolved, or the
            versions do not match the explicit scheme.

    """
    if current is None or current == "":
        raise NullArgumentError("current version cannot be None or empty")

    if distributed is None:
        return UpdateStatus(None, current, "FAILED")

    if scheme is None:
        scheme = resolve_scheme(distributed, current)

    change = compare_versions(scheme, distributed, current)
    return classify(distributed, current, change)
