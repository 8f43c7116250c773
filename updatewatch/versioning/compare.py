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

"""Field-by-field version comparison for updatewatch.

Given a scheme and two version strings, report the most significant field at
which the distributed version is ahead of the current one. The result is a
VersionChange tag, never a -1/0/1 ordering: "older" and "equal" both come
back as "NONE".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, get_args

from updatewatch.exceptions import NullArgumentError

if TYPE_CHECKING:
    from updatewatch.versioning.schemes import VersionScheme

VersionChange = Literal[
    "NONE",
    "MAJOR",
    "MINOR",
    "PATCH",
    "PRE_RELEASE",
    "METADATA",
    "YEAR",
    "MONTH",
    "DAY",
]

VERSION_CHANGES: tuple[VersionChange, ...] = get_args(VersionChange)

# Outcome of comparing a single field
_SAME = 0
_AHEAD = 1
_BEHIND = -1


def _is_empty(value: str | None) -> bool:
    return value is None or value == ""


def _compare_field(current: str | None, distributed: str | None) -> int:
    """Compare one captured field of the current and distributed versions.

    - both absent: same
    - exactly one absent: ahead (a difference either way)
    - both integers: numeric ordering
    - otherwise: any textual difference counts as ahead
    """
    if _is_empty(current) and _is_empty(distributed):
        return _SAME
    if _is_empty(current) or _is_empty(distributed):
        return _AHEAD

    try:
        current_num = int(current)
        distributed_num = int(distributed)
    except ValueError:
        return _SAME if current == distributed else _AHEAD

    if distributed_num > current_num:
        return _AHEAD
    if distributed_num < current_num:
        return _BEHIND
    return _SAME


def compare_versions(
    scheme: VersionScheme,
    distributed: str,
    current: str,
) -> VersionChange:
    """Classify how far the distributed version is ahead of the current one.

    Fields are walked in the scheme's significance order and the first field
    where the distributed version is ahead decides the result. A numeric
    field where the distributed version is behind ends the walk with "NONE".

    Args:
        scheme: Scheme both strings are asserted to follow.
        distributed: Latest version reported by the remote service.
        current: Version the caller already has.

    Returns:
        The change tag of the most significant differing field, or "NONE".

    Raises:
        NullArgumentError: If any argument is None or an empty string.
        VersionSchemeMismatchError: If either string does not match scheme.

    Example:
        >>> from updatewatch.versioning import SEMANTIC, compare_versions
        >>> compare_versions(SEMANTIC, "1.3.0", "1.2.9")
        'MINOR'
        >>> compare_versions(SEMANTIC, "1.2.3", "1.3.0")
        'NONE'

    """
    for name, value in (
        ("version scheme", scheme),
        ("distributed version", distributed),
        ("current version", current),
    ):
        if value is None or value == "":
            raise NullArgumentError(f"{name} cannot be None or empty")

    if distributed == current:
        return "NONE"

    distributed_fields = scheme.extract(distributed)
    current_fields = scheme.extract(current)

    for field, change in scheme.fields:
        outcome = _compare_field(current_fields[field], distributed_fields[field])
        if outcome == _AHEAD:
            return change
        if outcome == _BEHIND:
            return "NONE"

    return "NONE"
