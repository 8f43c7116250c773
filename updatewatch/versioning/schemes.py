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

"""Version scheme registry and detection for updatewatch.

This module is format-agnostic: it does NOT fetch or read anything.
It only recognizes version strings and splits them into named fields.

Each scheme owns a regular expression with named groups and the ordered list
of fields that matter for comparison (most significant first). The registry
order in SCHEMES is also the detection priority:

1. BASIC     MAJOR.MINOR[-prerelease]
2. SEMANTIC  MAJOR.MINOR.PATCH[-prerelease][+buildmetadata]
3. CALENDAR  YYYY-MM-DD

All three tolerate a leading "v", which is never captured as a field.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from updatewatch.exceptions import ConfigError, VersionSchemeMismatchError
from updatewatch.versioning.compare import VersionChange

# Shared semver.org building blocks
_NUM = r"0|[1-9][0-9]*"
_PRE_IDENT = r"(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
_PRERELEASE = rf"(?:-(?P<prerelease>{_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
_BUILD = r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?"


@dataclass(frozen=True)
class VersionScheme:
    """A named version format with ordered significance fields.

    Attributes:
        name: Scheme identifier ("BASIC", "SEMANTIC" or "CALENDAR").
        description: Human readable summary of the format.
        pattern: Compiled regex; named groups hold the fields.
        fields: (group name, change tag) pairs, most significant first.

    """

    name: str
    description: str
    pattern: re.Pattern[str]
    fields: tuple[tuple[str, VersionChange], ...]

    def matches(self, version: str) -> bool:
        """Return True if the whole string conforms to this scheme."""
        return self.pattern.fullmatch(version) is not None

    def extract(self, version: str) -> dict[str, str | None]:
        """Split a version string into this scheme's named fields.

        Optional fields that are absent come back as None.

        Raises:
            VersionSchemeMismatchError: If the string does not match.
        """
        m = self.pattern.fullmatch(version)
        if m is None:
            raise VersionSchemeMismatchError(
                f"Version {version!r} does not match the {self.name} scheme "
                f"({self.description})"
            )
        return {name: m.group(name) for name, _ in self.fields}

    def __str__(self) -> str:
        return self.name


BASIC = VersionScheme(
    name="BASIC",
    description="MAJOR.MINOR",
    pattern=re.compile(rf"v?(?P<major>{_NUM})\.(?P<minor>{_NUM}){_PRERELEASE}"),
    fields=(
        ("major", "MAJOR"),
        ("minor", "MINOR"),
        ("prerelease", "PRE_RELEASE"),
    ),
)

SEMANTIC = VersionScheme(
    name="SEMANTIC",
    description="MAJOR.MINOR.PATCH - https://semver.org/",
    pattern=re.compile(
        rf"v?(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
        rf"{_PRERELEASE}{_BUILD}"
    ),
    fields=(
        ("major", "MAJOR"),
        ("minor", "MINOR"),
        ("patch", "PATCH"),
        ("prerelease", "PRE_RELEASE"),
        ("buildmetadata", "METADATA"),
    ),
)

CALENDAR = VersionScheme(
    name="CALENDAR",
    description="YYYY-MM-DD - https://calver.org",
    pattern=re.compile(r"v?(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"),
    fields=(
        ("year", "YEAR"),
        ("month", "MONTH"),
        ("day", "DAY"),
    ),
)

# Declaration order is detection priority.
SCHEMES: tuple[VersionScheme, ...] = (BASIC, SEMANTIC, CALENDAR)


def detect_scheme(version: str) -> VersionScheme | None:
    """Return the first registered scheme that matches, or None.

    No match is not an error; callers decide what an unrecognized
    version means for them.
    """
    for scheme in SCHEMES:
        if scheme.matches(version):
            return scheme
    return None


def get_scheme(name: str) -> VersionScheme:
    """Look up a registered scheme by name (case-insensitive).

    Args:
        name: Scheme name as written in configuration, e.g. "semantic".

    Returns:
        The matching VersionScheme.

    Raises:
        ConfigError: If no scheme has that name. The message lists the
            available schemes.

    """
    wanted = name.strip().upper()
    for scheme in SCHEMES:
        if scheme.name == wanted:
            return scheme
    available = ", ".join(s.name.lower() for s in SCHEMES)
    raise ConfigError(f"Unknown version scheme: {name!r}. Available: {available}")
