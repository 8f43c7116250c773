"""
Version scheme detection and comparison for updatewatch.

This package decides whether a distributed version is ahead of a current
version and by how much. It performs no network or file I/O and keeps no
state, so every function is safe to call from any thread.

Modules
-------
schemes : module
    Registry of version schemes (BASIC, SEMANTIC, CALENDAR) and detection.
compare : module
    Field-by-field comparison producing a VersionChange tag.

Public API
----------
VersionScheme : dataclass
    A named version format with ordered significance fields.
BASIC, SEMANTIC, CALENDAR : VersionScheme
    The registered schemes.
SCHEMES : tuple
    All schemes in detection order.
VersionChange : Literal type
    "NONE", "MAJOR", "MINOR", "PATCH", "PRE_RELEASE", "METADATA",
    "YEAR", "MONTH" or "DAY".
detect_scheme : function
    Find the first scheme a version string matches.
get_scheme : function
    Look up a scheme by name.
compare_versions : function
    Report the most significant field where the distributed version is ahead.

Detection Order
---------------
Schemes are tried in declaration order: BASIC, then SEMANTIC, then CALENDAR.
The first match wins.

    >>> from updatewatch.versioning import detect_scheme
    >>> detect_scheme("1.2").name
    'BASIC'
    >>> detect_scheme("v1.2.3-rc.1").name
    'SEMANTIC'
    >>> detect_scheme("2024-05-01").name
    'CALENDAR'
    >>> detect_scheme("build 42") is None
    True

Comparison
----------
    >>> from updatewatch.versioning import SEMANTIC, CALENDAR, compare_versions
    >>> compare_versions(SEMANTIC, "2.0.0", "1.9.9")
    'MAJOR'
    >>> compare_versions(CALENDAR, "2024-01-01", "2023-12-31")
    'YEAR'

Notes
-----
- A distributed version that is older than the current one yields "NONE",
  the same as an equal one. There is no downgrade tag.
- Prerelease and build metadata are compared textually: any difference is
  reported, in either direction.
"""

from .compare import VERSION_CHANGES, VersionChange, compare_versions
from .schemes import (
    BASIC,
    CALENDAR,
    SCHEMES,
    SEMANTIC,
    VersionScheme,
    detect_scheme,
    get_scheme,
)

__all__ = [
    "BASIC",
    "CALENDAR",
    "SCHEMES",
    "SEMANTIC",
    "VERSION_CHANGES",
    "VersionChange",
    "VersionScheme",
    "compare_versions",
    "detect_scheme",
    "get_scheme",
]
