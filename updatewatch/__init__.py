"""
updatewatch - update checks for published resources

A Python library and CLI for finding out whether a newer version of a
published resource (a plugin, a library, any release with a version string)
is available, and how big the jump is.

updatewatch provides:
  - Version scheme detection (basic, semantic, calendar)
  - Field-by-field version comparison reporting the most significant change
  - Update classification (major, minor, available, unavailable, failed)
  - Resolvers for SpigotMC, Polymart, Songoda and generic JSON endpoints
  - Declarative YAML watch files with shared defaults
  - Background watchers that re-check on an interval

Quick Start
-----------
Compare two versions:

    $ updatewatch compare 2.0.0 1.4.2

Check every resource in a watch file once:

    $ updatewatch check watch.yaml

For full CLI documentation:

    $ updatewatch --help

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    One check cycle: fetch, compare, classify.
scheduler : module
    Background watchers with repeating checks.
config : package
    YAML watch file loading and default merging.
resolvers : package
    Registry of distributed-version resolvers.
versioning : package
    Version schemes, detection and comparison.
policy : package
    Mapping of version changes to update statuses.

Public API
----------
    from updatewatch.versioning import detect_scheme, compare_versions
    from updatewatch.policy import build_status
    from updatewatch.core import check_resource, check_config
    from updatewatch.scheduler import UpdateWatcher, WatchOptions

For more details, see the individual module docstrings.

Project Information
-------------------
Author: Roger Cibrian
License: Apache-2.0
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "updatewatch - update checks for published resources"

# Re-export commonly used functions for convenience
from updatewatch.config import load_watch_config
from updatewatch.core import check_config, check_resource
from updatewatch.policy import build_status
from updatewatch.results import UpdateStatus
from updatewatch.scheduler import UpdateWatcher, WatchOptions
from updatewatch.validation import validate_watch_config
from updatewatch.versioning import compare_versions, detect_scheme

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "detect_scheme",
    "compare_versions",
    "build_status",
    "UpdateStatus",
    "check_resource",
    "check_config",
    "UpdateWatcher",
    "WatchOptions",
    "load_watch_config",
    "validate_watch_config",
]
