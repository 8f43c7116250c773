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

"""Command-line interface for updatewatch.

Commands:

    detect: Show which version scheme a version string follows
    compare: Compare a distributed version against a current version
    validate: Validate a watch file (no network calls)
    check: Check every resource in a watch file once
    watch: Keep checking the resources in a watch file until interrupted

Example:
    Compare two versions:
        ```bash
        $ updatewatch compare 1.3.0 1.2.9
        ```

    Check a watch file with verbose output:
        ```bash
        $ updatewatch check watch.yaml --verbose
        ```

Exit Codes:

- 0: Success (an available update is still a success)
- 1: Error (configuration, network, or version scheme failure)

Note:
    The CLI uses argparse for command parsing. Each command has its own
    handler function (cmd_<command>). Verbose mode shows full tracebacks on
    errors for debugging.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import time
import traceback

from updatewatch.config import load_watch_config
from updatewatch.core import check_config
from updatewatch.exceptions import ConfigError, UpdateWatchError
from updatewatch.logging import get_logger, set_global_logger
from updatewatch.policy.updates import classify, resolve_scheme
from updatewatch.results import UpdateStatus
from updatewatch.scheduler import UpdateWatcher
from updatewatch.validation import validate_watch_config
from updatewatch.versioning import SCHEMES, compare_versions, detect_scheme, get_scheme


def _print_error(err: Exception, args: argparse.Namespace) -> None:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        traceback.print_exc()


def _describe(status: UpdateStatus) -> str:
    if status.status == "FAILED":
        return "check failed (distributed version unavailable)"
    if status.status == "UNAVAILABLE":
        return "up to date"
    return f"{status.status} ({status.current_version} -> {status.distributed_version})"


def cmd_detect(args: argparse.Namespace) -> int:
    """Handler for 'updatewatch detect' command."""
    scheme = detect_scheme(args.version)
    if scheme is None:
        print(f"{args.version!r} matches no known version scheme")
        print(f"Known schemes: {', '.join(s.name for s in SCHEMES)}")
        return 1

    print(f"Version: {args.version}")
    print(f"Scheme:  {scheme.name} ({scheme.description})")
    for field, value in scheme.extract(args.version).items():
        if value is not None:
            print(f"  {field:<14} {value}")
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'updatewatch compare' command.

    Prints the change tag and resulting status for a distributed/current
    pair, using --scheme if given and detection otherwise.
    """
    try:
        if args.scheme:
            scheme = get_scheme(args.scheme)
        else:
            scheme = resolve_scheme(args.distributed, args.current)
        change = compare_versions(scheme, args.distributed, args.current)
    except UpdateWatchError as err:
        _print_error(err, args)
        return 1
    status = classify(args.distributed, args.current, change)

    print(f"Scheme:      {scheme.name}")
    print(f"Distributed: {status.distributed_version}")
    print(f"Current:     {status.current_version}")
    print(f"Change:      {change}")
    print(f"Status:      {status.status}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'updatewatch validate' command.

    Returns:
        Exit code (0 for a valid watch file, 1 for invalid).
    """
    set_global_logger(get_logger(verbose=args.verbose))

    config_path = Path(args.config).resolve()
    print(f"Validating watch file: {config_path}")
    print()

    result = validate_watch_config(config_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Watch file:  {result.config_path}")
    print(f"Status:      {result.status.upper()}")
    print(f"Resources:   {result.resource_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Watch file is valid!")
        return 0
    print()
    print(f"[FAILED] Watch file validation failed with {len(result.errors)} error(s).")
    return 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'updatewatch check' command.

    Returns:
        Exit code (0 when every resource was compared, 1 otherwise).
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    config_path = Path(args.config).resolve()
    if not config_path.exists():
        print(f"Error: Watch file not found: {config_path}")
        return 1

    try:
        results = check_config(config_path)
    except UpdateWatchError as err:
        _print_error(err, args)
        return 1

    print()
    print("=" * 70)
    print("CHECK RESULTS")
    print("=" * 70)
    failures = 0
    for result in results:
        if result.update is None:
            failures += 1
            print(f"{result.resource_id:<24} [ERROR] {result.error}")
            continue
        if result.update.status == "FAILED":
            failures += 1
        print(f"{result.resource_id:<24} {_describe(result.update)}")
    print("=" * 70)

    available = sum(1 for r in results if r.update is not None and r.update.is_available)
    print(f"{available} update(s) available, {failures} failure(s)")
    return 1 if failures else 0


def cmd_watch(args: argparse.Namespace) -> int:
    """Handler for 'updatewatch watch' command.

    Starts one UpdateWatcher per resource and blocks until interrupted.
    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    try:
        config = load_watch_config(Path(args.config))
    except ConfigError as err:
        _print_error(err, args)
        return 1

    def report(resource_id: str):
        def _on_complete(status: UpdateStatus) -> None:
            print(f"[{time.strftime('%H:%M:%S')}] {resource_id}: {_describe(status)}")

        def _on_error(err: Exception) -> None:
            print(f"[{time.strftime('%H:%M:%S')}] {resource_id}: Error: {err}")

        return _on_complete, _on_error

    watchers = []
    for resource in config["resources"]:
        on_complete, on_error = report(resource["id"])
        watchers.append(
            UpdateWatcher(resource, on_complete=on_complete, on_error=on_error)
        )

    print(f"Watching {len(watchers)} resource(s). Press Ctrl+C to stop.")
    for watcher in watchers:
        watcher.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print()
        print("Stopping watchers...")
    finally:
        for watcher in watchers:
            watcher.stop()
    return 0


def _package_version() -> str:
    try:
        return version("updatewatch")
    except PackageNotFoundError:
        from updatewatch import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the updatewatch CLI."""
    parser = argparse.ArgumentParser(
        prog="updatewatch",
        description="updatewatch - check published resources for newer versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"updatewatch {_package_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    parser_detect = subparsers.add_parser(
        "detect",
        help="Show the version scheme of a version string",
    )
    parser_detect.add_argument("version", help="Version string, e.g. 1.2.3")
    parser_detect.set_defaults(func=cmd_detect)

    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare a distributed version against a current version",
    )
    parser_compare.add_argument("distributed", help="Latest distributed version")
    parser_compare.add_argument("current", help="Current version")
    parser_compare.add_argument(
        "--scheme",
        default=None,
        help="Version scheme to use (basic, semantic, calendar; default: detect)",
    )
    parser_compare.add_argument(
        "-v", "--verbose", action="store_true", help="Show tracebacks on errors"
    )
    parser_compare.set_defaults(func=cmd_compare)

    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a watch file (no network calls)",
    )
    parser_validate.add_argument("config", help="Path to the watch YAML file")
    parser_validate.add_argument(
        "-v", "--verbose", action="store_true", help="Show validation progress"
    )
    parser_validate.set_defaults(func=cmd_validate)

    for name, func, help_text in (
        ("check", cmd_check, "Check every resource in a watch file once"),
        ("watch", cmd_watch, "Keep checking resources until interrupted"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("config", help="Path to the watch YAML file")
        sub.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show progress and high-level status updates",
        )
        sub.add_argument(
            "-d",
            "--debug",
            action="store_true",
            help="Show detailed debugging output (implies --verbose)",
        )
        sub.set_defaults(func=func)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the updatewatch CLI.

    This function is registered as the 'updatewatch' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
