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

"""Background update checks for updatewatch.

UpdateWatcher runs check_resource() once right away on a background thread
and then, when repeating is enabled, again every interval seconds until it
is stopped. Each completed check replaces last_status and is handed to the
on_complete callback; exceptions go to on_error.

Concurrency:
    A manual check_now() may overlap a scheduled one. Both run to completion
    and whichever finishes last sets last_status. Callbacks run on the thread
    that performed the check.

Example:
    Watch a SpigotMC plugin:
        ```python
        from updatewatch.scheduler import UpdateWatcher, WatchOptions

        def notify(status):
            if status.is_available:
                print(f"Update available: {status.distributed_version}")

        watcher = UpdateWatcher(
            {
                "id": "my-plugin",
                "current_version": "1.2.3",
                "resolver": {"name": "spigot", "resource_id": 12345},
            },
            WatchOptions(interval=3600),
            on_complete=notify,
        )
        watcher.start()
        ...
        watcher.stop()
        ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import threading
import time
from typing import Any

from updatewatch.config.loader import BUILTIN_DEFAULTS
from updatewatch.core import check_resource
from updatewatch.logging import get_global_logger
from updatewatch.resolvers import VersionResolver
from updatewatch.results import UpdateStatus


@dataclass(frozen=True)
class WatchOptions:
    """Scheduling options for an UpdateWatcher.

    Attributes:
        repeating: Keep checking after the first check. Default True.
        interval: Seconds between repeated checks. Default 2 hours.
        timeout: Seconds allowed for each remote request. Default 10.
    """

    repeating: bool = BUILTIN_DEFAULTS["repeating"]
    interval: float = float(BUILTIN_DEFAULTS["interval"])
    timeout: float = float(BUILTIN_DEFAULTS["timeout"])

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval!r}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout!r}")

    @classmethod
    def from_resource(cls, resource: dict[str, Any]) -> WatchOptions:
        """Build options from a resource entry merged with defaults."""
        return cls(
            repeating=bool(resource.get("repeating", BUILTIN_DEFAULTS["repeating"])),
            interval=float(resource.get("interval", BUILTIN_DEFAULTS["interval"])),
            timeout=float(resource.get("timeout", BUILTIN_DEFAULTS["timeout"])),
        )


class UpdateWatcher:
    """Periodically checks one resource for updates."""

    def __init__(
        self,
        resource: dict[str, Any],
        options: WatchOptions | None = None,
        *,
        on_complete: Callable[[UpdateStatus], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        resolver: VersionResolver | None = None,
    ) -> None:
        """Create a watcher. Nothing runs until start() or check_now().

        Args:
            resource: Resource entry (see updatewatch.core.check_resource).
            options: Scheduling options. Read from the resource when omitted.
            on_complete: Called with the UpdateStatus after every check.
            on_error: Called with the exception when a check raises. Without
                a handler, errors are reported through the global logger.
            resolver: Resolver instance overriding the configured one.

        """
        if options is None:
            options = WatchOptions.from_resource(resource)
        self.options = options
        self.resource = {**resource, "timeout": options.timeout}
        self.resource_id = str(resource.get("id", "unknown-id"))

        self._on_complete = on_complete
        self._on_error = on_error
        self._resolver = resolver

        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._running = False

        self._last_status: UpdateStatus | None = None
        self._last_check = 0.0

    @property
    def last_status(self) -> UpdateStatus | None:
        """Status from the most recently completed check, or None."""
        return self._last_status

    @property
    def last_check(self) -> float:
        """Epoch seconds of the most recently completed check (0.0 if none)."""
        return self._last_check

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Run a check now on a background thread and schedule repeats.

        Raises:
            RuntimeError: If the watcher is already running.
        """
        with self._lock:
            if self._running:
                raise RuntimeError(f"Watcher for {self.resource_id} already started")
            self._running = True

        logger = get_global_logger()
        logger.verbose(
            "SCHEDULER",
            f"Starting watcher for {self.resource_id} "
            f"(repeating={self.options.repeating}, interval={self.options.interval}s)",
        )

        thread = threading.Thread(
            target=self.check_now, name=f"updatewatch-{self.resource_id}", daemon=True
        )
        thread.start()

        if self.options.repeating:
            self._schedule_next()

    def stop(self) -> None:
        """Cancel future checks. A check already in flight still completes."""
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        get_global_logger().verbose(
            "SCHEDULER", f"Stopped watcher for {self.resource_id}"
        )

    def check_now(self) -> UpdateStatus | None:
        """Run one check on the calling thread.

        Returns:
            The new UpdateStatus, or None if the check raised (the error is
                passed to on_error or logged).
        """
        try:
            status = check_resource(self.resource, resolver=self._resolver)
        except Exception as err:
            self._handle_error(err)
            return None

        self._last_status = status
        self._last_check = time.time()

        if self._on_complete is not None:
            try:
                self._on_complete(status)
            except Exception as err:
                self._handle_error(err)
        return status

    def _handle_error(self, err: Exception) -> None:
        if self._on_error is not None:
            self._on_error(err)
            return
        get_global_logger().warning(
            "SCHEDULER", f"Update check for {self.resource_id} failed: {err}"
        )

    def _schedule_next(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._timer = threading.Timer(self.options.interval, self._run_scheduled)
            self._timer.name = f"updatewatch-timer-{self.resource_id}"
            self._timer.daemon = True
            self._timer.start()

    def _run_scheduled(self) -> None:
        if not self._running:
            return
        self.check_now()
        self._schedule_next()
