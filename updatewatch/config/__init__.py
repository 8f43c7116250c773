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

"""Watch file loading for updatewatch.

Public API:

- load_watch_config: Load a watch file and merge defaults into each resource

Example:
    Basic usage:

        from pathlib import Path
        from updatewatch.config import load_watch_config

        config = load_watch_config(Path("watch.yaml"))
        for resource in config["resources"]:
            print(resource["id"], resource["current_version"])

"""

from .loader import BUILTIN_DEFAULTS, load_watch_config

__all__ = ["BUILTIN_DEFAULTS", "load_watch_config"]
