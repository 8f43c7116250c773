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

"""Update status policy for updatewatch.

Modules:

updates : module
    Classification of version comparisons into update statuses.

Public API:

build_status : function
    Detect a scheme, compare two versions and classify the result.
classify : function
    Build an UpdateStatus from an already computed VersionChange.
change_to_status : function
    Map a VersionChange to a Status.
resolve_scheme : function
    Detect the scheme shared by two versions.

Example:
    from updatewatch.policy import build_status

    status = build_status(distributed="1.2.4", current="1.2.3")
    print(status.status)  # AVAILABLE

"""

from .updates import build_status, change_to_status, classify, resolve_scheme

__all__ = ["build_status", "change_to_status", "classify", "resolve_scheme"]
