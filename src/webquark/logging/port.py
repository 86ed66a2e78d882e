# Copyright 2026 Firefly Software Solutions Inc.
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
"""LoggingPort — how WebQuark applications configure logging and tag records per request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from webquark.core.config import Config

if TYPE_CHECKING:
    from webquark.web.ports.inbound import HttpRequestInspector, RouteContextInspector


@runtime_checkable
class LoggingPort(Protocol):
    """Logging backend for applications built on WebQuark.

    ``bind_request`` attaches the method, path and client address of the
    request being handled to every record until ``clear_request``.
    """

    def configure(self, config: Config) -> None: ...

    def get_logger(self, name: str) -> Any: ...

    def set_level(self, name: str, level: str) -> None: ...

    def bind_request(self, request: HttpRequestInspector, route: RouteContextInspector) -> None: ...

    def clear_request(self) -> None: ...
