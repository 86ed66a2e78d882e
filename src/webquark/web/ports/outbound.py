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
"""Outbound ports: what WebQuark needs from the hosting web runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from webquark.web.platform import WebQuark
    from webquark.web.ports.inbound import (
        HttpRequestInspector,
        HttpResponseHandler,
        RequestQueryHandler,
        RouteContextInspector,
        SessionHandler,
    )


@runtime_checkable
class HttpContextAccessor(Protocol):
    """Gives access to the host context of the request being handled.

    ``http_context`` is ``None`` outside of a request.
    """

    @property
    def http_context(self) -> Any | None: ...


@runtime_checkable
class HostContext(Protocol):
    """Behaviour shared by every host context object."""

    @property
    def raw_query_string(self) -> str:
        """The undecoded query string, without the leading ``?``."""
        ...


@runtime_checkable
class WebQuarkPlatform(Protocol):
    """Builds every facade for one host runtime.

    Selected once at composition time (see
    :func:`webquark.web.platform.create_platform`).
    """

    @property
    def name(self) -> str: ...

    def request_inspector(self, accessor: HttpContextAccessor | None) -> HttpRequestInspector: ...

    def response_handler(self, accessor: HttpContextAccessor | None) -> HttpResponseHandler: ...

    def query_handler(self, accessor: HttpContextAccessor | None) -> RequestQueryHandler: ...

    def session_handler(self, accessor: HttpContextAccessor | None) -> SessionHandler: ...

    def route_inspector(self, accessor: HttpContextAccessor | None) -> RouteContextInspector: ...

    def bind(self, accessor: HttpContextAccessor | None) -> WebQuark: ...
