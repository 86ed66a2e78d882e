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
"""WsgiPlatform — WebQuarkPlatform implementation for PEP 3333 applications."""

from __future__ import annotations

from webquark.config.properties.session import SessionProperties
from webquark.web.adapters.wsgi.context import WsgiHttpContext
from webquark.web.adapters.wsgi.request import WsgiRequestInspector
from webquark.web.adapters.wsgi.response import WsgiResponseHandler
from webquark.web.adapters.wsgi.route import WsgiRouteInspector
from webquark.web.context import require_http_context
from webquark.web.platform import WebQuark
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.query import QueryStringHandler
from webquark.web.session import SessionStateHandler


class WsgiPlatform:
    """Builds facades over ``WsgiHttpContext``.

    The session is whatever mapping a session middleware placed in the
    environ under ``SessionProperties.environ_key`` (Beaker-style).
    """

    def __init__(self, session_properties: SessionProperties | None = None) -> None:
        self._session_properties = session_properties or SessionProperties()

    @property
    def name(self) -> str:
        return "wsgi"

    def request_inspector(self, accessor: HttpContextAccessor | None) -> WsgiRequestInspector:
        return WsgiRequestInspector(accessor)

    def response_handler(self, accessor: HttpContextAccessor | None) -> WsgiResponseHandler:
        return WsgiResponseHandler(accessor)

    def query_handler(self, accessor: HttpContextAccessor | None) -> QueryStringHandler:
        require_http_context(accessor, WsgiHttpContext, QueryStringHandler.__name__)
        return QueryStringHandler.from_accessor(accessor)

    def session_handler(self, accessor: HttpContextAccessor | None) -> SessionStateHandler:
        ctx = require_http_context(accessor, WsgiHttpContext, SessionStateHandler.__name__)
        props = self._session_properties
        return SessionStateHandler(ctx.session(props.environ_key), encryption_key=props.encryption_key)

    def route_inspector(self, accessor: HttpContextAccessor | None) -> WsgiRouteInspector:
        return WsgiRouteInspector(accessor)

    def bind(self, accessor: HttpContextAccessor | None) -> WebQuark:
        return WebQuark(self, accessor)
