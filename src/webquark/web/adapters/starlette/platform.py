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
"""StarlettePlatform — WebQuarkPlatform implementation for Starlette (ASGI)."""

from __future__ import annotations

from webquark.config.properties.session import SessionProperties
from webquark.web.adapters.starlette.context import StarletteHttpContext
from webquark.web.adapters.starlette.request import StarletteRequestInspector
from webquark.web.adapters.starlette.response import StarletteResponseHandler
from webquark.web.adapters.starlette.route import StarletteRouteInspector
from webquark.web.context import require_http_context
from webquark.web.platform import WebQuark
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.query import QueryStringHandler
from webquark.web.session import SessionStateHandler


class StarlettePlatform:
    """Builds facades over ``StarletteHttpContext``.

    Sessions require Starlette's ``SessionMiddleware``.
    """

    def __init__(self, session_properties: SessionProperties | None = None) -> None:
        self._session_properties = session_properties or SessionProperties()

    @property
    def name(self) -> str:
        return "starlette"

    def request_inspector(self, accessor: HttpContextAccessor | None) -> StarletteRequestInspector:
        return StarletteRequestInspector(accessor)

    def response_handler(self, accessor: HttpContextAccessor | None) -> StarletteResponseHandler:
        return StarletteResponseHandler(accessor)

    def query_handler(self, accessor: HttpContextAccessor | None) -> QueryStringHandler:
        require_http_context(accessor, StarletteHttpContext, QueryStringHandler.__name__)
        return QueryStringHandler.from_accessor(accessor)

    def session_handler(self, accessor: HttpContextAccessor | None) -> SessionStateHandler:
        ctx = require_http_context(accessor, StarletteHttpContext, SessionStateHandler.__name__)
        return SessionStateHandler(ctx.session, encryption_key=self._session_properties.encryption_key)

    def route_inspector(self, accessor: HttpContextAccessor | None) -> StarletteRouteInspector:
        return StarletteRouteInspector(accessor)

    def bind(self, accessor: HttpContextAccessor | None) -> WebQuark:
        return WebQuark(self, accessor)
