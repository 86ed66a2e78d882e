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
"""Starlette route context inspector."""

from __future__ import annotations

import inspect
from typing import Any

from webquark.web.adapters.starlette.context import StarletteHttpContext
from webquark.web.context import require_http_context
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.route import BaseRouteInspector


class StarletteRouteInspector(BaseRouteInspector):
    """Route values come from ``request.path_params``.

    When the route template has no ``controller``/``action`` parameter, the
    names are derived from the matched endpoint: a bound method reports its
    class and method, an ``HTTPEndpoint`` class reports itself and the
    lower-cased HTTP method, a plain function reports only its own name.
    """

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        ctx = require_http_context(accessor, StarletteHttpContext, type(self).__name__)
        self._request = ctx.request

    def get_all_route_values(self) -> dict[str, Any]:
        return dict(self._request.path_params)

    def get_request_path(self) -> str:
        path: str = self._request.scope.get("path", "")
        root_path = self.get_base_path()
        if root_path and path.startswith(root_path):
            path = path[len(root_path) :]
        return path

    def get_base_path(self) -> str:
        return self._request.scope.get("root_path", "")

    def get_request_scheme(self) -> str:
        return self._request.url.scheme

    def get_host(self) -> str:
        return self._request.url.hostname or ""

    def get_port(self) -> int | None:
        return self._request.url.port

    def get_full_url(self) -> str:
        return str(self._request.url)

    def get_controller_name(self) -> str | None:
        name = super().get_controller_name()
        if name is not None:
            return name
        endpoint = self._endpoint()
        if inspect.isclass(endpoint):
            return endpoint.__name__
        owner = getattr(endpoint, "__self__", None)
        return type(owner).__name__ if owner is not None else None

    def get_action_name(self) -> str | None:
        name = super().get_action_name()
        if name is not None:
            return name
        endpoint = self._endpoint()
        if endpoint is None:
            return None
        if inspect.isclass(endpoint):
            return self._request.method.lower()
        return getattr(endpoint, "__name__", None)

    def _endpoint(self) -> Any:
        return self._request.scope.get("endpoint")
