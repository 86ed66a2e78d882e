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
"""WSGI route context inspector."""

from __future__ import annotations

from typing import Any
from wsgiref.util import request_uri

from webquark.web.adapters.wsgi.context import WsgiHttpContext
from webquark.web.context import require_http_context
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.route import BaseRouteInspector

ROUTING_ARGS_KEY = "wsgiorg.routing_args"


def _split_host(host: str) -> tuple[str, int | None]:
    if host.startswith("["):
        addr, _, rest = host[1:].partition("]")
        port = rest.removeprefix(":")
    else:
        addr, _, port = host.partition(":")
    return addr, int(port) if port.isdigit() else None


class WsgiRouteInspector(BaseRouteInspector):
    """Route values come from the ``wsgiorg.routing_args`` convention.

    Routers such as Selector or Routes store ``(positional, named)`` under
    that environ key; only the named values are exposed.
    """

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        ctx = require_http_context(accessor, WsgiHttpContext, type(self).__name__)
        self._environ = ctx.environ

    def get_all_route_values(self) -> dict[str, Any]:
        routing_args = self._environ.get(ROUTING_ARGS_KEY)
        if not routing_args:
            return {}
        _, named = routing_args
        return dict(named or {})

    def get_request_path(self) -> str:
        return self._environ.get("PATH_INFO", "")

    def get_base_path(self) -> str:
        return self._environ.get("SCRIPT_NAME", "")

    def get_request_scheme(self) -> str:
        return self._environ.get("wsgi.url_scheme", "http")

    def get_host(self) -> str:
        host = self._environ.get("HTTP_HOST")
        if host:
            return _split_host(host)[0]
        return self._environ.get("SERVER_NAME", "")

    def get_port(self) -> int | None:
        host = self._environ.get("HTTP_HOST")
        if host:
            return _split_host(host)[1]
        port = str(self._environ.get("SERVER_PORT", ""))
        return int(port) if port.isdigit() else None

    def get_full_url(self) -> str:
        return request_uri(self._environ, include_query=True)
