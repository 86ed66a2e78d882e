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
"""WSGI request inspector."""

from __future__ import annotations

from starlette.requests import cookie_parser

from webquark.web.adapters.wsgi.context import WsgiHttpContext
from webquark.web.context import require_http_context
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.request import BaseRequestInspector

# Headers PEP 3333 stores without the HTTP_ prefix.
_UNPREFIXED = {"CONTENT_TYPE", "CONTENT_LENGTH"}


def _environ_key(header: str) -> str:
    name = header.upper().replace("-", "_")
    return name if name in _UNPREFIXED else f"HTTP_{name}"


def _header_name(environ_key: str) -> str:
    name = environ_key.removeprefix("HTTP_")
    return "-".join(part.capitalize() for part in name.split("_"))


class WsgiRequestInspector(BaseRequestInspector):
    """Reads request data from the WSGI environ.

    Header lookups are case-insensitive because PEP 3333 upper-cases every
    header name.  Reported names are Title-Cased (``Content-Type``).
    """

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        self._ctx = require_http_context(accessor, WsgiHttpContext, type(self).__name__)
        self._environ = self._ctx.environ

    def get_http_method(self) -> str:
        return str(self._environ.get("REQUEST_METHOD", "GET"))

    def get_header(self, key: str) -> str | None:
        environ_key = _environ_key(key)
        value = self._environ.get(environ_key)
        if value is None or (environ_key in _UNPREFIXED and value == ""):
            return None
        return str(value)

    def get_all_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        for key, value in self._environ.items():
            if key.startswith("HTTP_") or (key in _UNPREFIXED and value):
                headers[_header_name(key)] = str(value)
        return headers

    def get_all_cookies(self) -> dict[str, str]:
        return cookie_parser(self._environ.get("HTTP_COOKIE", ""))

    def _raw_query_string(self) -> str:
        return self._ctx.raw_query_string

    def _peer_address(self) -> str | None:
        return self._environ.get("REMOTE_ADDR") or None

    async def _read_body(self) -> bytes:
        return self._ctx.read_body()
