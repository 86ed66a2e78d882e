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
"""Starlette request inspector."""

from __future__ import annotations

from webquark.web.adapters.starlette.context import StarletteHttpContext
from webquark.web.context import require_http_context
from webquark.web.ports.outbound import HttpContextAccessor
from webquark.web.request import BaseRequestInspector


class StarletteRequestInspector(BaseRequestInspector):
    """Reads the current ``starlette.requests.Request``.

    Header names are case-insensitive (Starlette normalizes them to lower
    case).  Repeated headers are joined with ``,``.  The body is cached by
    Starlette after the first read, so it can be read any number of times.
    """

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        ctx = require_http_context(accessor, StarletteHttpContext, type(self).__name__)
        self._request = ctx.request
        self._raw_query = ctx.raw_query_string

    def get_http_method(self) -> str:
        return self._request.method

    def get_header(self, key: str) -> str | None:
        values = self._request.headers.getlist(key)
        if not values:
            return None
        return ",".join(values)

    def has_header(self, key: str) -> bool:
        return key in self._request.headers

    def get_all_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        for name, value in self._request.headers.items():
            headers[name] = f"{headers[name]},{value}" if name in headers else value
        return headers

    def get_query_string(self, key: str, default: str | None = None) -> str | None:
        return self._request.query_params.get(key, default)

    def get_all_query_strings(self) -> dict[str, str]:
        return dict(self._request.query_params)

    def get_all_cookies(self) -> dict[str, str]:
        return dict(self._request.cookies)

    def _raw_query_string(self) -> str:
        return self._raw_query

    def _peer_address(self) -> str | None:
        client = self._request.client
        return client.host if client is not None else None

    async def _read_body(self) -> bytes:
        return await self._request.body()
