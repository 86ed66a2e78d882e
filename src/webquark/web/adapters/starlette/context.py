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
"""StarletteHttpContext — host context for ASGI applications built on Starlette."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from starlette.requests import Request
from starlette.responses import Response


class StarletteHttpContext:
    """Pairs a Starlette ``Request`` with the ``Response`` the endpoint will return.

    Starlette has no response object until the endpoint builds one, so the
    context creates an empty ``Response`` up front.  Response handlers mutate
    it and the endpoint returns ``ctx.response``::

        async def endpoint(request: Request) -> Response:
            ctx = StarletteHttpContext(request)
            quark = StarlettePlatform().bind(ContextAccessor(ctx))
            quark.response.set_status_code(201)
            return ctx.response
    """

    __slots__ = ("_request", "_response")

    def __init__(self, request: Request, response: Response | None = None) -> None:
        self._request = request
        self._response = response if response is not None else Response()

    @property
    def request(self) -> Request:
        return self._request

    @property
    def response(self) -> Response:
        return self._response

    @property
    def raw_query_string(self) -> str:
        return self._request.scope.get("query_string", b"").decode("latin-1")

    @property
    def session(self) -> MutableMapping[str, Any] | None:
        """``request.session`` when ``SessionMiddleware`` is installed, else ``None``."""
        if "session" not in self._request.scope:
            return None
        return self._request.session
