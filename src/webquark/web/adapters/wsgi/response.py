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
"""WSGI response handler — writes into the context's :class:`WsgiResponse`."""

from __future__ import annotations

from datetime import datetime

import structlog

from webquark.web.adapters.wsgi.context import WsgiHttpContext
from webquark.web.context import require_http_context
from webquark.web.cookies import build_set_cookie
from webquark.web.headers import quote_location
from webquark.web.ports.outbound import HttpContextAccessor

logger = structlog.get_logger("webquark.web")


class WsgiResponseHandler:
    """Collects status, headers and body until the response is returned to the server.

    After :meth:`end` the body is frozen and further writes are dropped.
    """

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        ctx = require_http_context(accessor, WsgiHttpContext, type(self).__name__)
        self._response = ctx.response

    def set_status_code(self, status_code: int) -> None:
        self._response.status_code = status_code

    def set_header(self, key: str, value: str) -> None:
        self._response.headers[key] = value

    def set_cookie(self, key: str, value: str, expires: datetime | None = None) -> None:
        self._response.headers.add_header("Set-Cookie", build_set_cookie(key, value, expires))

    def redirect(self, url: str) -> None:
        self._response.status_code = 302
        self._response.headers["Location"] = quote_location(url)

    async def write(self, content: str, content_type: str | None = "text/plain") -> None:
        if self._response.ended:
            logger.debug("response_write_after_end", platform="wsgi", length=len(content))
            return
        self.set_content_type(content_type or "text/plain")
        self._response.body += content.encode("utf-8")

    def clear(self) -> None:
        self._response.body = b""
        del self._response.headers["Content-Type"]

    def end(self) -> None:
        self._response.ended = True

    def set_content_type(self, content_type: str) -> None:
        self._response.headers["Content-Type"] = content_type
