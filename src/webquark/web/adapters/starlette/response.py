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
"""Starlette response handler — mutates the pending ``starlette.responses.Response``."""

from __future__ import annotations

from datetime import datetime

import structlog

from webquark.web.adapters.starlette.context import StarletteHttpContext
from webquark.web.context import require_http_context
from webquark.web.cookies import COOKIE_PATH, COOKIE_SAMESITE, to_utc
from webquark.web.headers import quote_location
from webquark.web.ports.outbound import HttpContextAccessor

logger = structlog.get_logger("webquark.web")


class StarletteResponseHandler:
    """Applies every change immediately to ``StarletteHttpContext.response``."""

    def __init__(self, accessor: HttpContextAccessor | None) -> None:
        ctx = require_http_context(accessor, StarletteHttpContext, type(self).__name__)
        self._response = ctx.response

    def set_status_code(self, status_code: int) -> None:
        self._response.status_code = status_code

    def set_header(self, key: str, value: str) -> None:
        self._response.headers[key] = value

    def set_cookie(self, key: str, value: str, expires: datetime | None = None) -> None:
        self._response.set_cookie(
            key,
            value,
            expires=to_utc(expires) if expires is not None else None,
            path=COOKIE_PATH,
            samesite=COOKIE_SAMESITE,
        )

    def redirect(self, url: str) -> None:
        self._response.status_code = 302
        self._response.headers["location"] = quote_location(url)

    async def write(self, content: str, content_type: str | None = "text/plain") -> None:
        """Append *content* to the body and set the content type."""
        self.set_content_type(content_type or "text/plain")
        self._set_body(bytes(self._response.body) + content.encode("utf-8"))

    def clear(self) -> None:
        """Drop the body and content type; status and other headers are kept."""
        self._set_body(b"")
        del self._response.headers["content-type"]
        self._response.media_type = None

    def end(self) -> None:
        # ASGI responses are complete once the endpoint returns.
        logger.debug("response_end_ignored", platform="starlette")

    def set_content_type(self, content_type: str) -> None:
        self._response.media_type = content_type
        self._response.headers["content-type"] = content_type

    def _set_body(self, body: bytes) -> None:
        self._response.body = body
        self._response.headers["content-length"] = str(len(body))
