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
"""BaseRequestInspector — behaviour shared by all request inspector adapters.

Adapters implement the host-specific primitives (headers, cookies, body,
peer address); everything derived from those lives here.
"""

from __future__ import annotations

import abc
import json
from typing import Any

import structlog
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from webquark.web.query import parse_query_string

logger = structlog.get_logger("webquark.web")

FORWARDED_FOR_HEADER = "X-Forwarded-For"
REQUESTED_WITH_HEADER = "X-Requested-With"
AJAX_MARKER = "XMLHttpRequest"


class BaseRequestInspector(abc.ABC):
    """Abstract base for :class:`~webquark.web.ports.inbound.HttpRequestInspector`."""

    @abc.abstractmethod
    def get_http_method(self) -> str: ...

    @abc.abstractmethod
    def get_header(self, key: str) -> str | None: ...

    @abc.abstractmethod
    def get_all_headers(self) -> dict[str, str]: ...

    @abc.abstractmethod
    def get_all_cookies(self) -> dict[str, str]: ...

    @abc.abstractmethod
    def _raw_query_string(self) -> str: ...

    @abc.abstractmethod
    def _peer_address(self) -> str | None:
        """Address of the directly connected client, if the host knows it."""
        ...

    @abc.abstractmethod
    async def _read_body(self) -> bytes:
        """Read the request body; must be repeatable."""
        ...

    def has_header(self, key: str) -> bool:
        return self.get_header(key) is not None

    def get_query_string(self, key: str, default: str | None = None) -> str | None:
        return self.get_all_query_strings().get(key, default)

    def get_all_query_strings(self) -> dict[str, str]:
        return parse_query_string(self._raw_query_string())

    def get_cookie(self, key: str) -> str | None:
        return self.get_all_cookies().get(key)

    def has_cookie(self, key: str) -> bool:
        return key in self.get_all_cookies()

    async def get_body_as_string(self) -> str:
        body = await self._read_body()
        return body.decode("utf-8", errors="replace")

    async def get_body_as_json(self, target_type: Any = None, default: Any = None) -> Any:
        """Parse the body as JSON.

        With *target_type*, the document is validated through a pydantic
        ``TypeAdapter``.  An empty body or a parse/validation failure yields
        *default*.
        """
        text = await self.get_body_as_string()
        if not text.strip():
            return default
        try:
            if target_type is None:
                return json.loads(text)
            return TypeAdapter(target_type).validate_json(text)
        except (json.JSONDecodeError, ValidationError, PydanticSchemaGenerationError) as exc:
            logger.debug("request_body_unreadable", target=repr(target_type), error=type(exc).__name__)
            return default

    def get_user_agent(self) -> str | None:
        return self.get_header("User-Agent")

    def get_client_ip_address(self) -> str | None:
        """Peer address, else the first ``X-Forwarded-For`` entry."""
        peer = self._peer_address()
        if peer:
            return peer

        forwarded = self.get_header(FORWARDED_FOR_HEADER)
        if not forwarded:
            return None
        return forwarded.split(",")[0].strip() or None

    def is_ajax_request(self) -> bool:
        value = self.get_header(REQUESTED_WITH_HEADER)
        return value is not None and value.lower() == AJAX_MARKER.lower()

    def get_content_type(self) -> str | None:
        return self.get_header("Content-Type")
