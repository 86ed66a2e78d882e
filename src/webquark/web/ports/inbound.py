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
"""Inbound ports: the platform-agnostic facades applications program against.

Every adapter (Starlette, WSGI) implements these protocols so that calling
code never imports a host framework type.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Protocol, TypeVar, runtime_checkable

from webquark.conversion.converter import ConversionResult

T = TypeVar("T")


@runtime_checkable
class HttpRequestInspector(Protocol):
    """Read-only view over the current HTTP request."""

    def get_http_method(self) -> str: ...

    def get_header(self, key: str) -> str | None:
        """Header value (case-insensitive lookup), or ``None`` if absent."""
        ...

    def has_header(self, key: str) -> bool: ...

    def get_all_headers(self) -> dict[str, str]: ...

    def get_query_string(self, key: str, default: str | None = None) -> str | None: ...

    def get_all_query_strings(self) -> dict[str, str]: ...

    def get_cookie(self, key: str) -> str | None: ...

    def has_cookie(self, key: str) -> bool: ...

    def get_all_cookies(self) -> dict[str, str]: ...

    async def get_body_as_string(self) -> str:
        """Request body decoded as UTF-8. Safe to call repeatedly."""
        ...

    async def get_body_as_json(self, target_type: Any = None, default: Any = None) -> Any:
        """Body parsed as JSON (validated into *target_type* when given), or *default*."""
        ...

    def get_user_agent(self) -> str | None: ...

    def get_client_ip_address(self) -> str | None: ...

    def is_ajax_request(self) -> bool: ...

    def get_content_type(self) -> str | None: ...


@runtime_checkable
class HttpResponseHandler(Protocol):
    """Write access to the pending HTTP response."""

    def set_status_code(self, status_code: int) -> None: ...

    def set_header(self, key: str, value: str) -> None: ...

    def set_cookie(self, key: str, value: str, expires: datetime | None = None) -> None: ...

    def redirect(self, url: str) -> None: ...

    async def write(self, content: str, content_type: str | None = "text/plain") -> None: ...

    def clear(self) -> None: ...

    def end(self) -> None: ...

    def set_content_type(self, content_type: str) -> None: ...


@runtime_checkable
class RequestQueryHandler(Protocol):
    """Mutable key/value view over a query string."""

    def get(self, key: str, default: str | None = None) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def has_key(self, key: str) -> bool: ...

    def remove(self, key: str) -> None: ...

    def get_as(self, key: str, target_type: type[T], default: T | None = None) -> T | None: ...

    def try_get_as(self, key: str, target_type: type[T]) -> ConversionResult[T]: ...

    def set_as(self, key: str, value: Any) -> None: ...

    def all_keys(self) -> list[str]: ...

    def to_dict(self) -> dict[str, str]: ...

    def to_query_string(self) -> str: ...

    def to_encoded_string(self) -> str: ...

    def is_empty(self) -> bool: ...

    def add_range(self, items: Mapping[str, str] | Iterable[tuple[str, str]]) -> None: ...


@runtime_checkable
class SessionHandler(Protocol):
    """String, JSON and encrypted access to host session state."""

    def set_string(self, key: str, value: str) -> None: ...

    def get_string(self, key: str) -> str | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str, target_type: type[T], default: T | None = None) -> T | None: ...

    def try_get(self, key: str, target_type: type[T]) -> tuple[T | None, bool]: ...

    def has_key(self, key: str) -> bool: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def set_encrypted(self, key: str, value: Any) -> None: ...

    def get_encrypted(self, key: str, target_type: type[T], default: T | None = None) -> T | None: ...


@runtime_checkable
class RouteContextInspector(Protocol):
    """Route values and URL parts of the current request."""

    def get_route_value(self, key: str) -> str | None: ...

    def get_all_route_values(self) -> dict[str, Any]: ...

    def get_request_path(self) -> str: ...

    def get_base_path(self) -> str: ...

    def get_request_scheme(self) -> str: ...

    def get_host(self) -> str: ...

    def get_port(self) -> int | None: ...

    def get_full_url(self) -> str: ...

    def get_controller_name(self) -> str | None: ...

    def get_action_name(self) -> str | None: ...

    def get_area_name(self) -> str | None: ...
