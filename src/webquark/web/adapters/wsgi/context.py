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
"""WSGI host context: the PEP 3333 environ plus a response collected in memory."""

from __future__ import annotations

import io
from collections.abc import Callable, Iterable, MutableMapping
from http import HTTPStatus
from typing import Any
from wsgiref.headers import Headers

BODY_CACHE_KEY = "webquark.body"

StartResponse = Callable[..., Any]


class WsgiResponse:
    """Mutable response state that is sent when called as a WSGI application.

    Usage::

        def app(environ, start_response):
            ctx = WsgiHttpContext(environ)
            ...
            return ctx.response(environ, start_response)
    """

    def __init__(self) -> None:
        self.status_code = 200
        self.headers = Headers([])
        self.body = b""
        self.ended = False

    @property
    def status(self) -> str:
        """WSGI status line, e.g. ``"404 Not Found"``."""
        try:
            phrase = HTTPStatus(self.status_code).phrase
        except ValueError:
            phrase = "Unknown"
        return f"{self.status_code} {phrase}"

    @property
    def content_type(self) -> str | None:
        return self.headers.get("Content-Type")

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        self.headers["Content-Length"] = str(len(self.body))
        start_response(self.status, self.headers.items())
        if environ.get("REQUEST_METHOD") == "HEAD":
            return [b""]
        return [self.body]


class WsgiHttpContext:
    """Host context for a WSGI request.

    Args:
        environ: The PEP 3333 environ dict of the current request.
        response: The response being built; a fresh one when omitted.
    """

    __slots__ = ("_environ", "_response")

    def __init__(self, environ: dict[str, Any], response: WsgiResponse | None = None) -> None:
        self._environ = environ
        self._response = response if response is not None else WsgiResponse()

    @property
    def environ(self) -> dict[str, Any]:
        return self._environ

    @property
    def response(self) -> WsgiResponse:
        return self._response

    @property
    def raw_query_string(self) -> str:
        return self._environ.get("QUERY_STRING", "")

    def session(self, environ_key: str) -> MutableMapping[str, Any] | None:
        """Session mapping a WSGI session middleware stored under *environ_key*."""
        return self._environ.get(environ_key)

    def read_body(self) -> bytes:
        """Read ``wsgi.input`` once and keep it for later readers.

        After the first read the body is cached in the environ and
        ``wsgi.input`` is replaced with a fresh in-memory stream, so other
        components of the application can still read it.
        """
        cached = self._environ.get(BODY_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            length = int(self._environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0

        stream = self._environ.get("wsgi.input")
        body = stream.read(length) if stream is not None and length > 0 else b""
        self._environ[BODY_CACHE_KEY] = body
        self._environ["wsgi.input"] = io.BytesIO(body)
        return body
