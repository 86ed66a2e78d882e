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
"""StructlogAdapter — structlog-backed LoggingPort for WebQuark applications."""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

import structlog

from webquark.config.properties.logging import LoggingProperties
from webquark.core.config import Config

if TYPE_CHECKING:
    from webquark.web.ports.inbound import HttpRequestInspector, RouteContextInspector

REDACTED = "***"

# Matched case-insensitively against event keys.
SENSITIVE_KEYS = frozenset({"authorization", "cookie", "set-cookie", "set_cookie", "encryption_key", "password"})

REQUEST_KEYS = ("http_method", "path", "client_ip")


def redact_sensitive(_logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Processor that masks credentials and cookies logged by key name."""
    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
    return event_dict


class StructlogAdapter:
    """Configures structlog from ``webquark.logging.*``.

    Records pass through context merging, redaction and an ISO timestamp
    before the console or JSON renderer.  Per-module levels are applied to
    the stdlib loggers structlog writes through.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        props = config.bind(LoggingProperties)
        levels = {name: str(level).upper() for name, level in props.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(props.format).lower()

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_to_level(self._root_level), force=True)

        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_to_level(level))

    def bind_request(self, request: HttpRequestInspector, route: RouteContextInspector) -> None:
        """Tag subsequent records in this context with request details."""
        structlog.contextvars.bind_contextvars(
            http_method=request.get_http_method(),
            path=route.get_request_path(),
            client_ip=request.get_client_ip_address(),
        )

    def clear_request(self) -> None:
        structlog.contextvars.unbind_contextvars(*REQUEST_KEYS)

    def _processors(self) -> list[structlog.types.Processor]:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_sensitive,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ]


def _to_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
