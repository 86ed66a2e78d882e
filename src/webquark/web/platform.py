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
"""Platform selection and the per-request WebQuark bundle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from webquark.config.properties.session import SessionProperties
from webquark.config.properties.web import WebProperties
from webquark.core.config import Config
from webquark.kernel.exceptions import ConfigurationException

if TYPE_CHECKING:
    from webquark.web.ports.inbound import (
        HttpRequestInspector,
        HttpResponseHandler,
        RequestQueryHandler,
        RouteContextInspector,
        SessionHandler,
    )
    from webquark.web.ports.outbound import HttpContextAccessor, WebQuarkPlatform

logger = structlog.get_logger("webquark.web")

SUPPORTED_PLATFORMS = ("starlette", "wsgi")


class WebQuark:
    """Every facade for one request, built by a :class:`WebQuarkPlatform`.

    Request, response, query and route facades are created eagerly, so a
    missing host context fails here.  The session facade is created on first
    access because applications without session middleware must still be
    able to use the rest.
    """

    def __init__(self, platform: WebQuarkPlatform, accessor: HttpContextAccessor | None) -> None:
        self._platform = platform
        self._accessor = accessor
        self.request: HttpRequestInspector = platform.request_inspector(accessor)
        self.response: HttpResponseHandler = platform.response_handler(accessor)
        self.query: RequestQueryHandler = platform.query_handler(accessor)
        self.route: RouteContextInspector = platform.route_inspector(accessor)
        self._session: SessionHandler | None = None

    @property
    def platform(self) -> WebQuarkPlatform:
        return self._platform

    @property
    def session(self) -> SessionHandler:
        if self._session is None:
            self._session = self._platform.session_handler(self._accessor)
        return self._session


def create_platform(config: Config | None = None) -> WebQuarkPlatform:
    """Select the host adapter from ``webquark.web.platform``.

    Raises:
        ConfigurationException: the configured platform is unknown.
    """
    config = config or Config.defaults()
    web = config.bind(WebProperties)
    session = config.bind(SessionProperties)
    name = str(web.platform).strip().lower()

    if name == "starlette":
        from webquark.web.adapters.starlette.platform import StarlettePlatform

        platform: WebQuarkPlatform = StarlettePlatform(session_properties=session)
    elif name == "wsgi":
        from webquark.web.adapters.wsgi.platform import WsgiPlatform

        platform = WsgiPlatform(session_properties=session)
    else:
        raise ConfigurationException(
            f"Unknown web platform '{web.platform}'",
            code="UNKNOWN_PLATFORM",
            context={"platform": web.platform, "supported": SUPPORTED_PLATFORMS},
        )

    logger.debug("web_platform_selected", platform=platform.name)
    return platform
