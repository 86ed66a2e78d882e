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
"""WebQuark Web — host-neutral request, response, session, query and route facades.

Host adapters live in :mod:`webquark.web.adapters.starlette` and
:mod:`webquark.web.adapters.wsgi`; pick one with :func:`create_platform`.
"""

from webquark.web.context import ContextAccessor, require_http_context
from webquark.web.platform import SUPPORTED_PLATFORMS, WebQuark, create_platform
from webquark.web.query import QueryStringHandler, parse_query_string
from webquark.web.session import SessionStateHandler

__all__ = [
    "SUPPORTED_PLATFORMS",
    "ContextAccessor",
    "QueryStringHandler",
    "SessionStateHandler",
    "WebQuark",
    "create_platform",
    "parse_query_string",
    "require_http_context",
]
