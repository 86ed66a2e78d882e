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
"""Explicit request-scope context passing.

Facades never look up "the current request" from global state.  Callers hand
them an :class:`HttpContextAccessor` whose ``http_context`` is the host
context for the request being handled.
"""

from __future__ import annotations

from typing import Any, TypeVar

from webquark.kernel.exceptions import ConfigurationException
from webquark.web.ports.outbound import HttpContextAccessor

C = TypeVar("C")


class ContextAccessor:
    """Mutable holder for the host context of one request.

    Usage::

        accessor = ContextAccessor(StarletteHttpContext(request))
        inspector = StarletteRequestInspector(accessor)
    """

    __slots__ = ("_http_context",)

    def __init__(self, http_context: Any | None = None) -> None:
        self._http_context = http_context

    @property
    def http_context(self) -> Any | None:
        return self._http_context

    @http_context.setter
    def http_context(self, value: Any | None) -> None:
        self._http_context = value


def require_http_context(
    accessor: HttpContextAccessor | None,
    expected_type: type[C],
    component: str,
) -> C:
    """Resolve the host context from *accessor* or fail fast.

    Raises:
        ConfigurationException: *accessor* is ``None``, holds no context, or
            holds a context for a different host runtime.
    """
    if accessor is None:
        raise ConfigurationException(
            f"{component} requires an HttpContextAccessor",
            code="HOST_CONTEXT_ACCESSOR_MISSING",
            context={"component": component},
        )

    http_context = accessor.http_context
    if http_context is None:
        raise ConfigurationException(
            f"{component} was created outside of a request: no host context available",
            code="HOST_CONTEXT_MISSING",
            context={"component": component},
        )

    if not isinstance(http_context, expected_type):
        raise ConfigurationException(
            f"{component} expects a {expected_type.__name__}, got {type(http_context).__name__}",
            code="HOST_CONTEXT_MISMATCH",
            context={"component": component, "expected": expected_type.__name__},
        )

    return http_context
