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
"""QueryStringHandler — in-memory, mutable view over a parsed query string."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar
from urllib.parse import parse_qsl, quote_plus

from webquark.conversion.converter import ConversionResult, TypedConverter
from webquark.kernel.exceptions import ConfigurationException
from webquark.web.context import require_http_context
from webquark.web.ports.outbound import HostContext, HttpContextAccessor

T = TypeVar("T")


def parse_query_string(raw_query: str | None) -> dict[str, str]:
    """Parse ``a=1&b=2`` into an ordered dict.

    A leading ``?`` is ignored, keys without a value map to ``""``, and the
    last occurrence of a duplicated key wins.
    """
    if not raw_query:
        return {}
    text = raw_query[1:] if raw_query.startswith("?") else raw_query
    result: dict[str, str] = {}
    for key, value in parse_qsl(text, keep_blank_values=True):
        result[key] = value
    return result


class QueryStringHandler:
    """Key/value store built once from a raw query string.

    Mutations (``set``, ``remove``, ``add_range``) only affect this object;
    the request's query string is never rewritten.

    Args:
        raw_query: Raw query string, with or without the leading ``?``.
        converter: Converter used by the typed accessors.
    """

    def __init__(self, raw_query: str | None = None, converter: TypedConverter | None = None) -> None:
        self._values: dict[str, str] = parse_query_string(raw_query)
        self._converter = converter or TypedConverter()

    @classmethod
    def from_accessor(
        cls,
        accessor: HttpContextAccessor | None,
        converter: TypedConverter | None = None,
    ) -> QueryStringHandler:
        """Build from the query string of the request held by *accessor*.

        Raises:
            ConfigurationException: no host context is available.
        """
        http_context = require_http_context(accessor, object, cls.__name__)
        if not isinstance(http_context, HostContext):
            raise ConfigurationException(
                f"{type(http_context).__name__} does not expose a raw query string",
                code="HOST_CONTEXT_MISMATCH",
            )
        return cls(http_context.raw_query_string, converter=converter)

    # -- string access --------------------------------------------------------

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def has_key(self, key: str) -> bool:
        return key in self._values

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    # -- typed access ---------------------------------------------------------

    def get_as(self, key: str, target_type: type[T], default: T | None = None) -> T | None:
        """Typed lookup: *default* when the key is missing, blank, or unconvertible."""
        return self._converter.convert_to(self._values.get(key), target_type, default)

    def try_get_as(self, key: str, target_type: type[T]) -> ConversionResult[T]:
        """Typed lookup that reports absent and invalid values separately."""
        return self._converter.convert(self._values.get(key), target_type)

    def set_as(self, key: str, value: Any) -> None:
        self.set(key, self._converter.convert_from(value))

    # -- bulk -----------------------------------------------------------------

    def all_keys(self) -> list[str]:
        return list(self._values)

    def to_dict(self) -> dict[str, str]:
        return dict(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def add_range(self, items: Mapping[str, str] | Iterable[tuple[str, str]]) -> None:
        """Add several pairs, overwriting existing keys."""
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self._values[key] = value

    # -- serialization --------------------------------------------------------

    def to_query_string(self) -> str:
        """Rebuild ``key=value&...`` with both sides form-encoded."""
        return "&".join(f"{quote_plus(k)}={quote_plus(v)}" for k, v in self._values.items())

    def to_encoded_string(self) -> str:
        """Form-encode the output of :meth:`to_query_string` once more.

        The result is double-encoded relative to :meth:`to_query_string`
        (``a=1&b=2`` becomes ``a%3D1%26b%3D2``), suitable for embedding the
        whole query as a single parameter value.
        """
        return quote_plus(self.to_query_string())

    def __str__(self) -> str:
        return self.to_query_string()

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)
