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
"""TypedConverter — string to typed value conversion with defaulting.

Targets are resolved in a fixed order: ``str`` passthrough, ``Enum``
(case-insensitive member name), ``uuid.UUID``, ``datetime``, ``bool``,
``int``, then a generic ``target_type(input)`` fallback for scalar types.
Container targets (``list``, ``dict``, ...) are rejected.  Blank input is
never parsed.
"""

from __future__ import annotations

import enum
import re
import types
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, TypeVar, Union, cast, get_args, get_origin

from webquark.kernel.exceptions import ConversionException

T = TypeVar("T")

_INT_RE = re.compile(r"^[+-]?\d+$")


class ConversionStatus(enum.Enum):
    """Outcome of a conversion attempt."""

    PRESENT = "present"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """Result of :meth:`TypedConverter.convert`.

    Distinguishes a missing/blank input (``ABSENT``) from one that is present
    but cannot be converted (``INVALID``).
    """

    status: ConversionStatus
    value: T | None = None
    error: ConversionException | None = None

    @property
    def ok(self) -> bool:
        return self.status is ConversionStatus.PRESENT

    def value_or(self, default: T) -> T:
        """Return the converted value, or *default* unless conversion succeeded."""
        return cast(T, self.value) if self.ok else default

    @classmethod
    def present(cls, value: T) -> ConversionResult[T]:
        return cls(ConversionStatus.PRESENT, value)

    @classmethod
    def absent(cls) -> ConversionResult[T]:
        return cls(ConversionStatus.ABSENT)

    @classmethod
    def invalid(cls, error: ConversionException) -> ConversionResult[T]:
        return cls(ConversionStatus.INVALID, error=error)


class TypedConverter:
    """Converts strings to typed values and back.

    Stateless; a single instance can be shared freely.
    """

    def convert_to(self, value: str | None, target_type: type[T], default: T | None = None) -> T | None:
        """Convert *value* to *target_type*, returning *default* on any failure."""
        result, ok = self.try_convert(value, target_type)
        return result if ok else default

    def try_convert(self, value: str | None, target_type: type[T]) -> tuple[T | None, bool]:
        """Attempt a conversion. Returns ``(converted, True)`` or ``(None, False)``."""
        result = self.convert(value, target_type)
        if result.ok:
            return result.value, True
        return None, False

    def convert(self, value: str | None, target_type: type[T]) -> ConversionResult[T]:
        """Convert *value*, reporting absent and invalid input separately."""
        if value is None or not value.strip():
            return ConversionResult.absent()

        target = _unwrap_optional(target_type)
        try:
            return ConversionResult.present(cast(T, _parse(value, target)))
        except (ValueError, TypeError, KeyError, ArithmeticError):
            return ConversionResult.invalid(
                ConversionException(
                    f"Cannot convert '{value}' to {getattr(target, '__name__', target)}",
                    code="CONVERSION_FAILED",
                    context={"input": value, "target": target},
                )
            )

    def convert_from(self, value: Any) -> str:
        """Render *value* as a string that :meth:`convert_to` can read back."""
        if value is None:
            return ""
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, uuid.UUID):
            return str(value)
        if isinstance(value, enum.Enum):
            return value.name
        return str(value)


def _unwrap_optional(target_type: Any) -> Any:
    """``Optional[X]`` and ``X | None`` resolve to ``X``."""
    origin = get_origin(target_type)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(target_type) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return target_type


def _parse(value: str, target: Any) -> Any:
    if target is str:
        return value

    if isinstance(target, type) and issubclass(target, enum.Enum):
        return _parse_enum(value, target)

    if target is uuid.UUID:
        return uuid.UUID(value.strip())

    if target is datetime:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)

    if target is bool:
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
        raise ValueError(f"Not a boolean: {value!r}")

    if target is int:
        text = value.strip()
        if not _INT_RE.match(text):
            raise ValueError(f"Not an integer: {value!r}")
        return int(text)

    container = get_origin(target) or target
    if isinstance(container, type) and issubclass(container, Iterable):
        raise TypeError(f"Cannot convert a single string to the container type {target!r}")

    # Fallback: types with an ISO parser (date, time) use it, others their constructor.
    from_iso = getattr(target, "fromisoformat", None)
    if callable(from_iso):
        return from_iso(value.strip())
    return target(value)


def _parse_enum(value: str, target: type[enum.Enum]) -> enum.Enum:
    text = value.strip()
    for name, member in target.__members__.items():
        if name.lower() == text.lower():
            return member
    if _INT_RE.match(text):
        return target(int(text))
    raise KeyError(f"{text!r} is not a member of {target.__name__}")
