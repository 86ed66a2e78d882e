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
"""Unified exception hierarchy for WebQuark.

All library exceptions inherit from WebQuarkException so callers can catch
a single type at the boundary.

Categories:
- ConfigurationException: host context or session bag not available (fatal)
- InvalidArgumentException: caller passed an empty or missing argument
- ConversionException: a string could not be converted to the target type
- CipherException: encrypted payload could not be decoded or decrypted
"""

from __future__ import annotations


class WebQuarkException(Exception):
    """Base exception for all WebQuark errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "HOST_CONTEXT_MISSING").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(WebQuarkException):
    """The host context (or a required part of it) is unavailable.

    Raised at construction time, never later during data access.
    """


class InvalidArgumentException(WebQuarkException, ValueError):
    """A required argument was ``None`` or empty."""


class ConversionException(WebQuarkException):
    """A string value could not be converted to the requested type."""


# ---------------------------------------------------------------------------
# Cryptography
# ---------------------------------------------------------------------------


class CipherException(WebQuarkException):
    """Base class for cipher failures."""


class CipherFormatException(CipherException):
    """The payload is not valid base64 or is too short to hold IV and data."""


class DecryptionException(CipherException):
    """Padding or text decoding failed, usually because of a wrong key."""
