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
"""SessionStateHandler — typed and encrypted access to a host session bag."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, TypeVar

import structlog
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from webquark.crypto.cipher import SymmetricCipher
from webquark.kernel.exceptions import (
    CipherException,
    ConfigurationException,
    InvalidArgumentException,
)

T = TypeVar("T")

logger = structlog.get_logger("webquark.session")


class SessionStateHandler:
    """Wraps the host-provided session mapping.

    The host owns the mapping's lifetime (Starlette's ``request.session``, a
    WSGI session middleware's environ entry, ...).  Every write goes straight
    to it; nothing is buffered here.

    Values written with :meth:`set` are stored as JSON text and read back
    through a pydantic ``TypeAdapter`` for the requested type.  Values
    written with :meth:`set_encrypted` are JSON encrypted with
    :class:`SymmetricCipher`.

    Args:
        session: The host session mapping.
        encryption_key: Passphrase for encrypted entries.  When omitted, each
            entry is encrypted with its own key name, which is guessable;
            configure ``webquark.session.encryption-key`` in production.
        cipher: Cipher used for encrypted entries.

    Raises:
        ConfigurationException: *session* is ``None``.
    """

    def __init__(
        self,
        session: MutableMapping[str, Any] | None,
        encryption_key: str | None = None,
        cipher: SymmetricCipher | None = None,
    ) -> None:
        if session is None:
            raise ConfigurationException(
                "Session state is not available for this request",
                code="SESSION_UNAVAILABLE",
            )
        self._session = session
        self._encryption_key = encryption_key or None
        self._cipher = cipher or SymmetricCipher()
        self._warned_key_fallback = False

    # -- raw strings ----------------------------------------------------------

    def set_string(self, key: str, value: str) -> None:
        self._session[key] = value

    def get_string(self, key: str) -> str | None:
        value = self._session.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    # -- JSON -----------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """Store *value* as JSON."""
        self.set_string(key, _dump_json(value))

    def get(self, key: str, target_type: type[T], default: T | None = None) -> T | None:
        """Read a JSON entry as *target_type*; *default* if missing or unreadable."""
        value, ok = self.try_get(key, target_type)
        return value if ok else default

    def try_get(self, key: str, target_type: type[T]) -> tuple[T | None, bool]:
        raw = self.get_string(key)
        if raw is None or not raw.strip():
            return None, False
        try:
            return TypeAdapter(target_type).validate_json(raw), True
        except (ValidationError, PydanticSchemaGenerationError) as exc:
            logger.debug("session_entry_unreadable", key=key, target=repr(target_type), error=type(exc).__name__)
            return None, False

    # -- bookkeeping ----------------------------------------------------------

    def has_key(self, key: str) -> bool:
        return self._session.get(key) is not None

    def remove(self, key: str) -> None:
        self._session.pop(key, None)

    def clear(self) -> None:
        self._session.clear()

    # -- encrypted ------------------------------------------------------------

    def set_encrypted(self, key: str, value: Any) -> None:
        """Store *value* as encrypted JSON.

        Raises:
            InvalidArgumentException: *value* is ``None``.
        """
        if value is None:
            raise InvalidArgumentException("Encrypted session values must not be None", code="VALUE_REQUIRED")
        payload = self._cipher.encrypt(_dump_json(value), self._passphrase_for(key))
        self.set_string(key, payload)

    def get_encrypted(self, key: str, target_type: type[T], default: T | None = None) -> T | None:
        """Decrypt and read an entry; *default* if missing, tampered, or unreadable."""
        payload = self.get_string(key)
        if not payload:
            return default
        try:
            plain = self._cipher.decrypt(payload, self._passphrase_for(key))
            return TypeAdapter(target_type).validate_json(plain)
        except (CipherException, InvalidArgumentException, ValidationError, PydanticSchemaGenerationError) as exc:
            logger.debug("encrypted_session_entry_unreadable", key=key, error=type(exc).__name__)
            return default

    def _passphrase_for(self, key: str) -> str:
        if self._encryption_key is not None:
            return self._encryption_key
        if not self._warned_key_fallback:
            logger.warning(
                "session_encryption_key_not_configured",
                hint="set webquark.session.encryption-key; falling back to the entry key name",
            )
            self._warned_key_fallback = True
        return key


def _dump_json(value: Any) -> str:
    return TypeAdapter(type(value)).dump_json(value).decode("utf-8")
