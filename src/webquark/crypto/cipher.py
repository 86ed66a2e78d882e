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
"""SymmetricCipher — passphrase-keyed AES-256-CBC text encryption.

Payload format: ``base64(iv || ciphertext)`` with a fresh 16-byte IV per call
and PKCS7 padding.  The passphrase is UTF-8 encoded and zero-padded or
truncated to 32 bytes, so passphrases sharing their first 32 bytes are the
same key.  There is no MAC: a corrupted payload is only detected when the
padding or the UTF-8 decoding happens to fail.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from webquark.kernel.exceptions import (
    CipherFormatException,
    DecryptionException,
    InvalidArgumentException,
)

KEY_SIZE = 32
IV_SIZE = 16
_BLOCK_BITS = algorithms.AES.block_size


def derive_key(passphrase: str) -> bytes:
    """Return the UTF-8 bytes of *passphrase*, zero-padded or truncated to ``KEY_SIZE``."""
    if not passphrase:
        raise InvalidArgumentException("Encryption key must not be empty", code="KEY_REQUIRED")
    raw = passphrase.encode("utf-8")[:KEY_SIZE]
    return raw.ljust(KEY_SIZE, b"\x00")


class SymmetricCipher:
    """Reversible text encryption keyed by an arbitrary-length passphrase."""

    def encrypt(self, plaintext: str, key: str) -> str:
        """Encrypt *plaintext* and return ``base64(iv || ciphertext)``.

        Raises:
            InvalidArgumentException: *plaintext* is blank or *key* is empty.
        """
        if plaintext is None or not plaintext.strip():
            raise InvalidArgumentException("Plaintext must not be empty", code="PLAINTEXT_REQUIRED")
        key_bytes = derive_key(key)

        iv = os.urandom(IV_SIZE)
        padder = padding.PKCS7(_BLOCK_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key_bytes), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(iv + ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str, key: str) -> str:
        """Decrypt a payload produced by :meth:`encrypt` with the same *key*.

        Raises:
            InvalidArgumentException: *ciphertext* is blank or *key* is empty.
            CipherFormatException: not base64, or too short / misaligned.
            DecryptionException: padding or UTF-8 decoding failed.
        """
        if ciphertext is None or not ciphertext.strip():
            raise InvalidArgumentException("Ciphertext must not be empty", code="CIPHERTEXT_REQUIRED")
        key_bytes = derive_key(key)

        try:
            payload = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise CipherFormatException("Ciphertext is not valid base64", code="INVALID_BASE64") from exc

        block_bytes = _BLOCK_BITS // 8
        body = payload[IV_SIZE:]
        if not body or len(body) % block_bytes:
            raise CipherFormatException(
                "Ciphertext is too short or not aligned to the cipher block size",
                code="INVALID_PAYLOAD_LENGTH",
                context={"length": len(payload)},
            )

        decryptor = Cipher(algorithms.AES(key_bytes), modes.CBC(payload[:IV_SIZE])).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()

        try:
            unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
            plain = unpadder.update(padded) + unpadder.finalize()
            return plain.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as exc:
            raise DecryptionException("Ciphertext could not be decrypted with this key", code="DECRYPTION_FAILED") from exc


_default_cipher = SymmetricCipher()


def encrypt(plaintext: str, key: str) -> str:
    """Encrypt with the module-level :class:`SymmetricCipher`."""
    return _default_cipher.encrypt(plaintext, key)


def decrypt(ciphertext: str, key: str) -> str:
    """Decrypt with the module-level :class:`SymmetricCipher`."""
    return _default_cipher.decrypt(ciphertext, key)
