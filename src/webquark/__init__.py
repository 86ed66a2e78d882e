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
"""WebQuark — one request/response/session/query/route API over Starlette and WSGI hosts."""

from webquark.conversion import ConversionResult, ConversionStatus, TypedConverter
from webquark.core import Config
from webquark.crypto import SymmetricCipher
from webquark.kernel import (
    CipherException,
    CipherFormatException,
    ConfigurationException,
    ConversionException,
    DecryptionException,
    InvalidArgumentException,
    WebQuarkException,
)
from webquark.web import ContextAccessor, WebQuark, create_platform

__version__ = "0.1.0"

__all__ = [
    "CipherException",
    "CipherFormatException",
    "Config",
    "ConfigurationException",
    "ContextAccessor",
    "ConversionException",
    "ConversionResult",
    "ConversionStatus",
    "DecryptionException",
    "InvalidArgumentException",
    "SymmetricCipher",
    "TypedConverter",
    "WebQuark",
    "WebQuarkException",
    "create_platform",
]
