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
"""Session subsystem configuration properties."""

from __future__ import annotations

from pydantic import BaseModel

from webquark.core.config import config_properties


@config_properties(prefix="webquark.session")
class SessionProperties(BaseModel):
    """Configuration for session handling (webquark.session.*).

    Attributes:
        encryption_key: Passphrase for encrypted session entries. When unset,
            each entry is encrypted with its own key name.
        environ_key: WSGI environ key holding the host session mapping.
    """

    encryption_key: str | None = None
    environ_key: str = "webquark.session"
