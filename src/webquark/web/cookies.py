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
"""Cookie helpers shared by the response adapters.

Only name, value and expiry are configurable.  Path is always ``/`` and
SameSite ``lax``; domain, ``Secure`` and ``HttpOnly`` are not exposed.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from http.cookies import SimpleCookie

COOKIE_PATH = "/"
COOKIE_SAMESITE = "lax"


def to_utc(expires: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted to UTC."""
    if expires.tzinfo is None:
        return expires.replace(tzinfo=timezone.utc)
    return expires.astimezone(timezone.utc)


def build_set_cookie(key: str, value: str, expires: datetime | None = None) -> str:
    """Render the value of a ``Set-Cookie`` header."""
    cookie: SimpleCookie = SimpleCookie()
    cookie[key] = value
    morsel = cookie[key]
    morsel["path"] = COOKIE_PATH
    morsel["samesite"] = COOKIE_SAMESITE
    if expires is not None:
        morsel["expires"] = format_datetime(to_utc(expires), usegmt=True)
    return cookie.output(header="").strip()
