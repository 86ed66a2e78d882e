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
"""Response header helpers shared by the host adapters."""

from __future__ import annotations

from urllib.parse import quote

# Same safe set as starlette.responses.RedirectResponse.
LOCATION_SAFE = ":/%#?=@[]!$&'()*+,;"


def quote_location(url: str) -> str:
    """Percent-encode *url* for a ``Location`` header, keeping URL delimiters."""
    return quote(url, safe=LOCATION_SAFE)
