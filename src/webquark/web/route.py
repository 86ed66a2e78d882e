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
"""BaseRouteInspector — route-value helpers shared by the route adapters."""

from __future__ import annotations

import abc
from typing import Any

CONTROLLER_KEY = "controller"
ACTION_KEY = "action"
AREA_KEY = "area"


class BaseRouteInspector(abc.ABC):
    """Abstract base for :class:`~webquark.web.ports.inbound.RouteContextInspector`."""

    @abc.abstractmethod
    def get_all_route_values(self) -> dict[str, Any]: ...

    def get_route_value(self, key: str) -> str | None:
        if not key:
            return None
        value = self.get_all_route_values().get(key)
        return None if value is None else str(value)

    def get_controller_name(self) -> str | None:
        return self.get_route_value(CONTROLLER_KEY)

    def get_action_name(self) -> str | None:
        return self.get_route_value(ACTION_KEY)

    def get_area_name(self) -> str | None:
        return self.get_route_value(AREA_KEY)
