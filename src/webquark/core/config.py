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
"""Layered configuration for WebQuark.

Sources, lowest to highest priority:

1. ``webquark-defaults.yaml`` shipped in :mod:`webquark.resources`
2. the application's YAML or TOML file, then its profile overlays
3. ``WEBQUARK_*`` environment variables

Values are read by dotted key (``webquark.session.encryption-key``) or bound
in one go to a ``@config_properties`` dataclass or pydantic model.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

ENV_PREFIX = "WEBQUARK_"
DEFAULTS_RESOURCE = "webquark-defaults.yaml"

_PREFIX_ATTR = "__webquark_config_prefix__"
_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Attach a configuration prefix to a dataclass or pydantic model.

    Usage::

        @config_properties(prefix="webquark.web")
        @dataclass
        class WebProperties:
            platform: str = "starlette"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def load_file(path: Path) -> dict[str, Any]:
    """Parse a ``.toml`` file with tomllib, anything else as YAML."""
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def framework_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("webquark.resources").joinpath(DEFAULTS_RESOURCE)
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge nested mappings; scalars and lists in *override* replace those in *base*."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def env_key(key: str) -> str:
    """``webquark.session.encryption-key`` -> ``WEBQUARK_SESSION_ENCRYPTION_KEY``."""
    name = key.removeprefix("webquark.")
    return ENV_PREFIX + re.sub(r"[.\-]", "_", name).upper()


class Config:
    """Nested configuration dict with dotted-key access and env overrides."""

    def __init__(self, data: dict[str, Any] | None = None, sources: list[str] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources = list(sources or [])

    @classmethod
    def defaults(cls) -> Config:
        return cls(framework_defaults(), sources=[DEFAULTS_RESOURCE])

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load *path* on top of the framework defaults.

        Each active profile merges ``<stem>-<profile><suffix>`` from the same
        directory when that file exists.  A missing *path* leaves only the
        defaults.
        """
        path = Path(path)
        data = framework_defaults() if load_defaults else {}
        sources = [DEFAULTS_RESOURCE] if load_defaults else []

        candidates = [path] if path.exists() else []
        if candidates:
            candidates += [path.with_name(f"{path.stem}-{profile}{path.suffix}") for profile in active_profiles or []]

        for candidate in candidates:
            if candidate.exists():
                data = deep_merge(data, load_file(candidate))
                sources.append(str(candidate))

        return cls(data, sources=sources)

    @property
    def loaded_sources(self) -> list[str]:
        return list(self._sources)

    # -- lookup ---------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dotted *key*; the matching ``WEBQUARK_*`` variable wins.

        String values are interpolated: ``${NAME}`` reads an environment
        variable or another config key, ``${NAME:fallback}`` adds a default.
        """
        from_env = os.environ.get(env_key(key))
        if from_env is not None:
            return from_env

        value = self._find(key)
        if value is None:
            return default
        if isinstance(value, str):
            return self._interpolate(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = self._find(prefix)
        return dict(section) if isinstance(section, Mapping) else {}

    def _find(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        return node

    def _interpolate(self, text: str, depth: int = 0) -> str:
        if "${" not in text:
            return text
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{text}' nest too deeply; check for a reference cycle")

        def substitute(match: re.Match[str]) -> str:
            name, has_default, fallback = match.group(1).partition(":")
            if name in os.environ:
                return os.environ[name]
            found = self._find(name)
            if found is not None:
                return self._interpolate(str(found), depth + 1)
            if has_default:
                return fallback
            raise ValueError(f"Unresolved placeholder '${{{match.group(1)}}}'")

        return _PLACEHOLDER.sub(substitute, text)

    # -- binding --------------------------------------------------------------

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate *config_cls* from its ``@config_properties`` section.

        Kebab-case keys map to snake_case fields, and ``WEBQUARK_<PREFIX>_<FIELD>``
        overrides single fields.

        Raises:
            ValueError: *config_cls* has no prefix, or pydantic validation failed.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        values = {key.replace("-", "_"): value for key, value in self.get_section(prefix).items()}
        for name in _field_names(config_cls):
            override = os.environ.get(env_key(f"{prefix}.{name}"))
            if override is not None:
                values[name] = override

        if issubclass(config_cls, BaseModel):
            try:
                return cast(T, config_cls.model_validate(values))
            except ValidationError as exc:
                raise ValueError(f"Invalid '{prefix}' configuration for {config_cls.__name__}:\n{exc}") from exc
        return _bind_dataclass(config_cls, values)


def _field_names(config_cls: type) -> list[str]:
    if issubclass(config_cls, BaseModel):
        return list(config_cls.model_fields)
    return [f.name for f in dataclasses.fields(config_cls)]  # type: ignore[arg-type]


def _parse_flag(text: str) -> bool:
    return text.strip().lower() in ("true", "1", "yes", "on")


_COERCIONS: dict[Any, Callable[[str], Any]] = {int: int, float: float, bool: _parse_flag}


def _bind_dataclass(config_cls: type[T], values: dict[str, Any]) -> T:
    hints = get_type_hints(config_cls)
    kwargs: dict[str, Any] = {}
    for name in _field_names(config_cls):
        if name not in values:
            continue
        value = values[name]
        coerce = _COERCIONS.get(hints.get(name))
        kwargs[name] = coerce(value) if coerce is not None and isinstance(value, str) else value
    return config_cls(**kwargs)
