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
"""Generator configuration: layered YAML/TOML files, env overrides, dataclass binding.

Layers are merged in order, later layers winning:

1. packaged defaults (``flydao/resources/flydao-defaults.yaml``)
2. ``config/flydao.{yaml,toml}`` then ``flydao.{yaml,toml}`` in the project
3. profile overlays ``flydao-<profile>.{yaml,toml}`` in the same places
4. ``FLYDAO_*`` environment variables, consulted on every read
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

ENV_PREFIX = "FLYDAO_"
DEFAULTS_LABEL = "flydao-defaults.yaml (defaults)"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10
_PREFIX_ATTR = "__flydao_config_prefix__"
_MISSING = object()

# str -> field type conversions applied to env overrides and quoted file values
_CONVERTERS: dict[Any, Callable[[str], Any]] = {
    int: int,
    float: float,
    bool: lambda raw: raw.strip().lower() in ("true", "1", "yes", "on"),
}


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Bind a dataclass to the configuration section under *prefix*.

    Usage::

        @config_properties(prefix="flydao.generator")
        @dataclass
        class GeneratorProperties:
            workers: int = 1
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """``flydao.generator.output-dir`` -> ``FLYDAO_GENERATOR_OUTPUT_DIR``."""
    return ENV_PREFIX + re.sub(r"[.\-]", "_", key.removeprefix("flydao.")).upper()


def _walk(data: Any, key: str) -> Any:
    for part in key.split("."):
        if not isinstance(data, dict) or data.get(part) is None:
            return _MISSING
        data = data[part]
    return data


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        merged[key] = _merge(current, value) if isinstance(current, dict) and isinstance(value, dict) else value
    return merged


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _packaged_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("flydao.resources").joinpath("flydao-defaults.yaml")
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


def _project_files(base_dir: Path, profiles: Iterable[str]) -> Iterator[tuple[Path, str]]:
    """Existing project config files in merge order, with their source labels."""
    stems = [("flydao", None)] + [(f"flydao-{profile}", profile) for profile in profiles]
    for stem, profile in stems:
        for directory in (base_dir / "config", base_dir):
            for suffix in (".yaml", ".toml"):
                path = directory / (stem + suffix)
                if path.is_file():
                    yield path, str(path) if profile is None else f"{path} (profile: {profile})"


class Config:
    """Merged configuration tree with dot-notation reads.

    ``get`` checks ``FLYDAO_*`` environment variables before the tree and
    expands ``${NAME}``, ``${dotted.key}`` and ``${key:default}`` placeholders
    in string values.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Labels of the layers merged into this configuration, in order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def _layered(cls, files: Iterable[tuple[Path, str]], load_defaults: bool) -> Config:
        data: dict[str, Any] = {}
        sources: list[str] = []
        if load_defaults:
            data = _packaged_defaults()
            sources.append(DEFAULTS_LABEL)
        for path, label in files:
            data = _merge(data, _read(path))
            sources.append(label)
        config = cls(data)
        config._loaded_sources = sources
        return config

    @classmethod
    def defaults(cls) -> Config:
        return cls._layered((), load_defaults=True)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge the packaged defaults with the project files found under *base_dir*."""
        return cls._layered(_project_files(Path(base_dir), active_profiles or []), load_defaults)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge the packaged defaults with one file and its ``<stem>-<profile>`` overlays.

        A missing *path* leaves only the defaults.
        """
        path = Path(path)
        files: list[tuple[Path, str]] = []
        if path.is_file():
            files.append((path, str(path)))
            for profile in active_profiles or []:
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                if overlay.is_file():
                    files.append((overlay, f"{overlay} (profile: {profile})"))
        return cls._layered(files, load_defaults)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dotted *key*; the matching ``FLYDAO_*`` variable wins."""
        override = os.environ.get(env_key(key))
        if override is not None:
            return override
        value = _walk(self._data, key)
        if value is _MISSING:
            return default
        if isinstance(value, str) and "${" in value:
            return self._expand(value, 0)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        section = _walk(self._data, prefix)
        return section if isinstance(section, dict) else {}

    def _expand(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for a reference cycle")

        def substitute(match: re.Match[str]) -> str:
            name, sep, fallback = match.group(1).partition(":")
            if name in os.environ:
                return os.environ[name]
            found = _walk(self._data, name)
            if found is not _MISSING:
                text = str(found)
                return self._expand(text, depth + 1) if "${" in text else text
            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}' from the environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        Section keys may use dashes (``session-field``). A ``FLYDAO_*``
        variable for a field overrides the file value. Fields with no value
        keep their dataclass default.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = {str(key).replace("-", "_"): value for key, value in self.get_section(prefix).items()}
        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for f in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            raw = os.environ.get(env_key(f"{prefix}.{f.name}"), section.get(f.name, _MISSING))
            if raw is _MISSING:
                continue
            convert = _CONVERTERS.get(hints.get(f.name))
            values[f.name] = convert(raw) if convert is not None and isinstance(raw, str) else raw
        return config_cls(**values)
