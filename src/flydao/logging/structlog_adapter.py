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
"""StructlogAdapter — LoggingPort implementation using structlog.

Records go through stdlib ``logging`` to stderr, so stdout stays free for
CLI reports. Generation stages log events such as ``interface_generated``
with keyword context.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from flydao.core.config import Config


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def build_processors(fmt: str) -> list[structlog.types.Processor]:
    """Processor chain for ``console`` or ``json`` output."""
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if fmt == "json":
        chain += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain += [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]
    return chain


class StructlogAdapter:
    """Logging adapter configured from ``flydao.logging.*``.

    ``flydao.logging.level.root`` sets the root level; any other key under
    ``flydao.logging.level`` names a logger and its level.
    ``flydao.logging.format`` is ``console`` or ``json``.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = {name: str(level).upper() for name, level in config.get_section("flydao.logging.level").items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(config.get("flydao.logging.format", "console")).lower()

        structlog.configure(
            processors=build_processors(self._format),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stderr, level=_level(self._root_level), force=True)
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

    @staticmethod
    @contextmanager
    def bound(**values: Any) -> Iterator[None]:
        """Bind *values* to every event logged inside the block (e.g. ``interface=...``)."""
        tokens = structlog.contextvars.bind_contextvars(**values)
        try:
            yield
        finally:
            structlog.contextvars.reset_contextvars(**tokens)
