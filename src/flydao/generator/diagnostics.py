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
"""Diagnostic reporting for user-facing generation errors."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

import structlog


class DiagnosticKind(str, Enum):
    MALFORMED_METHOD = "malformed_method"
    AMBIGUOUS_INTENT = "ambiguous_intent"
    NAMING_COLLISION = "naming_collision"


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem; ``element`` names the offending declaration (``UserDao.save``)."""

    kind: DiagnosticKind
    message: str
    element: str

    def __str__(self) -> str:
        return f"{self.element}: {self.message}"


@runtime_checkable
class DiagnosticReporter(Protocol):
    """Receives diagnostics filed by the generator layer."""

    def report(self, diagnostic: Diagnostic) -> None: ...


class DiagnosticCollector:
    """Reporter that keeps every diagnostic and logs it as it arrives.

    Safe to share between concurrent interface passes.
    """

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("flydao.diagnostics")
        self._lock = threading.Lock()
        self._diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)
        self._logger.error(
            "diagnostic_reported",
            kind=diagnostic.kind.value,
            element=diagnostic.element,
            message=diagnostic.message,
        )

    @property
    def diagnostics(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    @property
    def has_errors(self) -> bool:
        with self._lock:
            return bool(self._diagnostics)

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.kind is kind]
