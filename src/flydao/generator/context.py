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
"""Shared state handed to every generator during one generation run."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final, Literal

from flydao.generator.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind, DiagnosticReporter
from flydao.generator.registry import ImplementationNameRegistry
from flydao.model.entity import EntityDefinition
from flydao.model.types import TypeRef


class Skip(Enum):
    """Outcome of a generator build that filed a diagnostic instead of producing a generator."""

    SKIPPED = "skipped"

    def __repr__(self) -> str:
        return "SKIPPED"


SKIPPED: Final = Skip.SKIPPED
Skipped = Literal[Skip.SKIPPED]


class GenerationContext:
    """Entity models, diagnostics, and the name registry for one run.

    One context is shared by every interface pass of a run; entities are
    read-only after construction.
    """

    def __init__(
        self,
        entities: Iterable[EntityDefinition] = (),
        *,
        reporter: DiagnosticReporter | None = None,
        registry: ImplementationNameRegistry | None = None,
        session_field_name: str = "session",
    ) -> None:
        self._entities: dict[str, EntityDefinition] = {e.qualified_name: e for e in entities}
        self.reporter: DiagnosticReporter = reporter if reporter is not None else DiagnosticCollector()
        self.registry = registry if registry is not None else ImplementationNameRegistry()
        self.session_field_name = session_field_name

    @property
    def session_attribute(self) -> str:
        return "_" + self.session_field_name

    @property
    def entities(self) -> list[EntityDefinition]:
        return list(self._entities.values())

    def entity_for(self, type_ref: TypeRef) -> EntityDefinition | None:
        """Return the entity model for *type_ref*, or ``None`` if it is not an entity."""
        return self._entities.get(type_ref.qualified_name)

    def skip(self, kind: DiagnosticKind, element: str, message: str) -> Skipped:
        """File a diagnostic and return the skip marker."""
        self.reporter.report(Diagnostic(kind=kind, message=message, element=element))
        return SKIPPED
