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
"""Generation run over many DAO interfaces.

Each interface goes through ``generate -> emit``. Naming collisions are
reported and end only that interface's pass; emission failures abort the run.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import structlog

from flydao.config.properties.generator import GeneratorProperties
from flydao.emission.port import EmissionBackend
from flydao.generator.context import GenerationContext
from flydao.generator.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind
from flydao.generator.orchestrator import DaoImplementationGenerator
from flydao.kernel.exceptions import NamingCollisionException
from flydao.logging.structlog_adapter import StructlogAdapter
from flydao.model.artifact import GeneratedArtifact
from flydao.model.dao import DaoInterfaceDefinition
from flydao.model.entity import EntityDefinition

logger = structlog.get_logger("flydao.processor")


@dataclass
class GenerationReport:
    """Outcome of one run."""

    artifacts: list[GeneratedArtifact] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    skipped_interfaces: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class GenerationProcessor:
    """Drive the orchestrator over a set of interfaces and emit the results.

    With ``workers > 1`` interfaces are generated on a thread pool; the
    shared name registry accepts concurrent registration of distinct keys.
    Artifacts are emitted in input order.
    """

    def __init__(
        self,
        context: GenerationContext,
        backend: EmissionBackend,
        *,
        workers: int = 1,
    ) -> None:
        self._context = context
        self._backend = backend
        self._workers = max(1, workers)
        self._generator = DaoImplementationGenerator(context)

    @classmethod
    def from_properties(
        cls,
        properties: GeneratorProperties,
        entities: Iterable[EntityDefinition],
        backend: EmissionBackend,
    ) -> GenerationProcessor:
        context = GenerationContext(
            entities,
            reporter=DiagnosticCollector(),
            session_field_name=properties.session_field,
        )
        return cls(context, backend, workers=properties.workers)

    @property
    def context(self) -> GenerationContext:
        return self._context

    def process(self, interfaces: Iterable[DaoInterfaceDefinition]) -> GenerationReport:
        """Generate and emit every interface.

        Raises:
            EmissionException: the backend could not persist an artifact.
        """
        pending = list(interfaces)
        if self._workers > 1 and len(pending) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                outcomes = list(pool.map(self._generate_one, pending))
        else:
            outcomes = [self._generate_one(interface) for interface in pending]

        report = GenerationReport()
        for interface, artifact in zip(pending, outcomes, strict=True):
            if artifact is None:
                report.skipped_interfaces.append(interface.qualified_name)
                continue
            self._backend.emit(artifact)
            report.artifacts.append(artifact)
            logger.info(
                "interface_generated",
                interface=interface.qualified_name,
                implementation=artifact.qualified_name,
                methods=len(artifact.member_declarations),
            )

        reporter = self._context.reporter
        if isinstance(reporter, DiagnosticCollector):
            report.diagnostics = reporter.diagnostics
        return report

    def _generate_one(self, interface: DaoInterfaceDefinition) -> GeneratedArtifact | None:
        with StructlogAdapter.bound(interface=interface.qualified_name):
            try:
                return self._generator.generate(interface)
            except NamingCollisionException as exc:
                self._context.skip(DiagnosticKind.NAMING_COLLISION, interface.qualified_name, str(exc))
                logger.warning("interface_skipped", reason="naming_collision")
                return None
