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
"""Generator Orchestrator: assemble one implementation per DAO interface."""

from __future__ import annotations

import structlog

from flydao.generator.context import SKIPPED, GenerationContext
from flydao.generator.factory import build_method_generator
from flydao.model.artifact import (
    GeneratedArtifact,
    ImportSpec,
    MemberDeclaration,
    MethodFragment,
    implementation_module_for,
    implementation_name_for,
)
from flydao.model.dao import DaoInterfaceDefinition

ASYNC_SESSION = ImportSpec("sqlalchemy.ext.asyncio", "AsyncSession")
SYNC_SESSION = ImportSpec("sqlalchemy.orm", "Session")

logger = structlog.get_logger("flydao.generator")


class DaoImplementationGenerator:
    """Generates the implementation of a ``@dao`` interface.

    For each method carrying a query intent a Method Generator is built; a
    method whose generator is skipped is left out and never affects its
    siblings. Fragments are folded in declaration order into one immutable
    :class:`GeneratedArtifact`: a private session field, a constructor that
    takes the session and runs every contributed init statement, and the
    contributed members.
    """

    def __init__(self, context: GenerationContext) -> None:
        self._context = context

    def generate(self, interface: DaoInterfaceDefinition) -> GeneratedArtifact:
        """Claim the implementation's importable path, then assemble the artifact.

        The claimed path is where emission places the class, so two interfaces
        whose implementations would land in the same module collide here.

        Raises:
            NamingCollisionException: the implementation name is already claimed.
        """
        implementation_name = implementation_name_for(interface.name)
        module = implementation_module_for(interface.namespace, implementation_name)
        qualified = f"{module}.{implementation_name}"
        self._context.registry.register(interface.qualified_name, qualified)
        return self.assemble(interface)

    def assemble(self, interface: DaoInterfaceDefinition) -> GeneratedArtifact:
        """Build the artifact for *interface* without touching the registry."""
        contributions: list[tuple[bool, MethodFragment]] = []
        for method in interface.methods:
            generator = build_method_generator(interface, method, self._context)
            if generator is None:
                continue
            if generator is SKIPPED:
                logger.info("method_skipped", interface=interface.name, method=method.name)
                continue
            contributions.append((method.is_async, generator.fragment()))

        artifact = self._fold(interface, contributions)
        logger.debug(
            "interface_assembled",
            interface=interface.qualified_name,
            implementation=artifact.implementation_name,
            methods=len(artifact.member_declarations),
        )
        return artifact

    def _fold(
        self,
        interface: DaoInterfaceDefinition,
        contributions: list[tuple[bool, MethodFragment]],
    ) -> GeneratedArtifact:
        init_statements: list[str] = []
        members: list[MemberDeclaration] = []
        imports: set[ImportSpec] = set()
        for _, fragment in contributions:
            init_statements.extend(fragment.init_statements)
            members.extend(fragment.members)
            imports |= fragment.imports

        session_types = self._session_types([is_async for is_async, _ in contributions])
        imports |= set(session_types)
        if interface.namespace:
            imports.add(ImportSpec(interface.namespace, interface.name.split(".")[0]))

        return GeneratedArtifact(
            implementation_name=implementation_name_for(interface.name),
            interface_name=interface.name,
            namespace=interface.namespace,
            session_field_name=self._context.session_field_name,
            session_types=session_types,
            constructor_statements=tuple(init_statements),
            member_declarations=tuple(members),
            imports=tuple(sorted(imports)),
        )

    @staticmethod
    def _session_types(asyncs: list[bool]) -> tuple[ImportSpec, ...]:
        if all(asyncs):
            return (ASYNC_SESSION,)
        if not any(asyncs):
            return (SYNC_SESSION,)
        return (ASYNC_SESSION, SYNC_SESSION)
