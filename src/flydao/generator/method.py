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
"""Method Generator base: one subclass per query intent.

A generator is built from a single :class:`DaoMethodDefinition`. Building
validates the method's shape for its intent; an invalid shape files a
diagnostic and yields :data:`SKIPPED` instead of a generator. A built
generator contributes an immutable :class:`MethodFragment`: constructor
statements that prepare its own state, the method declaration itself, and the
imports the generated source needs.

Generated bodies follow one pattern::

    async def find_by_name(self, name: str) -> list[User]:
        session = self._session
        result = await session.execute(self._find_by_name_statement, {"name": name})
        return [User(id=row["id"], name=row["name"]) for row in result.mappings()]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from flydao.generator.context import GenerationContext, Skipped
from flydao.generator.diagnostics import DiagnosticKind
from flydao.model.artifact import ImportSpec, MemberDeclaration, MethodFragment
from flydao.model.dao import DaoInterfaceDefinition, DaoMethodDefinition, QueryIntent
from flydao.model.entity import EntityDefinition
from flydao.model.types import TypeRef

INDENT = "    "

TEXT_IMPORT = ImportSpec("sqlalchemy", "text")


class ReturnShape(Enum):
    NONE = "none"
    RESULT = "result"
    ONE = "one"
    MANY = "many"
    SCALAR = "scalar"
    SCALARS = "scalars"


# Concrete containers generated code builds; every other sequence type gets a list.
_CONTAINERS = {"tuple": "tuple", "set": "set", "frozenset": "frozenset"}
# Entity instances are not required to be hashable.
_HASHED_CONTAINERS = frozenset({"set", "frozenset"})


@dataclass(frozen=True)
class ReturnPlan:
    """How a declared return type is produced from a statement result."""

    shape: ReturnShape
    element: TypeRef | None = None
    entity: EntityDefinition | None = None
    optional: bool = False
    container: str = "list"

    def collect(self, items: str) -> str:
        """Expression building the declared container from the generator *items*."""
        if self.container == "list":
            return f"[{items}]"
        return f"{self.container}({items})"


def plan_return(return_type: TypeRef, context: GenerationContext) -> ReturnPlan | None:
    """Classify *return_type*; ``None`` means no conversion can produce it."""
    if return_type.is_none:
        return ReturnPlan(ReturnShape.NONE)
    if return_type.is_result:
        return ReturnPlan(ReturnShape.RESULT)

    inner = return_type.unwrap_optional()
    entity = context.entity_for(inner)
    if entity is not None:
        return ReturnPlan(ReturnShape.ONE, inner, entity, optional=return_type.is_optional)
    if inner.is_scalar:
        return ReturnPlan(ReturnShape.SCALAR, inner, optional=return_type.is_optional)

    if not return_type.is_sequence:
        return None
    if return_type.qualified_name == "tuple" and not return_type.is_homogeneous_tuple:
        return None
    container = _CONTAINERS.get(return_type.qualified_name, "list")
    element = return_type.element()
    entity = context.entity_for(element)
    if entity is not None:
        if container in _HASHED_CONTAINERS:
            return None
        return ReturnPlan(ReturnShape.MANY, element, entity, container=container)
    if element.is_scalar:
        return ReturnPlan(ReturnShape.SCALARS, element, container=container)
    return None


def entity_from_row(entity: EntityDefinition, row: str) -> str:
    """Constructor call building *entity* from the mapping named *row*."""
    args = ", ".join(f'{f.name}={row}["{f.column}"]' for f in entity.fields if f.init)
    return f"{entity.name}({args})"


class DaoMethodGenerator(ABC):
    """Generates the implementation of one DAO method for one query intent."""

    intent_type: ClassVar[type]

    def __init__(
        self,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
    ) -> None:
        self.interface = interface
        self.method = method
        self.context = context

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def build(
        cls,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
    ) -> DaoMethodGenerator | Skipped:
        """Validate *method* for this intent and return a generator, or skip."""
        ...

    @staticmethod
    def malformed(
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
        message: str,
    ) -> Skipped:
        return context.skip(DiagnosticKind.MALFORMED_METHOD, f"{interface.name}.{method.name}", message)

    # ------------------------------------------------------------------
    # Contributions
    # ------------------------------------------------------------------

    @abstractmethod
    def contribute_constructor_init(self) -> tuple[str, ...]:
        """Statements run once when the implementation is constructed."""
        ...

    @abstractmethod
    def contribute_members(self) -> tuple[MemberDeclaration, ...]:
        """Member declarations implementing the method."""
        ...

    def required_imports(self) -> frozenset[ImportSpec]:
        specs = {ImportSpec(module, name) for module, name in self.method.return_type.imports()}
        for param in self.method.parameters:
            specs |= {ImportSpec(module, name) for module, name in param.type.imports()}
        return frozenset(specs)

    def fragment(self) -> MethodFragment:
        return MethodFragment(
            init_statements=self.contribute_constructor_init(),
            members=self.contribute_members(),
            imports=self.required_imports(),
        )

    # ------------------------------------------------------------------
    # Source helpers
    # ------------------------------------------------------------------

    @property
    def intent(self) -> QueryIntent:
        assert self.method.intent is not None
        return self.method.intent

    @property
    def statement_attribute(self) -> str:
        return f"_{self.method.name}_statement"

    def local_name(self, name: str) -> str:
        """A local variable name that does not shadow a method parameter."""
        taken = {p.name for p in self.method.parameters}
        while name in taken:
            name += "_"
        return name

    def execute_call(self, session: str, params: str) -> str:
        call = f"{session}.execute(self.{self.statement_attribute}, {params})"
        return f"await {call}" if self.method.is_async else call

    def declare(self, body: list[str]) -> MemberDeclaration:
        """Wrap body lines in the method's signature."""
        lines = [self.method.signature] + [INDENT + line if line else line for line in body]
        return MemberDeclaration(name=self.method.name, source="\n".join(lines))

    def session_binding(self) -> tuple[str, str]:
        """``(local name, binding statement)`` for the shared session handle."""
        session = self.local_name("session")
        return session, f"{session} = self.{self.context.session_attribute}"
