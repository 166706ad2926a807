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
"""Persist variant: write one entity record per invocation."""

from __future__ import annotations

from flydao.generator.context import GenerationContext, Skipped
from flydao.generator.method import TEXT_IMPORT, DaoMethodGenerator, ReturnShape, plan_return
from flydao.model.artifact import ImportSpec, MemberDeclaration
from flydao.model.dao import DaoInterfaceDefinition, DaoMethodDefinition, Persist
from flydao.model.entity import EntityDefinition

# Write-outcome conversions keyed by the declared return type.
_OUTCOMES: dict[str, str] = {
    "bool": "{result}.rowcount == 1",
    "int": "{result}.rowcount",
}


class PersistMethodGenerator(DaoMethodGenerator):
    """Generates ``INSERT`` methods for ``@persist`` declarations.

    The method must take exactly one parameter typed as the target entity.
    It may return nothing, a ``bool`` (one row written), an ``int`` (rows
    written) or the raw result.
    """

    intent_type = Persist

    def __init__(
        self,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
        entity: EntityDefinition,
    ) -> None:
        super().__init__(interface, method, context)
        self.entity = entity

    @classmethod
    def build(
        cls,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
    ) -> DaoMethodGenerator | Skipped:
        intent = method.intent
        assert isinstance(intent, Persist)

        entity = context.entity_for(intent.target)
        if entity is None:
            return cls.malformed(interface, method, context, f"{intent.target} is not a known entity")
        if len(method.parameters) != 1 or method.parameters[0].variadic:
            return cls.malformed(
                interface, method, context,
                f"persist methods take exactly one {entity.name} parameter, found {len(method.parameters)}",
            )
        param = method.parameters[0]
        if param.type.qualified_name != entity.qualified_name:
            return cls.malformed(
                interface, method, context,
                f"parameter '{param.name}' is {param.type}, expected entity {entity.name}",
            )

        plan = plan_return(method.return_type, context)
        allowed = plan is not None and plan.shape in (ReturnShape.NONE, ReturnShape.RESULT)
        if not allowed and method.return_type.qualified_name not in _OUTCOMES:
            return cls.malformed(
                interface, method, context,
                f"persist methods return None, bool, int or a Result, not {method.return_type}",
            )
        return cls(interface, method, context, entity)

    def insert_sql(self) -> str:
        columns = ", ".join(f.column for f in self.entity.fields)
        values = ", ".join(f":{f.name}" for f in self.entity.fields)
        return f"INSERT INTO {self.entity.table} ({columns}) VALUES ({values})"

    def contribute_constructor_init(self) -> tuple[str, ...]:
        return (f"self.{self.statement_attribute} = text({self.insert_sql()!r})",)

    def contribute_members(self) -> tuple[MemberDeclaration, ...]:
        arg = self.method.parameters[0].name
        session, binding = self.session_binding()
        params = "{" + ", ".join(f'"{f.name}": {arg}.{f.getter}' for f in self.entity.fields) + "}"
        call = self.execute_call(session, params)

        body = [binding]
        rt = self.method.return_type
        if rt.is_none:
            body.append(call)
        elif rt.is_result:
            body.append(f"return {call}")
        else:
            result = self.local_name("result")
            body.append(f"{result} = {call}")
            body.append("return " + _OUTCOMES[rt.qualified_name].format(result=result))
        return (self.declare(body),)

    def required_imports(self) -> frozenset[ImportSpec]:
        own = {TEXT_IMPORT}
        if self.entity.module:
            own.add(ImportSpec(self.entity.module, self.entity.name.split(".")[0]))
        return super().required_imports() | own
