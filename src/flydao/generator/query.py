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
"""AdHocQuery variant: run a literal query and map its rows."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from flydao.generator.context import GenerationContext, Skipped
from flydao.generator.method import (
    TEXT_IMPORT,
    DaoMethodGenerator,
    ReturnPlan,
    ReturnShape,
    entity_from_row,
    plan_return,
)
from flydao.model.artifact import ImportSpec, MemberDeclaration
from flydao.model.dao import AdHocQuery, DaoInterfaceDefinition, DaoMethodDefinition

_QUOTES = ("'", '"')


@dataclass
class Placeholders:
    """Bind placeholders of a query text, plus colons inside its quoted literals.

    ``quoted_colons`` holds the positions of ``:word`` sequences inside
    literals that SQLAlchemy's ``text()`` would still read as bind parameters.
    """

    positional: list[int] = field(default_factory=list)
    named: list[str] = field(default_factory=list)
    quoted_colons: list[int] = field(default_factory=list)


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _bind_name(sql: str, i: int) -> str | None:
    """Name ``text()`` binds for the colon at *i*, or ``None``.

    A colon binds when it does not follow a word character, a colon or a
    backslash, and the word after it is not followed by another colon.
    """
    if i > 0 and (sql[i - 1] in ":\\" or _is_word(sql[i - 1])):
        return None
    j = i + 1
    while j < len(sql) and _is_word(sql[j]):
        j += 1
    if j == i + 1 or (j < len(sql) and sql[j] == ":"):
        return None
    return sql[i + 1 : j]


def scan_placeholders(sql: str) -> Placeholders:
    """Find ``?`` and ``:name`` placeholders, ignoring quoted text and ``::`` casts."""
    found = Placeholders()
    quote: str | None = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote is not None:
            if ch == quote:
                # doubled quote is an escaped quote
                if i + 1 < len(sql) and sql[i + 1] == quote:
                    i += 1
                else:
                    quote = None
            elif ch == ":" and _bind_name(sql, i) is not None:
                found.quoted_colons.append(i)
        elif ch in _QUOTES:
            quote = ch
        elif ch == "?":
            found.positional.append(i)
        elif ch == ":":
            name = _bind_name(sql, i)
            if name is not None:
                found.named.append(name)
                i += len(name) + 1
                continue
        i += 1
    return found


def rewrite_placeholders(sql: str, placeholders: Placeholders, names: Sequence[str] = ()) -> str:
    """Bind the ``?`` placeholders to *names* in order and escape quoted colons as ``\\:``."""
    edits = [(pos, f":{name}") for pos, name in zip(placeholders.positional, names, strict=True)]
    edits += [(pos, "\\:") for pos in placeholders.quoted_colons]
    parts: list[str] = []
    last = 0
    for pos, replacement in sorted(edits):
        parts.append(sql[last:pos])
        parts.append(replacement)
        last = pos + 1
    parts.append(sql[last:])
    return "".join(parts)


class AdHocQueryMethodGenerator(DaoMethodGenerator):
    """Generates methods for ``@query`` declarations.

    The literal query text is prepared once in the constructor. Method
    parameters bind to ``?`` placeholders in declaration order, or by name to
    ``:param`` placeholders. Rows are converted according to the declared
    return type: nothing, the raw result, one entity, a collection of
    entities, a scalar, or a collection of scalars. Collections are built as
    the declared list, tuple, set or frozenset. Colons inside quoted literals
    are escaped so ``text()`` keeps them as text.
    """

    intent_type = AdHocQuery

    def __init__(
        self,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
        sql: str,
        bound: tuple[str, ...],
        plan: ReturnPlan,
    ) -> None:
        super().__init__(interface, method, context)
        self.sql = sql
        self.bound = bound
        self.plan = plan

    @classmethod
    def build(
        cls,
        interface: DaoInterfaceDefinition,
        method: DaoMethodDefinition,
        context: GenerationContext,
    ) -> DaoMethodGenerator | Skipped:
        intent = method.intent
        assert isinstance(intent, AdHocQuery)

        if any(p.variadic for p in method.parameters):
            return cls.malformed(interface, method, context, "query methods cannot take variadic parameters")

        param_names = [p.name for p in method.parameters]
        placeholders = scan_placeholders(intent.text)
        if placeholders.positional and placeholders.named:
            return cls.malformed(interface, method, context, "query mixes '?' and ':name' placeholders")
        if placeholders.positional:
            if len(placeholders.positional) != len(param_names):
                return cls.malformed(
                    interface, method, context,
                    f"query has {len(placeholders.positional)} '?' placeholders "
                    f"but the method takes {len(param_names)} parameters",
                )
            sql = rewrite_placeholders(intent.text, placeholders, param_names)
            bound = tuple(param_names)
        else:
            unknown = [name for name in placeholders.named if name not in param_names]
            if unknown:
                return cls.malformed(
                    interface, method, context, f"query references unknown parameters: {', '.join(unknown)}"
                )
            unused = [name for name in param_names if name not in placeholders.named]
            if unused:
                return cls.malformed(
                    interface, method, context, f"query does not reference parameters: {', '.join(unused)}"
                )
            sql = rewrite_placeholders(intent.text, placeholders)
            bound = tuple(dict.fromkeys(placeholders.named))

        plan = plan_return(method.return_type, context)
        if plan is None:
            return cls.malformed(
                interface, method, context, f"cannot produce {method.return_type} from query rows"
            )
        if intent.result is not None:
            if context.entity_for(intent.result) is None and not intent.result.is_scalar:
                return cls.malformed(
                    interface, method, context, f"result type {intent.result} is neither an entity nor a scalar"
                )
            if plan.element is not None and plan.element.qualified_name != intent.result.qualified_name:
                return cls.malformed(
                    interface, method, context,
                    f"declared result {intent.result} does not match return type {method.return_type}",
                )
        return cls(interface, method, context, sql, bound, plan)

    def contribute_constructor_init(self) -> tuple[str, ...]:
        return (f"self.{self.statement_attribute} = text({self.sql!r})",)

    def contribute_members(self) -> tuple[MemberDeclaration, ...]:
        session, binding = self.session_binding()
        params = "{" + ", ".join(f'"{name}": {name}' for name in self.bound) + "}"
        call = self.execute_call(session, params)

        body = [binding]
        shape = self.plan.shape
        if shape is ReturnShape.NONE:
            body.append(call)
            return (self.declare(body),)
        if shape is ReturnShape.RESULT:
            body.append(f"return {call}")
            return (self.declare(body),)

        result = self.local_name("result")
        row = self.local_name("row")
        body.append(f"{result} = {call}")
        if shape is ReturnShape.ONE:
            assert self.plan.entity is not None
            if self.plan.optional:
                body.append(f"{row} = {result}.mappings().first()")
                body.append(f"if {row} is None:")
                body.append("    return None")
            else:
                body.append(f"{row} = {result}.mappings().one()")
            body.append(f"return {entity_from_row(self.plan.entity, row)}")
        elif shape is ReturnShape.MANY:
            assert self.plan.entity is not None
            items = f"{entity_from_row(self.plan.entity, row)} for {row} in {result}.mappings()"
            body.append(f"return {self.plan.collect(items)}")
        elif shape is ReturnShape.SCALAR:
            assert self.plan.element is not None
            coerce = self.plan.element.qualified_name == "bool"
            if self.plan.optional and coerce:
                value = self.local_name("value")
                body.append(f"{value} = {result}.scalar_one_or_none()")
                body.append(f"return None if {value} is None else bool({value})")
            elif self.plan.optional:
                body.append(f"return {result}.scalar_one_or_none()")
            elif coerce:
                body.append(f"return bool({result}.scalar_one())")
            else:
                body.append(f"return {result}.scalar_one()")
        else:
            assert self.plan.element is not None
            if self.plan.element.qualified_name == "bool":
                value = self.local_name("value")
                items = f"bool({value}) for {value} in {result}.scalars()"
                body.append(f"return {self.plan.collect(items)}")
            else:
                body.append(f"return {self.plan.container}({result}.scalars().all())")
        return (self.declare(body),)

    def required_imports(self) -> frozenset[ImportSpec]:
        own = {TEXT_IMPORT}
        entity = self.plan.entity
        if entity is not None and entity.module:
            own.add(ImportSpec(entity.module, entity.name.split(".")[0]))
        return super().required_imports() | own
