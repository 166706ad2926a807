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
"""Hand-built models shared by the generator tests."""

from __future__ import annotations

from flydao.generator.context import GenerationContext
from flydao.generator.diagnostics import DiagnosticCollector
from flydao.model.dao import AdHocQuery, DaoInterfaceDefinition, DaoMethodDefinition, Parameter, Persist
from flydao.model.entity import EntityDefinition, FieldDefinition
from flydao.model.types import NONE, TypeRef, list_of

STR = TypeRef("str")
INT = TypeRef("int")

USER_ENTITY = EntityDefinition(
    "User",
    (
        FieldDefinition("id", INT),
        FieldDefinition("name", STR),
        FieldDefinition("email", STR, column="email_address"),
    ),
    table="users",
)
WIDGET_ENTITY = EntityDefinition("Widget", (FieldDefinition("id", INT), FieldDefinition("label", STR)))
USER = USER_ENTITY.type_ref
WIDGET = WIDGET_ENTITY.type_ref


def make_context() -> GenerationContext:
    return GenerationContext([USER_ENTITY, WIDGET_ENTITY], reporter=DiagnosticCollector())


def save_method(name: str = "save", param_type: TypeRef = USER, target: TypeRef = USER) -> DaoMethodDefinition:
    return DaoMethodDefinition(
        name=name,
        parameters=(Parameter("u", param_type),),
        return_type=NONE,
        intent=Persist(target),
    )


def find_method(name: str = "find_by_query", sql: str = "SELECT * FROM users WHERE name = ?") -> DaoMethodDefinition:
    return DaoMethodDefinition(
        name=name,
        parameters=(Parameter("text", STR),),
        return_type=list_of(USER),
        intent=AdHocQuery(sql, USER),
    )


def interface(
    *methods: DaoMethodDefinition, name: str = "UserDao", namespace: str = "app.daos"
) -> DaoInterfaceDefinition:
    return DaoInterfaceDefinition(name=name, namespace=namespace, methods=tuple(methods))
