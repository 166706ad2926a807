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
"""Tests for the entity and interface extractors."""

from __future__ import annotations

from typing import Protocol

import pytest

from flydao import dao, persist, query
from flydao.extractor import EntityExtractor, InterfaceModelExtractor, discover
from flydao.kernel.exceptions import InvalidDeclarationException
from flydao.model.dao import AdHocQuery, Persist
from flydao.model.types import ELLIPSIS, NONE, TypeRef, list_of, optional
from sample_app import broken, daos, entities
from sample_app.entities import NotAnEntity, User

USER = TypeRef("User", "sample_app.entities")


class TestEntityExtractor:
    def test_fields_in_declaration_order(self):
        entity = EntityExtractor().extract(User)
        assert [f.name for f in entity.fields] == ["id", "name", "email"]
        assert entity.table == "users"
        assert entity.module == "sample_app.entities"

    def test_column_override_from_metadata(self):
        entity = EntityExtractor().extract(User)
        assert entity.field("email").column == "email_address"
        assert entity.field("email").type == optional(TypeRef("str"))

    def test_default_table(self):
        assert EntityExtractor().extract(entities.Widget).table == "widgets"

    def test_non_dataclass_rejected(self):
        class Plain:
            id: int

        with pytest.raises(InvalidDeclarationException):
            EntityExtractor().extract(Plain)


class TestInterfaceModelExtractor:
    def test_unmarked_methods_are_ignored(self):
        interface = InterfaceModelExtractor().extract(daos.UserDao)
        assert "ping" not in [m.name for m in interface.methods]

    def test_name_and_namespace(self):
        interface = InterfaceModelExtractor().extract(daos.UserDao)
        assert interface.name == "UserDao"
        assert interface.namespace == "sample_app.daos"

    def test_declaration_order(self):
        interface = InterfaceModelExtractor().extract(daos.UserDao)
        assert [m.name for m in interface.methods] == [
            "save", "insert", "find_by_name", "find_by_id", "count", "names", "delete",
        ]

    def test_persist_intent(self):
        save = InterfaceModelExtractor().extract(daos.UserDao).methods[0]
        assert save.intent == Persist(USER)
        assert save.return_type == NONE
        assert save.is_async
        assert [(p.name, p.type) for p in save.parameters] == [("user", USER)]

    def test_persist_target_inferred_from_parameter(self):
        insert = InterfaceModelExtractor().extract(daos.UserDao).methods[1]
        assert insert.intent == Persist(USER)

    def test_query_intent(self):
        methods = {m.name: m for m in InterfaceModelExtractor().extract(daos.UserDao).methods}
        assert methods["find_by_name"].intent == AdHocQuery("SELECT * FROM users WHERE name = ?")
        assert methods["find_by_name"].return_type == list_of(USER)
        assert methods["find_by_id"].intent == AdHocQuery("SELECT * FROM users WHERE id = :id", USER)

    def test_sync_methods(self):
        interface = InterfaceModelExtractor().extract(daos.WidgetDao)
        assert not any(m.is_async for m in interface.methods)

    def test_all_markers_recorded_in_precedence_order(self):
        methods = {m.name: m for m in InterfaceModelExtractor().extract(broken.BrokenDao).methods}
        both = methods["both"]
        assert both.markers == ("persist", "query")
        assert isinstance(both.intent, Persist)

    def test_variadic_parameters_flagged(self):
        @dao
        class VarDao(Protocol):
            @query("SELECT 1")
            def run(self, *args: int) -> None: ...

        method = InterfaceModelExtractor().extract(VarDao).methods[0]
        assert method.parameters[0].variadic

    def test_missing_return_annotation_is_none(self):
        @dao
        class LooseDao(Protocol):
            @persist(User)
            def save(self, user: User): ...

        assert InterfaceModelExtractor().extract(LooseDao).methods[0].return_type == NONE

    def test_variable_length_tuple_return(self):
        @dao
        class LabelDao(Protocol):
            @query("SELECT label FROM widgets")
            def labels(self) -> tuple[str, ...]: ...

        return_type = InterfaceModelExtractor().extract(LabelDao).methods[0].return_type
        assert return_type == TypeRef("tuple", args=(TypeRef("str"), ELLIPSIS))
        assert return_type.render() == "tuple[str, ...]"

    def test_annotation_failing_to_evaluate_keeps_spelling(self):
        @dao
        class OddDao(Protocol):
            @query("SELECT 1")
            def odd(self) -> int | "Widget": ...

        return_type = InterfaceModelExtractor().extract(OddDao).methods[0].return_type
        assert return_type.module is None
        assert return_type.name.startswith("int | ")
        assert "Widget" in return_type.name


class TestDiscover:
    def test_finds_entities_and_interfaces(self):
        found = discover(entities, daos)
        assert sorted(e.name for e in found.entities) == ["User", "Widget"]
        assert sorted(i.name for i in found.interfaces) == ["UserDao", "WidgetDao"]

    def test_imported_declarations_not_duplicated(self):
        found = discover(daos)
        assert found.entities == []

    def test_unmarked_dataclass_ignored(self):
        found = discover(entities)
        assert NotAnEntity.__name__ not in [e.name for e in found.entities]
