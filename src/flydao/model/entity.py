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
"""Entity model: the mapped shape of a plain value type."""

from __future__ import annotations

from dataclasses import dataclass, field

from flydao.kernel.exceptions import InvalidDeclarationException
from flydao.model.types import TypeRef


@dataclass(frozen=True)
class FieldDefinition:
    """One mapped field of an entity.

    ``accessor_names`` lists the attributes through which the field is read;
    the first one is used by generated code. ``init=False`` fields are
    written on persist but not passed to the entity constructor.
    """

    name: str
    type: TypeRef
    column: str = ""
    accessor_names: tuple[str, ...] = ()
    init: bool = True

    def __post_init__(self) -> None:
        if not self.column:
            object.__setattr__(self, "column", self.name)
        if not self.accessor_names:
            object.__setattr__(self, "accessor_names", (self.name,))

    @property
    def getter(self) -> str:
        return self.accessor_names[0]


@dataclass(frozen=True)
class EntityDefinition:
    """An entity type and its ordered fields."""

    name: str
    fields: tuple[FieldDefinition, ...]
    module: str | None = None
    table: str = ""
    _by_name: dict[str, FieldDefinition] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        by_name: dict[str, FieldDefinition] = {}
        for f in self.fields:
            if f.name in by_name:
                raise InvalidDeclarationException(
                    f"Duplicate field '{f.name}' in entity {self.name}",
                    code="ENTITY_DUPLICATE_FIELD",
                    context={"entity": self.name, "field": f.name},
                )
            by_name[f.name] = f
        object.__setattr__(self, "_by_name", by_name)
        if not self.table:
            object.__setattr__(self, "table", self.name.rpartition(".")[2].lower() + "s")

    @property
    def type_ref(self) -> TypeRef:
        return TypeRef(self.name, self.module)

    @property
    def qualified_name(self) -> str:
        return self.type_ref.qualified_name

    def field(self, name: str) -> FieldDefinition | None:
        """Look up a field by name."""
        return self._by_name.get(name)
