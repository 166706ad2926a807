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
"""Build :class:`EntityDefinition` values from ``@entity`` dataclasses."""

from __future__ import annotations

import dataclasses
from typing import get_type_hints

from flydao.declarations import ENTITY_ATTR
from flydao.extractor.types import type_ref
from flydao.kernel.exceptions import InvalidDeclarationException
from flydao.model.entity import EntityDefinition, FieldDefinition


class EntityExtractor:
    """Resolve an entity dataclass into its mapped shape.

    Fields keep their dataclass order. ``ClassVar`` and ``InitVar``
    pseudo-fields are not part of ``dataclasses.fields`` and are never mapped.
    """

    def extract(self, cls: type) -> EntityDefinition:
        if not dataclasses.is_dataclass(cls):
            raise InvalidDeclarationException(
                f"Entity {cls.__qualname__} must be a dataclass",
                code="ENTITY_NOT_DATACLASS",
                context={"entity": cls.__qualname__},
            )

        marker = getattr(cls, ENTITY_ATTR, None) or {}
        hints = get_type_hints(cls)
        fields = tuple(
            FieldDefinition(
                name=f.name,
                type=type_ref(hints.get(f.name, f.type)),
                column=f.metadata.get("column", f.name),
                accessor_names=(f.name,),
                init=f.init,
            )
            for f in dataclasses.fields(cls)
        )
        return EntityDefinition(
            name=cls.__qualname__,
            fields=fields,
            module=cls.__module__,
            table=marker.get("table") or "",
        )
