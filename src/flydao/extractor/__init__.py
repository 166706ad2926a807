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
"""flydao Extractor — resolve marked Python declarations into the flydao model."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from types import ModuleType

from flydao.declarations import is_dao, is_entity
from flydao.extractor.entity import EntityExtractor
from flydao.extractor.interface import InterfaceModelExtractor
from flydao.extractor.types import type_ref
from flydao.model.dao import DaoInterfaceDefinition
from flydao.model.entity import EntityDefinition


@dataclass
class DiscoveredDeclarations:
    """Entities and DAO interfaces found in a set of modules."""

    entities: list[EntityDefinition] = field(default_factory=list)
    interfaces: list[DaoInterfaceDefinition] = field(default_factory=list)


def discover(*modules: ModuleType) -> DiscoveredDeclarations:
    """Extract every ``@entity`` and ``@dao`` class defined in *modules*.

    Classes merely imported into a module are skipped so that each
    declaration is extracted once, from its defining module.
    """
    entity_extractor = EntityExtractor()
    interface_extractor = InterfaceModelExtractor()
    found = DiscoveredDeclarations()
    seen: set[type] = set()
    for module in modules:
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj in seen or obj.__module__ != module.__name__:
                continue
            seen.add(obj)
            if is_entity(obj):
                found.entities.append(entity_extractor.extract(obj))
            elif is_dao(obj):
                found.interfaces.append(interface_extractor.extract(obj))
    return found


__all__ = [
    "DiscoveredDeclarations",
    "EntityExtractor",
    "InterfaceModelExtractor",
    "discover",
    "type_ref",
]
