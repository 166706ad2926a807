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
"""flydao Model — immutable descriptions of entities, DAO interfaces, and generated artifacts.

The model is the seam between declaration resolving (``flydao.extractor``)
and generation (``flydao.generator``): extractors produce it, generators only
read it.
"""

from flydao.model.artifact import (
    GeneratedArtifact,
    ImportSpec,
    MemberDeclaration,
    MethodFragment,
    implementation_module_for,
    implementation_name_for,
)
from flydao.model.dao import (
    AdHocQuery,
    DaoInterfaceDefinition,
    DaoMethodDefinition,
    Parameter,
    Persist,
    QueryIntent,
)
from flydao.model.entity import EntityDefinition, FieldDefinition
from flydao.model.types import ELLIPSIS, NONE, TypeRef, list_of, optional

__all__ = [
    "AdHocQuery",
    "DaoInterfaceDefinition",
    "DaoMethodDefinition",
    "ELLIPSIS",
    "EntityDefinition",
    "FieldDefinition",
    "GeneratedArtifact",
    "ImportSpec",
    "MemberDeclaration",
    "MethodFragment",
    "NONE",
    "Parameter",
    "Persist",
    "QueryIntent",
    "TypeRef",
    "implementation_module_for",
    "implementation_name_for",
    "list_of",
    "optional",
]
