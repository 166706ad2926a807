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
"""flydao — generate DAO implementations from declarative interfaces.

Consumers declare entities and DAO interfaces with markers; flydao builds a
``<Interface>_Impl`` class per interface that holds a SQLAlchemy session and
implements every marked method with static, generated code.
"""

from flydao.declarations import dao, entity, persist, query
from flydao.emission import ArtifactRenderer, FileEmissionBackend, InMemoryEmissionBackend
from flydao.extractor import EntityExtractor, InterfaceModelExtractor, discover
from flydao.generator import (
    DaoImplementationGenerator,
    DiagnosticCollector,
    GenerationContext,
    ImplementationNameRegistry,
)
from flydao.processor import GenerationProcessor, GenerationReport

__version__ = "0.1.0"

__all__ = [
    "ArtifactRenderer",
    "DaoImplementationGenerator",
    "DiagnosticCollector",
    "EntityExtractor",
    "FileEmissionBackend",
    "GenerationContext",
    "GenerationProcessor",
    "GenerationReport",
    "ImplementationNameRegistry",
    "InMemoryEmissionBackend",
    "InterfaceModelExtractor",
    "__version__",
    "dao",
    "discover",
    "entity",
    "persist",
    "query",
]
