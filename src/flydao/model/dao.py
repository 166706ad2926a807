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
"""DAO interface model: methods, parameters, and their query intents."""

from __future__ import annotations

from dataclasses import dataclass

from flydao.model.types import NONE, TypeRef


@dataclass(frozen=True)
class Persist:
    """Write one record built from an entity instance."""

    target: TypeRef

    marker = "persist"


@dataclass(frozen=True)
class AdHocQuery:
    """Run a literal query text; ``result`` is the declared row element type, if any."""

    text: str
    result: TypeRef | None = None

    marker = "query"


QueryIntent = Persist | AdHocQuery


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeRef
    variadic: bool = False


@dataclass(frozen=True)
class DaoMethodDefinition:
    """A method of a DAO interface.

    ``intent`` is the first recognised marker in precedence order; ``markers``
    names every recognised marker found, so that conflicting declarations can
    be rejected by the generator layer.
    """

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef = NONE
    intent: QueryIntent | None = None
    markers: tuple[str, ...] = ()
    is_async: bool = False

    def __post_init__(self) -> None:
        if self.intent is not None and not self.markers:
            object.__setattr__(self, "markers", (self.intent.marker,))

    @property
    def signature(self) -> str:
        """Render the method signature as source text, ``self`` first."""
        params = ["self"]
        for p in self.parameters:
            prefix = "*" if p.variadic else ""
            params.append(f"{prefix}{p.name}: {p.type.render()}")
        keyword = "async def" if self.is_async else "def"
        return f"{keyword} {self.name}({', '.join(params)}) -> {self.return_type.render()}:"


@dataclass(frozen=True)
class DaoInterfaceDefinition:
    """A DAO interface: its name, namespace (defining module), and methods."""

    name: str
    namespace: str
    methods: tuple[DaoMethodDefinition, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name
