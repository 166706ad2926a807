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
"""Generated artifact: the assembled implementation of one DAO interface."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

IMPLEMENTATION_SUFFIX = "_Impl"

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def implementation_name_for(interface_name: str) -> str:
    """``UserDao`` -> ``UserDao_Impl``; nested interfaces use their own name."""
    return interface_name.rpartition(".")[2] + IMPLEMENTATION_SUFFIX


def implementation_module_for(namespace: str, implementation_name: str) -> str:
    """Module an implementation is emitted into: the interface's package plus the snake-cased name.

    ``("app.daos", "UserDao_Impl")`` -> ``app.user_dao_impl``.
    """
    package = namespace.rpartition(".")[0]
    leaf = to_snake_case(implementation_name)
    return f"{package}.{leaf}" if package else leaf


def to_snake_case(name: str) -> str:
    """``UserDao_Impl`` -> ``user_dao_impl``."""
    return _CAMEL_BOUNDARY_RE.sub("_", name).replace("__", "_").lower()


@dataclass(frozen=True, order=True)
class ImportSpec:
    """``from <module> import <name>``."""

    module: str
    name: str

    def render(self) -> str:
        return f"from {self.module} import {self.name}"


@dataclass(frozen=True)
class MemberDeclaration:
    """A member of the generated class; ``source`` is unindented Python."""

    name: str
    source: str


@dataclass(frozen=True)
class MethodFragment:
    """Everything one method generator contributes to the artifact."""

    init_statements: tuple[str, ...] = ()
    members: tuple[MemberDeclaration, ...] = ()
    imports: frozenset[ImportSpec] = frozenset()


@dataclass(frozen=True)
class GeneratedArtifact:
    """The fully assembled implementation unit for one DAO interface."""

    implementation_name: str
    interface_name: str
    namespace: str
    session_field_name: str = "session"
    session_types: tuple[ImportSpec, ...] = ()
    constructor_statements: tuple[str, ...] = ()
    member_declarations: tuple[MemberDeclaration, ...] = ()
    imports: tuple[ImportSpec, ...] = field(default=())

    @property
    def session_attribute(self) -> str:
        """Private attribute holding the session on generated instances."""
        return "_" + self.session_field_name

    @property
    def qualified_name(self) -> str:
        """Importable dotted path of the implementation class."""
        return f"{self.module_name}.{self.implementation_name}"

    @property
    def package(self) -> str:
        """Package containing the interface's module."""
        return self.namespace.rpartition(".")[0]

    @property
    def module_name(self) -> str:
        """Dotted name of the module the implementation is emitted into."""
        return implementation_module_for(self.namespace, self.implementation_name)

    @property
    def member_names(self) -> tuple[str, ...]:
        return tuple(m.name for m in self.member_declarations)

    @property
    def session_annotation(self) -> str:
        return " | ".join(spec.name for spec in self.session_types) or "Any"
