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
"""Resolved type references used throughout the interface and entity models."""

from __future__ import annotations

from dataclasses import dataclass, field

# Generic containers of query rows. Abstract ones are materialised as ``list``.
SEQUENCE_TYPES: frozenset[str] = frozenset({
    "list",
    "tuple",
    "set",
    "frozenset",
    "collections.abc.Sequence",
    "collections.abc.Iterable",
    "collections.abc.Collection",
    "typing.Sequence",
    "typing.Iterable",
    "typing.List",
    "typing.Collection",
})

SCALAR_TYPES: frozenset[str] = frozenset({
    "int",
    "float",
    "str",
    "bool",
    "bytes",
    "decimal.Decimal",
    "datetime.date",
    "datetime.datetime",
    "datetime.time",
    "uuid.UUID",
})

# Raw result handles that generated code returns unconverted.
RESULT_TYPES: frozenset[str] = frozenset({
    "sqlalchemy.engine.Result",
    "sqlalchemy.engine.result.Result",
    "sqlalchemy.engine.CursorResult",
    "sqlalchemy.engine.cursor.CursorResult",
})


@dataclass(frozen=True)
class TypeRef:
    """A resolved type: a name, the module defining it, and generic arguments.

    Builtins carry ``module=None``. ``X | None`` is normalised to
    ``TypeRef("Optional", args=(X,))``.
    """

    name: str
    module: str | None = None
    args: tuple[TypeRef, ...] = field(default=())

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}" if self.module else self.name

    @property
    def is_none(self) -> bool:
        return self.name == "None" and self.module is None

    @property
    def is_optional(self) -> bool:
        return self.name == "Optional" and self.module is None and len(self.args) == 1

    @property
    def is_sequence(self) -> bool:
        return self.qualified_name in SEQUENCE_TYPES and len(self.args) >= 1

    @property
    def is_scalar(self) -> bool:
        return self.qualified_name in SCALAR_TYPES

    @property
    def is_result(self) -> bool:
        return self.qualified_name in RESULT_TYPES

    def unwrap_optional(self) -> TypeRef:
        """Return the wrapped type for ``X | None``, otherwise ``self``."""
        return self.args[0] if self.is_optional else self

    @property
    def is_homogeneous_tuple(self) -> bool:
        """``tuple[X, ...]`` or ``tuple[X]``; fixed-length tuples of several types are not."""
        if self.qualified_name != "tuple":
            return False
        return len(self.args) == 1 or (len(self.args) == 2 and self.args[1] == ELLIPSIS)

    def element(self) -> TypeRef:
        """Return the element type of a sequence type."""
        if not self.is_sequence:
            raise ValueError(f"{self.render()} is not a sequence type")
        return self.args[0]

    def render(self) -> str:
        """Render as annotation source text, e.g. ``list[User]`` or ``User | None``."""
        if self.is_optional:
            return f"{self.args[0].render()} | None"
        if self.name == "Union" and self.module is None:
            return " | ".join(arg.render() for arg in self.args)
        if self.args:
            rendered = ", ".join(arg.render() for arg in self.args)
            return f"{self.name}[{rendered}]"
        return self.name

    def imports(self) -> set[tuple[str, str]]:
        """``(module, name)`` pairs needed to reference this type in source."""
        needed: set[tuple[str, str]] = set()
        if self.module and self.module != "builtins":
            # nested classes are reached through their outermost class
            needed.add((self.module, self.name.split(".")[0]))
        for arg in self.args:
            needed |= arg.imports()
        return needed

    def __str__(self) -> str:
        return self.render()


NONE = TypeRef("None")

# The ``...`` in ``tuple[X, ...]``.
ELLIPSIS = TypeRef("...")


def optional(inner: TypeRef) -> TypeRef:
    return TypeRef("Optional", args=(inner,))


def list_of(inner: TypeRef) -> TypeRef:
    return TypeRef("list", args=(inner,))
