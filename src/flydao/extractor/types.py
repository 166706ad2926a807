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
"""Conversion of resolved Python annotations into :class:`TypeRef` values."""

from __future__ import annotations

import types
import typing
from typing import Any, Union, get_args, get_origin

from flydao.model.types import ELLIPSIS, NONE, TypeRef, optional


def type_ref(annotation: Any) -> TypeRef:
    """Convert a resolved annotation (as returned by ``get_type_hints``).

    Examples::

        type_ref(int)                 -> TypeRef("int")
        type_ref(list[User])          -> TypeRef("list", args=(TypeRef("User", "app.entities"),))
        type_ref(User | None)         -> TypeRef("Optional", args=(TypeRef("User", "app.entities"),))
        type_ref(tuple[int, ...])     -> TypeRef("tuple", args=(TypeRef("int"), ELLIPSIS))
        type_ref(Sequence[int])       -> TypeRef("Sequence", "collections.abc", (TypeRef("int"),))
    """
    if annotation is None or annotation is type(None):
        return NONE
    if annotation is Ellipsis:
        return ELLIPSIS
    if annotation is Any:
        return TypeRef("Any", "typing")
    if isinstance(annotation, str):
        # Unresolvable forward reference; keep the spelling.
        return TypeRef(annotation)
    if isinstance(annotation, typing.ForwardRef):
        return TypeRef(annotation.__forward_arg__)

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        nullable = len(members) != len(get_args(annotation))
        if len(members) == 1:
            inner = type_ref(members[0])
            return optional(inner) if nullable else inner
        union = TypeRef("Union", args=tuple(type_ref(m) for m in members))
        return optional(union) if nullable else union

    if origin is not None:
        base = _class_ref(origin)
        return TypeRef(base.name, base.module, tuple(type_ref(arg) for arg in get_args(annotation)))

    if isinstance(annotation, type):
        return _class_ref(annotation)

    return TypeRef(repr(annotation))


def _class_ref(cls: type) -> TypeRef:
    module = cls.__module__
    if module == "builtins":
        return TypeRef(cls.__qualname__)
    return TypeRef(cls.__qualname__, module)
