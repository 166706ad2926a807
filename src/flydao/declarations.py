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
"""Declaration markers for entities and DAO interfaces.

Markers only stamp metadata on the decorated object; they never change its
behaviour. The extractors in :mod:`flydao.extractor` read the metadata at
generation time.

Usage::

    from dataclasses import dataclass

    from flydao import dao, entity, persist, query


    @entity(table="users")
    @dataclass
    class User:
        id: int
        name: str


    @dao
    class UserDao(Protocol):

        @persist(User)
        async def save(self, user: User) -> None: ...

        @query("SELECT * FROM users WHERE name = ?")
        async def find_by_name(self, name: str) -> list[User]: ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

ENTITY_ATTR = "__flydao_entity__"
DAO_ATTR = "__flydao_dao__"
PERSIST_ATTR = "__flydao_persist__"
QUERY_ATTR = "__flydao_query__"
QUERY_RESULT_ATTR = "__flydao_query_result__"

# Sentinel stored by ``@persist`` without an explicit entity.
INFER_FROM_PARAMETER = object()


def entity(cls: type[T] | None = None, *, table: str | None = None) -> Any:
    """Mark a dataclass as an entity mapped to *table*.

    ``table`` defaults to the lower-cased class name plus ``s``. Column names
    can be overridden per field with ``field(metadata={"column": "..."})``.
    Usable bare (``@entity``) or with arguments (``@entity(table="users")``).
    """

    def decorator(target: type[T]) -> type[T]:
        setattr(target, ENTITY_ATTR, {"table": table})
        return target

    if cls is not None:
        return decorator(cls)
    return decorator


def dao(cls: type[T]) -> type[T]:
    """Mark an interface class for implementation generation."""
    setattr(cls, DAO_ATTR, True)
    return cls


def persist(entity_type: type | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method that writes one *entity_type* record per call.

    Without *entity_type* the target entity is the type of the method's
    single parameter.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, PERSIST_ATTR, entity_type if entity_type is not None else INFER_FROM_PARAMETER)
        return func

    return decorator


def query(text: str, *, result: type | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Mark a method that runs the literal query *text*.

    Parameters are bound to ``?`` placeholders positionally, in declaration
    order, or by name to ``:param`` placeholders. *result* declares the row
    element type; it defaults to the element of the return annotation.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(func, QUERY_ATTR, text)
        setattr(func, QUERY_RESULT_ATTR, result)
        return func

    return decorator


def is_entity(obj: Any) -> bool:
    return isinstance(obj, type) and ENTITY_ATTR in vars(obj)


def is_dao(obj: Any) -> bool:
    return isinstance(obj, type) and DAO_ATTR in vars(obj)
