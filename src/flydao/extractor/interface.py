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
"""Interface Model Extractor: classify DAO interface methods by query intent."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, get_type_hints

from flydao.declarations import (
    INFER_FROM_PARAMETER,
    PERSIST_ATTR,
    QUERY_ATTR,
    QUERY_RESULT_ATTR,
)
from flydao.extractor.types import type_ref
from flydao.model.dao import (
    AdHocQuery,
    DaoInterfaceDefinition,
    DaoMethodDefinition,
    Parameter,
    Persist,
    QueryIntent,
)
from flydao.model.types import NONE, TypeRef

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class InterfaceModelExtractor:
    """Read a DAO interface class into a :class:`DaoInterfaceDefinition`.

    Methods are visited in declaration order. Markers are inspected in the
    fixed precedence order of :attr:`MARKER_PRECEDENCE`; the first one found
    determines the method's intent, and every marker found is recorded so
    that conflicting declarations can be rejected downstream. Methods with no
    marker are ignored. This stage never fails on method shape.
    """

    MARKER_PRECEDENCE: tuple[str, ...] = ("persist", "query")

    def extract(self, cls: type) -> DaoInterfaceDefinition:
        methods: list[DaoMethodDefinition] = []
        for attr_name, attr in vars(cls).items():
            if attr_name.startswith("_") or not inspect.isfunction(attr):
                continue
            method = self._extract_method(attr)
            if method is None:
                logger.debug("Ignoring %s.%s: no query marker", cls.__qualname__, attr_name)
                continue
            methods.append(method)
        return DaoInterfaceDefinition(name=cls.__qualname__, namespace=cls.__module__, methods=tuple(methods))

    def _extract_method(self, func: Callable[..., Any]) -> DaoMethodDefinition | None:
        readers = {"persist": self._persist_intent, "query": self._query_intent}
        hints = self._resolve_hints(func)
        parameters = self._parameters(func, hints)

        intents: list[QueryIntent] = []
        for marker in self.MARKER_PRECEDENCE:
            intent = readers[marker](func, parameters)
            if intent is not None:
                intents.append(intent)
        if not intents:
            return None

        return DaoMethodDefinition(
            name=func.__name__,
            parameters=parameters,
            return_type=type_ref(hints["return"]) if "return" in hints else NONE,
            intent=intents[0],
            markers=tuple(intent.marker for intent in intents),
            is_async=inspect.iscoroutinefunction(func),
        )

    @staticmethod
    def _persist_intent(func: Callable[..., Any], parameters: tuple[Parameter, ...]) -> Persist | None:
        target = getattr(func, PERSIST_ATTR, None)
        if target is None:
            return None
        if target is INFER_FROM_PARAMETER:
            return Persist(parameters[0].type if parameters else NONE)
        return Persist(type_ref(target))

    @staticmethod
    def _query_intent(func: Callable[..., Any], parameters: tuple[Parameter, ...]) -> AdHocQuery | None:
        text = getattr(func, QUERY_ATTR, None)
        if text is None:
            return None
        result = getattr(func, QUERY_RESULT_ATTR, None)
        return AdHocQuery(text=text, result=type_ref(result) if result is not None else None)

    @staticmethod
    def _resolve_hints(func: Callable[..., Any]) -> dict[str, Any]:
        try:
            return get_type_hints(func)
        except (NameError, TypeError) as exc:
            # Keep the raw spellings; the generator layer reports unknown types.
            logger.debug("Cannot resolve annotations of %s: %s", func.__qualname__, exc)
            return dict(getattr(func, "__annotations__", {}))

    @staticmethod
    def _parameters(func: Callable[..., Any], hints: dict[str, Any]) -> tuple[Parameter, ...]:
        params = list(inspect.signature(func).parameters.values())[1:]  # drop self
        return tuple(
            Parameter(
                name=p.name,
                type=type_ref(hints[p.name]) if p.name in hints else TypeRef("Any", "typing"),
                variadic=p.kind in _VARIADIC_KINDS,
            )
            for p in params
        )
