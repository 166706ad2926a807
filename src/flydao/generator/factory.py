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
"""Dispatch from query intent to Method Generator variant.

The table is open for extension: registering a new intent type with its
generator class makes the orchestrator handle it without changes.
"""

from __future__ import annotations

from flydao.generator.context import GenerationContext, Skipped
from flydao.generator.diagnostics import DiagnosticKind
from flydao.generator.method import DaoMethodGenerator
from flydao.generator.persist import PersistMethodGenerator
from flydao.generator.query import AdHocQueryMethodGenerator
from flydao.model.dao import DaoInterfaceDefinition, DaoMethodDefinition

_GENERATORS: dict[type, type[DaoMethodGenerator]] = {
    PersistMethodGenerator.intent_type: PersistMethodGenerator,
    AdHocQueryMethodGenerator.intent_type: AdHocQueryMethodGenerator,
}


def register_generator(intent_type: type, generator: type[DaoMethodGenerator]) -> None:
    """Route methods whose intent is an instance of *intent_type* to *generator*."""
    _GENERATORS[intent_type] = generator


def generator_for(intent_type: type) -> type[DaoMethodGenerator] | None:
    return _GENERATORS.get(intent_type)


def build_method_generator(
    interface: DaoInterfaceDefinition,
    method: DaoMethodDefinition,
    context: GenerationContext,
) -> DaoMethodGenerator | Skipped | None:
    """Classify *method* and build its generator.

    Returns ``None`` for a method without intent (nothing to generate, not an
    error), :data:`SKIPPED` when a diagnostic was filed, otherwise the
    generator.
    """
    if method.intent is None:
        return None

    element = f"{interface.name}.{method.name}"
    if len(method.markers) > 1:
        return context.skip(
            DiagnosticKind.AMBIGUOUS_INTENT,
            element,
            f"method carries more than one query marker ({', '.join(method.markers)}); keep exactly one",
        )

    generator = _GENERATORS.get(type(method.intent))
    if generator is None:
        return context.skip(
            DiagnosticKind.MALFORMED_METHOD, element, f"no generator for {type(method.intent).__name__}"
        )
    return generator.build(interface, method, context)
