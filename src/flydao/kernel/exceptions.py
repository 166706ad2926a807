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
"""Unified exception hierarchy for flydao.

All generator exceptions inherit from FlyDaoException, enabling unified
error handling across stages.

Categories:
- InvalidDeclarationException: Entity or interface declarations that cannot be modelled
- GenerationException: Interface-scoped generation failures (e.g. naming collisions)
- InfrastructureException: Failures outside the generator core, such as emission

Per-method problems are never raised: they are filed with the diagnostic
reporter and the method is left out of the generated implementation.
"""

from __future__ import annotations


class FlyDaoException(Exception):
    """Base exception for all flydao errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "NAMING_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InvalidDeclarationException(FlyDaoException):
    """An entity or DAO declaration cannot be turned into a model."""


class GenerationException(FlyDaoException):
    """Generation of one interface was aborted."""


class NamingCollisionException(GenerationException):
    """The implementation name computed for an interface is already claimed."""


class InfrastructureException(FlyDaoException):
    """Failures in collaborators around the generator core."""


class EmissionException(InfrastructureException):
    """A generated artifact could not be rendered or persisted."""
