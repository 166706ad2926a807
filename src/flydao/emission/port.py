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
"""EmissionBackend — the port through which generated artifacts leave the generator."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from flydao.model.artifact import GeneratedArtifact


@runtime_checkable
class EmissionBackend(Protocol):
    """Turns an artifact into a compilable unit and persists it.

    Implementations raise :class:`~flydao.kernel.exceptions.EmissionException`
    when the artifact cannot be persisted.
    """

    def emit(self, artifact: GeneratedArtifact) -> None: ...
