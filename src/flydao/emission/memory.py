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
"""In-memory emission backend."""

from __future__ import annotations

from flydao.emission.renderer import ArtifactRenderer
from flydao.model.artifact import GeneratedArtifact


class InMemoryEmissionBackend:
    """Keep rendered sources keyed by module name instead of writing files."""

    def __init__(self, renderer: ArtifactRenderer | None = None) -> None:
        self._renderer = renderer if renderer is not None else ArtifactRenderer()
        self.sources: dict[str, str] = {}
        self.artifacts: list[GeneratedArtifact] = []

    def emit(self, artifact: GeneratedArtifact) -> None:
        self.sources[artifact.module_name] = self._renderer.render(artifact)
        self.artifacts.append(artifact)
