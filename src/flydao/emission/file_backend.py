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
"""Emission backend writing generated modules to disk."""

from __future__ import annotations

import logging
from pathlib import Path

from flydao.emission.renderer import ArtifactRenderer
from flydao.kernel.exceptions import EmissionException
from flydao.model.artifact import GeneratedArtifact

logger = logging.getLogger(__name__)


class FileEmissionBackend:
    """Write each artifact to ``<output_dir>/<package path>/<module>.py``.

    With ``output_dir`` pointing at the source root the implementation lands
    next to the interface it implements.
    """

    def __init__(self, output_dir: str | Path, renderer: ArtifactRenderer | None = None) -> None:
        self._output_dir = Path(output_dir)
        self._renderer = renderer if renderer is not None else ArtifactRenderer()
        self.written: list[Path] = []

    def path_for(self, artifact: GeneratedArtifact) -> Path:
        return self._output_dir.joinpath(*artifact.module_name.split(".")).with_suffix(".py")

    def emit(self, artifact: GeneratedArtifact) -> None:
        source = self._renderer.render(artifact)
        path = self.path_for(artifact)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        except OSError as exc:
            raise EmissionException(
                f"Cannot write {artifact.qualified_name} to {path}: {exc}",
                code="EMISSION_WRITE",
                context={"artifact": artifact.qualified_name, "path": str(path)},
            ) from exc
        self.written.append(path)
        logger.info("Wrote %s to %s", artifact.qualified_name, path)
