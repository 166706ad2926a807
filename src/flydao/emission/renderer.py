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
"""Jinja2 rendering of generated artifacts into Python modules."""

from __future__ import annotations

from collections import defaultdict

from jinja2 import Environment, PackageLoader, TemplateError

from flydao.kernel.exceptions import EmissionException
from flydao.model.artifact import GeneratedArtifact, ImportSpec

DEFAULT_HEADER = "Generated by flydao. Do not edit."


class ArtifactRenderer:
    """Render a :class:`GeneratedArtifact` as Python module source."""

    TEMPLATE = "dao_impl.py.j2"

    def __init__(self, header: str = DEFAULT_HEADER) -> None:
        self._header = header
        self._env = Environment(
            loader=PackageLoader("flydao.emission", "templates"),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, artifact: GeneratedArtifact) -> str:
        try:
            template = self._env.get_template(self.TEMPLATE)
            return template.render(
                artifact=artifact,
                header=self._header,
                import_lines=self.import_lines(artifact),
            )
        except TemplateError as exc:
            raise EmissionException(
                f"Cannot render {artifact.qualified_name}: {exc}",
                code="EMISSION_RENDER",
                context={"artifact": artifact.qualified_name},
            ) from exc

    @staticmethod
    def import_lines(artifact: GeneratedArtifact) -> list[str]:
        """One ``from ... import ...`` line per module, names sorted."""
        specs = list(artifact.imports)
        if not artifact.session_types:
            specs.append(ImportSpec("typing", "Any"))
        grouped: dict[str, set[str]] = defaultdict(set)
        for spec in specs:
            grouped[spec.module].add(spec.name)
        return [f"from {module} import {', '.join(sorted(names))}" for module, names in sorted(grouped.items())]
