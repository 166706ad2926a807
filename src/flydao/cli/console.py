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
"""Shared Rich console for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from flydao.generator.diagnostics import Diagnostic
from flydao.model.artifact import GeneratedArtifact

FLYDAO_THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "flydao": "bold magenta",
    "dim": "dim",
})

console = Console(theme=FLYDAO_THEME)


def print_artifact_table(artifacts: list[GeneratedArtifact]) -> None:
    """Print one row per generated implementation."""
    table = Table(title="[flydao]Generated implementations[/flydao]", border_style="dim")
    table.add_column("Interface", style="info")
    table.add_column("Implementation", style="bold")
    table.add_column("Module")
    table.add_column("Methods", justify="right")
    for artifact in artifacts:
        table.add_row(
            f"{artifact.namespace}.{artifact.interface_name}",
            artifact.implementation_name,
            artifact.module_name,
            str(len(artifact.member_declarations)),
        )
    console.print(table)


def print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        return
    console.print(f"\n  [error]{len(diagnostics)} diagnostic(s):[/error]")
    for diagnostic in diagnostics:
        console.print(f"    [error]✗[/error] [dim]{diagnostic.kind.value}[/dim] {diagnostic}")
