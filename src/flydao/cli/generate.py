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
"""'flydao generate' and 'flydao inspect' commands."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from types import ModuleType

import click
from rich.table import Table

from flydao.cli.console import console, print_artifact_table, print_diagnostics
from flydao.config.properties.generator import GeneratorProperties
from flydao.core.config import Config
from flydao.emission.file_backend import FileEmissionBackend
from flydao.emission.renderer import ArtifactRenderer
from flydao.extractor import DiscoveredDeclarations, discover
from flydao.kernel.exceptions import EmissionException, InvalidDeclarationException
from flydao.logging.structlog_adapter import StructlogAdapter
from flydao.processor import GenerationProcessor


def _load_config(config_path: Path | None) -> Config:
    if config_path is not None:
        return Config.from_file(config_path)
    return Config.from_sources(Path.cwd())


def _import_modules(names: tuple[str, ...], search_paths: tuple[Path, ...]) -> list[ModuleType]:
    """Import user modules, failing with a readable message."""
    for path in reversed(search_paths):
        resolved = str(path.resolve())
        if resolved not in sys.path:
            sys.path.insert(0, resolved)
    modules: list[ModuleType] = []
    for name in names:
        try:
            modules.append(importlib.import_module(name))
        except ImportError as exc:
            console.print(f"[error]✗ Cannot import module '{name}': {exc}[/error]")
            raise SystemExit(1) from None
    return modules


def _discover(modules: list[ModuleType]) -> DiscoveredDeclarations:
    try:
        return discover(*modules)
    except InvalidDeclarationException as exc:
        console.print(f"[error]✗ {exc}[/error]")
        raise SystemExit(1) from None


_path_option = click.option(
    "--path",
    "search_paths",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to put on the import path before loading modules (repeatable).",
)


@click.command()
@click.argument("modules", nargs=-1, required=True)
@click.option("--entities", "entity_modules", multiple=True, help="Module defining @entity classes (repeatable).")
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root directory for generated modules (default: flydao.generator.output-dir).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: flydao.yaml / flydao.toml in the working directory).",
)
@click.option("--workers", type=int, default=None, help="Generate interfaces on this many threads.")
@_path_option
def generate_command(
    modules: tuple[str, ...],
    entity_modules: tuple[str, ...],
    output: Path | None,
    config_path: Path | None,
    workers: int | None,
    search_paths: tuple[Path, ...],
) -> None:
    """Generate implementations for the @dao interfaces in MODULES."""
    config = _load_config(config_path)
    StructlogAdapter().configure(config)
    properties = config.bind(GeneratorProperties)
    if output is not None:
        properties.output_dir = str(output)
    if workers is not None:
        properties.workers = workers

    loaded = _import_modules(tuple(dict.fromkeys(modules + entity_modules)), search_paths)
    found = _discover(loaded)
    if not found.interfaces:
        console.print("[warning]No @dao interfaces found.[/warning]")
        return

    backend = FileEmissionBackend(properties.output_dir, ArtifactRenderer(properties.header))
    processor = GenerationProcessor.from_properties(properties, found.entities, backend)
    try:
        report = processor.process(found.interfaces)
    except EmissionException as exc:
        console.print(f"[error]✗ {exc}[/error]")
        raise SystemExit(2) from None

    if report.artifacts:
        print_artifact_table(report.artifacts)
    print_diagnostics(report.diagnostics)
    if not report.ok:
        raise SystemExit(1)
    console.print(f"\n  [success]✓ Generated {len(report.artifacts)} implementation(s)[/success]")


@click.command()
@click.argument("modules", nargs=-1, required=True)
@_path_option
def inspect_command(modules: tuple[str, ...], search_paths: tuple[Path, ...]) -> None:
    """Show the entities and DAO methods flydao extracts from MODULES."""
    found = _discover(_import_modules(modules, search_paths))

    entities = Table(title="[flydao]Entities[/flydao]", border_style="dim")
    entities.add_column("Entity", style="info")
    entities.add_column("Table")
    entities.add_column("Fields")
    for entity in found.entities:
        entities.add_row(entity.qualified_name, entity.table, ", ".join(f.column for f in entity.fields))
    console.print(entities)

    methods = Table(title="[flydao]DAO methods[/flydao]", border_style="dim")
    methods.add_column("Interface", style="info")
    methods.add_column("Method", style="bold")
    methods.add_column("Markers")
    methods.add_column("Returns")
    for interface in found.interfaces:
        for method in interface.methods:
            methods.add_row(
                interface.qualified_name,
                method.name,
                ", ".join(method.markers),
                method.return_type.render(),
            )
    console.print(methods)
