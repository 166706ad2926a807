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
"""flydao Generator — per-method generators and the implementation orchestrator."""

from flydao.generator.context import SKIPPED, GenerationContext, Skip
from flydao.generator.diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticKind,
    DiagnosticReporter,
)
from flydao.generator.factory import build_method_generator, register_generator
from flydao.generator.method import DaoMethodGenerator, ReturnShape
from flydao.generator.orchestrator import DaoImplementationGenerator
from flydao.generator.persist import PersistMethodGenerator
from flydao.generator.query import AdHocQueryMethodGenerator
from flydao.generator.registry import ImplementationNameRegistry

__all__ = [
    "SKIPPED",
    "AdHocQueryMethodGenerator",
    "DaoImplementationGenerator",
    "DaoMethodGenerator",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticKind",
    "DiagnosticReporter",
    "GenerationContext",
    "ImplementationNameRegistry",
    "PersistMethodGenerator",
    "ReturnShape",
    "Skip",
    "build_method_generator",
    "register_generator",
]
