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
"""Tests for artifact rendering and the emission backends."""

from __future__ import annotations

import ast

import pytest

from flydao.emission import ArtifactRenderer, EmissionBackend, FileEmissionBackend, InMemoryEmissionBackend
from flydao.generator.orchestrator import ASYNC_SESSION
from flydao.kernel.exceptions import EmissionException
from flydao.model.artifact import GeneratedArtifact, ImportSpec, MemberDeclaration


@pytest.fixture
def artifact() -> GeneratedArtifact:
    return GeneratedArtifact(
        implementation_name="UserDao_Impl",
        interface_name="UserDao",
        namespace="shop.daos",
        session_types=(ASYNC_SESSION,),
        constructor_statements=("self._count_statement = text('SELECT count(*) FROM users')",),
        member_declarations=(
            MemberDeclaration(
                "count",
                "async def count(self) -> int:\n"
                "    session = self._session\n"
                "    result = await session.execute(self._count_statement, {})\n"
                "    return result.scalar_one()",
            ),
        ),
        imports=(ImportSpec("shop.daos", "UserDao"), ImportSpec("sqlalchemy", "text"), ASYNC_SESSION),
    )


class TestArtifactRenderer:
    def test_rendered_source_is_valid_python(self, artifact):
        source = ArtifactRenderer().render(artifact)
        tree = ast.parse(source)
        (cls,) = [node for node in tree.body if isinstance(node, ast.ClassDef)]
        assert cls.name == "UserDao_Impl"
        assert [base.id for base in cls.bases] == ["UserDao"]
        assert [n.name for n in cls.body if isinstance(n, ast.AsyncFunctionDef | ast.FunctionDef)] == [
            "__init__",
            "count",
        ]

    def test_constructor_takes_session(self, artifact):
        source = ArtifactRenderer().render(artifact)
        assert "    def __init__(self, session: AsyncSession) -> None:\n" in source
        assert "        self._session = session\n" in source
        assert "        self._count_statement = text('SELECT count(*) FROM users')\n" in source

    def test_header(self, artifact):
        source = ArtifactRenderer(header="do not touch").render(artifact)
        assert source.startswith("# do not touch\n# Implements shop.daos.UserDao\n")

    def test_import_lines_grouped_by_module(self, artifact):
        assert ArtifactRenderer.import_lines(artifact) == [
            "from shop.daos import UserDao",
            "from sqlalchemy import text",
            "from sqlalchemy.ext.asyncio import AsyncSession",
        ]

    def test_untyped_session_falls_back_to_any(self):
        bare = GeneratedArtifact("PingDao_Impl", "PingDao", "shop.daos")
        source = ArtifactRenderer().render(bare)
        assert "from typing import Any" in source
        assert "def __init__(self, session: Any) -> None:" in source
        ast.parse(source)


class TestFileEmissionBackend:
    def test_writes_module_next_to_interface_package(self, artifact, tmp_path):
        backend = FileEmissionBackend(tmp_path)
        backend.emit(artifact)
        path = tmp_path / "shop" / "user_dao_impl.py"
        assert backend.written == [path]
        assert path.read_text(encoding="utf-8").startswith("# Generated by flydao. Do not edit.")

    def test_unwritable_output_is_fatal(self, artifact, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        backend = FileEmissionBackend(blocker)
        with pytest.raises(EmissionException) as exc_info:
            backend.emit(artifact)
        assert exc_info.value.code == "EMISSION_WRITE"
        assert backend.written == []

    def test_satisfies_port(self, tmp_path):
        assert isinstance(FileEmissionBackend(tmp_path), EmissionBackend)


class TestInMemoryEmissionBackend:
    def test_keeps_sources_by_module(self, artifact):
        backend = InMemoryEmissionBackend()
        backend.emit(artifact)
        assert list(backend.sources) == ["shop.user_dao_impl"]
        assert backend.artifacts == [artifact]
        assert isinstance(backend, EmissionBackend)
