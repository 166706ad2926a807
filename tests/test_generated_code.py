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
"""Generated implementations run against real SQLAlchemy sessions."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest
import sample_app.daos
import sample_app.entities
from sample_app.entities import User, Widget
from sqlalchemy import Result, create_engine, text
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import Session

from flydao import FileEmissionBackend, GenerationContext, GenerationProcessor, discover


def _load(path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(f"generated_{path.stem}", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def generated(tmp_path_factory) -> dict[str, ModuleType]:
    found = discover(sample_app.entities, sample_app.daos)
    backend = FileEmissionBackend(tmp_path_factory.mktemp("generated"))
    report = GenerationProcessor(GenerationContext(found.entities), backend).process(found.interfaces)
    assert report.ok
    return {path.stem: _load(path) for path in backend.written}


class TestAsyncUserDao:
    @pytest.fixture
    async def dao(self, generated):
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        async with AsyncSession(engine) as session:
            await session.execute(
                text("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email_address TEXT)")
            )
            yield generated["user_dao_impl"].UserDao_Impl(session)
        await engine.dispose()

    async def test_implements_interface(self, dao):
        assert sample_app.daos.UserDao in type(dao).__mro__
        assert type(dao).__name__ == "UserDao_Impl"

    async def test_persist_and_query_round_trip(self, dao):
        assert await dao.save(User(1, "ada", "ada@example.com")) is None
        assert await dao.insert(User(2, "bob")) is True

        assert await dao.find_by_name("ada") == [User(1, "ada", "ada@example.com")]
        assert await dao.find_by_id(2) == User(2, "bob", None)
        assert await dao.find_by_id(99) is None
        assert await dao.count() == 2
        assert await dao.names() == ["ada", "bob"]

    async def test_delete(self, dao):
        await dao.save(User(1, "ada"))
        await dao.save(User(2, "bob"))
        assert await dao.delete(1) is None
        assert await dao.names() == ["bob"]


class TestSyncWidgetDao:
    @pytest.fixture
    def dao(self, generated):
        engine = create_engine("sqlite://")
        with Session(engine) as session:
            session.execute(text("CREATE TABLE widgets (id INTEGER PRIMARY KEY, label TEXT NOT NULL)"))
            yield generated["widget_dao_impl"].WidgetDao_Impl(session)
        engine.dispose()

    def test_rows_written(self, dao):
        assert dao.save(Widget(1, "bolt")) == 1
        assert dao.find_one("bolt") == Widget(1, "bolt")

    def test_required_row_missing(self, dao):
        with pytest.raises(NoResultFound):
            dao.find_one("nut")

    def test_raw_result(self, dao):
        dao.save(Widget(1, "bolt"))
        dao.save(Widget(2, "nut"))
        result = dao.raw()
        assert isinstance(result, Result)
        assert [tuple(row) for row in result] == [(1, "bolt"), (2, "nut")]

    def test_labels_collected_into_tuple(self, dao):
        dao.save(Widget(1, "nut"))
        dao.save(Widget(2, "bolt"))
        dao.save(Widget(3, " :unset"))
        assert dao.labels() == ("bolt", "nut")

    def test_optional_flag_is_bool(self, dao):
        dao.save(Widget(1, "bolt"))
        assert dao.has_label(1, "bolt") is True
        assert dao.has_label(1, "nut") is False
        assert dao.has_label(2, "bolt") is None


def test_generated_sources_are_stable(tmp_path):
    found = discover(sample_app.entities, sample_app.daos)
    sources = []
    for run in ("first", "second"):
        backend = FileEmissionBackend(tmp_path / run)
        GenerationProcessor(GenerationContext(found.entities), backend).process(found.interfaces)
        sources.append({p.name: p.read_text(encoding="utf-8") for p in backend.written})
    assert sources[0] == sources[1]
    assert set(sources[0]) == {"user_dao_impl.py", "widget_dao_impl.py"}
