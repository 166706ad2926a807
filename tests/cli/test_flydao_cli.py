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
"""Tests for the flydao CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from flydao.cli.main import cli

TESTS_DIR = Path(__file__).resolve().parent.parent


@pytest.fixture(autouse=True)
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each command from an empty directory and undo its logging setup afterwards."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _generate(*args: str):
    runner = CliRunner()
    return runner.invoke(cli, ["generate", *args, "--path", str(TESTS_DIR)])


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "DAO implementation generator" in result.output
        assert "generate" in result.output
        assert "inspect" in result.output


class TestGenerateCommand:
    def test_writes_implementations(self, workdir: Path):
        result = _generate("sample_app.daos", "--entities", "sample_app.entities", "-o", "out")
        assert result.exit_code == 0, result.output
        assert "Generated 2 implementation(s)" in result.output

        user_impl = workdir / "out" / "sample_app" / "user_dao_impl.py"
        assert user_impl.is_file()
        assert "class UserDao_Impl(UserDao):" in user_impl.read_text(encoding="utf-8")
        assert (workdir / "out" / "sample_app" / "widget_dao_impl.py").is_file()

    def test_diagnostics_fail_the_command(self, workdir: Path):
        result = _generate("sample_app.broken", "--entities", "sample_app.entities", "-o", "out")
        assert result.exit_code == 1
        assert "3 diagnostic(s)" in result.output
        assert "BrokenDao.both" in result.output
        assert (workdir / "out" / "sample_app" / "broken_dao_impl.py").is_file()

    def test_settings_from_config_file(self, workdir: Path):
        (workdir / "flydao.yaml").write_text(
            "flydao:\n  generator:\n    output-dir: gen\n    session-field: db\n",
            encoding="utf-8",
        )
        result = _generate("sample_app.daos", "--entities", "sample_app.entities")
        assert result.exit_code == 0, result.output
        source = (workdir / "gen" / "sample_app" / "user_dao_impl.py").read_text(encoding="utf-8")
        assert "self._db = db" in source

    def test_explicit_config_option(self, workdir: Path):
        config = workdir / "custom.toml"
        config.write_text('[flydao.generator]\noutput-dir = "toml-out"\nworkers = 2\n', encoding="utf-8")
        result = _generate("sample_app.daos", "--entities", "sample_app.entities", "--config", str(config))
        assert result.exit_code == 0, result.output
        assert (workdir / "toml-out" / "sample_app" / "user_dao_impl.py").is_file()

    def test_unwritable_output_aborts(self, workdir: Path):
        (workdir / "out").mkdir()
        (workdir / "out" / "sample_app").write_text("in the way", encoding="utf-8")
        result = _generate("sample_app.daos", "--entities", "sample_app.entities", "-o", "out")
        assert result.exit_code == 2
        assert "Cannot write" in result.output

    def test_unknown_module(self):
        result = _generate("sample_app.nope")
        assert result.exit_code == 1
        assert "Cannot import module 'sample_app.nope'" in result.output

    def test_module_without_interfaces(self):
        result = _generate("sample_app.entities")
        assert result.exit_code == 0
        assert "No @dao interfaces found." in result.output


class TestInspectCommand:
    def test_lists_entities_and_methods(self):
        result = CliRunner().invoke(
            cli, ["inspect", "sample_app.entities", "sample_app.daos", "--path", str(TESTS_DIR)]
        )
        assert result.exit_code == 0, result.output
        assert "users" in result.output
        assert "email_address" in result.output
        assert "find_by_name" in result.output
        assert "ping" not in result.output
