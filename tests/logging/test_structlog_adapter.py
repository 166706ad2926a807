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
"""Tests for StructlogAdapter."""

from __future__ import annotations

import logging

import pytest
import structlog

from flydao.core.config import Config
from flydao.logging.port import LoggingPort
from flydao.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestStructlogAdapter:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.defaults())
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"
        assert logging.getLogger().level == logging.INFO

    def test_configure_reads_levels_and_format(self):
        adapter = StructlogAdapter()
        config = Config(
            {"flydao": {"logging": {"format": "JSON", "level": {"root": "debug", "flydao.generator": "warning"}}}}
        )
        adapter.configure(config)
        assert adapter._format == "json"
        assert adapter._root_level == "DEBUG"
        assert adapter._module_levels == {"flydao.generator": "WARNING"}
        assert logging.getLogger("flydao.generator").level == logging.WARNING

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("flydao.emission", "error")
        assert logging.getLogger("flydao.emission").level == logging.ERROR

    def test_get_logger(self):
        logger = StructlogAdapter().get_logger("flydao.test")
        assert callable(getattr(logger, "info", None))


class TestBoundContext:
    def test_values_bound_inside_block_only(self):
        with StructlogAdapter.bound(interface="app.UserDao"):
            assert structlog.contextvars.get_contextvars() == {"interface": "app.UserDao"}
        assert structlog.contextvars.get_contextvars() == {}
