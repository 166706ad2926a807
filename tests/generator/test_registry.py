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
"""Tests for ImplementationNameRegistry."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from flydao.generator.registry import ImplementationNameRegistry
from flydao.kernel.exceptions import NamingCollisionException


class TestRegistry:
    def test_register_and_resolve(self):
        registry = ImplementationNameRegistry()
        registry.register("app.UserDao", "app.UserDao_Impl")
        assert registry.resolve("app.UserDao") == "app.UserDao_Impl"
        assert "app.UserDao" in registry
        assert len(registry) == 1

    def test_unknown_key_resolves_to_none(self):
        assert ImplementationNameRegistry().resolve("app.Missing") is None

    def test_key_is_write_once(self):
        registry = ImplementationNameRegistry()
        registry.register("app.UserDao", "app.UserDao_Impl")
        with pytest.raises(NamingCollisionException) as exc_info:
            registry.register("app.UserDao", "app.UserDao_Impl")
        assert exc_info.value.code == "NAMING_COLLISION"
        assert registry.resolve("app.UserDao") == "app.UserDao_Impl"

    def test_claimed_implementation_name_rejected(self):
        registry = ImplementationNameRegistry()
        registry.register("app.UserDao", "app.UserDao_Impl")
        with pytest.raises(NamingCollisionException, match="already claimed by app.UserDao"):
            registry.register("app.Other", "app.UserDao_Impl")

    def test_concurrent_disjoint_keys(self):
        registry = ImplementationNameRegistry()
        names = [f"app.Dao{i}" for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda n: registry.register(n, n + "_Impl"), names))
        assert len(registry) == 200
        assert registry.items() == sorted((n, n + "_Impl") for n in names)
