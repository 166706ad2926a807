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
"""A DAO interface mixing valid and malformed methods."""

from __future__ import annotations

from typing import Protocol

from flydao import dao, persist, query
from sample_app.entities import User, Widget


@dao
class BrokenDao(Protocol):
    @persist(User)
    async def save_widget(self, x: Widget) -> None: ...

    @persist(User)
    @query("SELECT 1")
    async def both(self, user: User) -> None: ...

    @query("SELECT * FROM users WHERE id = ?")
    async def wrong_arity(self) -> list[User]: ...

    @query("SELECT * FROM users")
    async def find_all(self) -> list[User]: ...
