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
"""Implementation Name Registry shared by interface generation passes."""

from __future__ import annotations

import logging
import threading

from flydao.kernel.exceptions import NamingCollisionException

logger = logging.getLogger(__name__)


class ImplementationNameRegistry:
    """Write-once mapping from interface qualified name to implementation qualified name.

    Passes running concurrently may register disjoint keys: writes are
    append-only under a single lock and an existing key is never revisited.
    A key that is already set, or an implementation name already claimed by
    another key, raises :class:`NamingCollisionException`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._implementations: dict[str, str] = {}
        self._claimed: dict[str, str] = {}

    def register(self, interface: str, implementation: str) -> None:
        with self._lock:
            owner = self._claimed.get(implementation)
            if interface in self._implementations or owner is not None:
                raise NamingCollisionException(
                    f"Implementation name {implementation} for {interface} is already claimed"
                    + (f" by {owner}" if owner is not None and owner != interface else ""),
                    code="NAMING_COLLISION",
                    context={"interface": interface, "implementation": implementation},
                )
            self._implementations[interface] = implementation
            self._claimed[implementation] = interface
        logger.debug("Registered %s -> %s", interface, implementation)

    def resolve(self, interface: str) -> str | None:
        """Return the implementation registered for *interface*, if any."""
        with self._lock:
            return self._implementations.get(interface)

    def __contains__(self, interface: object) -> bool:
        with self._lock:
            return interface in self._implementations

    def __len__(self) -> int:
        with self._lock:
            return len(self._implementations)

    def items(self) -> list[tuple[str, str]]:
        with self._lock:
            return sorted(self._implementations.items())
