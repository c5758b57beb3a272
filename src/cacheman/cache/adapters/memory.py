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
"""In-process cache engine."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Any


class InMemoryCache:
    """Dictionary-backed engine with per-entry expiry.

    Suitable for development, testing, and single-process applications.
    Every instance owns its store; the namespace only matters for
    :meth:`clear`, which leaves foreign keys alone.
    """

    def __init__(self, namespace: str = "", default_ttl: timedelta | None = None) -> None:
        self._namespace = namespace
        self._default_ttl = default_ttl
        self._store: dict[str, tuple[Any, float | None]] = {}

    async def get(self, key: str) -> Any | None:
        """Return the value, or None if missing or expired."""
        full_key = self._namespace + key
        entry = self._store.get(full_key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() > expires_at:
            del self._store[full_key]
            return None
        return value

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> Any:
        ttl = ttl if ttl is not None else self._default_ttl
        expires_at = None
        if ttl is not None:
            expires_at = time.monotonic() + ttl.total_seconds()
        self._store[self._namespace + key] = (value, expires_at)
        return value

    async def delete(self, key: str) -> None:
        self._store.pop(self._namespace + key, None)

    async def clear(self) -> None:
        """Remove every entry in this engine's namespace."""
        for full_key in [k for k in self._store if k.startswith(self._namespace)]:
            del self._store[full_key]

    async def start(self) -> None:
        """No-op -- the store is ready after construction."""

    async def stop(self) -> None:
        """No-op -- nothing to release."""
