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
"""Redis-backed cache engine."""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any


class RedisCacheEngine:
    """Cache engine that delegates to a ``redis.asyncio.Redis``-like client.

    Values are JSON-serialized before storage so that any JSON-compatible
    Python object can be cached transparently. Values that are not JSON
    serializable raise ``TypeError``; the facade reports it as an engine error.
    """

    def __init__(self, client: Any, namespace: str = "", default_ttl: timedelta | None = None) -> None:
        self._client = client
        self._namespace = namespace
        self._default_ttl = default_ttl

    async def get(self, key: str) -> Any | None:
        raw = await self._client.get(self._namespace + key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> Any:
        """Serialize and store a value; expiry is sent as milliseconds."""
        raw = json.dumps(value)
        ttl = ttl if ttl is not None else self._default_ttl
        px = max(1, int(ttl.total_seconds() * 1000)) if ttl is not None else None
        await self._client.set(self._namespace + key, raw.encode(), px=px)
        return value

    async def delete(self, key: str) -> None:
        await self._client.delete(self._namespace + key)

    async def clear(self) -> None:
        """Delete every key under this engine's namespace via SCAN."""
        keys = [key async for key in self._client.scan_iter(match=f"{self._namespace}*")]
        if keys:
            await self._client.delete(*keys)

    async def start(self) -> None:
        """Validate connectivity by pinging Redis."""
        await self._client.ping()

    async def stop(self) -> None:
        """Close the underlying Redis connection."""
        await self._client.aclose()
