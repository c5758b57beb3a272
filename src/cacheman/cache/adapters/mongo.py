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
"""MongoDB-backed cache engine (motor)."""

from __future__ import annotations

import re
import time
from datetime import timedelta
from typing import Any


class MongoCacheEngine:
    """Cache engine storing one document per key in a motor collection.

    Documents look like ``{"_id": key, "value": value, "expire": epoch | None}``.
    Expired documents are removed lazily, when they are read.
    """

    def __init__(
        self,
        collection: Any,
        namespace: str = "",
        default_ttl: timedelta | None = None,
        client: Any | None = None,
    ) -> None:
        self._collection = collection
        self._namespace = namespace
        self._default_ttl = default_ttl
        self._client = client

    async def get(self, key: str) -> Any | None:
        full_key = self._namespace + key
        doc = await self._collection.find_one({"_id": full_key})
        if doc is None:
            return None

        expire = doc.get("expire")
        if expire is not None and time.time() > expire:
            await self._collection.delete_one({"_id": full_key})
            return None
        return doc.get("value")

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> Any:
        full_key = self._namespace + key
        ttl = ttl if ttl is not None else self._default_ttl
        expire = time.time() + ttl.total_seconds() if ttl is not None else None
        await self._collection.replace_one(
            {"_id": full_key},
            {"_id": full_key, "value": value, "expire": expire},
            upsert=True,
        )
        return value

    async def delete(self, key: str) -> None:
        await self._collection.delete_one({"_id": self._namespace + key})

    async def clear(self) -> None:
        """Delete every document whose id starts with this engine's namespace."""
        await self._collection.delete_many({"_id": {"$regex": "^" + re.escape(self._namespace)}})

    async def start(self) -> None:
        """Validate connectivity with a ping when the engine owns its client."""
        if self._client is not None:
            await self._client.admin.command("ping")

    async def stop(self) -> None:
        if self._client is not None:
            self._client.close()
