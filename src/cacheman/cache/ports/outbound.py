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
"""Cache engine port."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheEngine(Protocol):
    """Storage engine behind the Cacheman facade.

    Keys arrive without a namespace; each engine prefixes them with its own.
    ``None`` is the only value meaning "absent". A ``ttl`` of ``None`` means
    the engine applies its configured default.
    """

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: timedelta | None = None) -> Any: ...

    async def delete(self, key: str) -> None: ...

    async def clear(self) -> None: ...
