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
"""Tests for the Lifecycle protocol and how the facade drives it."""

from __future__ import annotations

import pytest

from cacheman.cache.adapters.memory import InMemoryCache
from cacheman.cache.adapters.mongo import MongoCacheEngine
from cacheman.cache.adapters.redis import RedisCacheEngine
from cacheman.cache.facade import Cacheman
from cacheman.kernel.lifecycle import Lifecycle


class TrackingEngine(InMemoryCache):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    async def start(self) -> None:
        self.calls.append("start")

    async def stop(self) -> None:
        self.calls.append("stop")


class BareEngine:
    """Engine without start/stop."""

    async def get(self, key):
        return None

    async def set(self, key, value, ttl=None):
        return value

    async def delete(self, key):
        return None

    async def clear(self):
        return None


class TestLifecycleProtocol:
    def test_engines_are_lifecycle(self):
        assert issubclass(InMemoryCache, Lifecycle)
        assert issubclass(RedisCacheEngine, Lifecycle)
        assert issubclass(MongoCacheEngine, Lifecycle)

    def test_bare_engine_is_not_lifecycle(self):
        assert not isinstance(BareEngine(), Lifecycle)


class TestFacadeLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_starts_and_stops(self):
        engine = TrackingEngine()
        async with Cacheman(engine=engine):
            assert engine.calls == ["start"]
        assert engine.calls == ["start", "stop"]

    @pytest.mark.asyncio
    async def test_engine_without_lifecycle(self):
        async with Cacheman(engine=BareEngine()) as cache:
            assert await cache.wrap("k", "v") == "v"
