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
"""Tests for RedisCacheEngine using a FakeRedis stub."""

from __future__ import annotations

import fnmatch
from collections.abc import AsyncIterator
from datetime import timedelta

import pytest

from cacheman.cache.adapters.redis import RedisCacheEngine
from cacheman.cache.facade import Cacheman
from cacheman.cache.ports.outbound import CacheEngine
from cacheman.kernel.exceptions import CacheEngineException, ValidationException
from cacheman.kernel.lifecycle import Lifecycle


class FakeRedis:
    """Minimal in-memory stub matching the redis.asyncio.Redis interface."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.expiries: dict[str, int | None] = {}
        self.pinged = False
        self.closed = False

    async def get(self, key: str) -> bytes | None:
        return self._store.get(key)

    async def set(self, key: str, value: bytes, ex: int | None = None, px: int | None = None) -> None:
        self._store[key] = value
        self.expiries[key] = px

    async def delete(self, *keys: str) -> int:
        count = 0
        for k in keys:
            if k in self._store:
                del self._store[k]
                count += 1
        return count

    async def scan_iter(self, match: str = "*", count: int | None = None) -> AsyncIterator[str]:
        for key in list(self._store):
            if fnmatch.fnmatchcase(key, match):
                yield key

    async def ping(self) -> bool:
        self.pinged = True
        return True

    async def aclose(self) -> None:
        self.closed = True


class TestRedisCacheEngine:
    def test_protocol_compliance(self):
        engine = RedisCacheEngine(FakeRedis())
        assert isinstance(engine, CacheEngine)
        assert isinstance(engine, Lifecycle)

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        engine = RedisCacheEngine(FakeRedis())
        assert await engine.set("key", {"name": "Alice", "age": 30}) == {"name": "Alice", "age": 30}
        assert await engine.get("key") == {"name": "Alice", "age": 30}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [0, False, ""])
    async def test_falsy_values_survive_json(self, value):
        engine = RedisCacheEngine(FakeRedis())
        await engine.set("key", value)
        result = await engine.get("key")
        assert result == value
        assert type(result) is type(value)

    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        engine = RedisCacheEngine(FakeRedis())
        assert await engine.get("no-such-key") is None

    @pytest.mark.asyncio
    async def test_keys_are_namespaced(self):
        client = FakeRedis()
        engine = RedisCacheEngine(client, namespace="cacheman:users:")
        await engine.set("42", "alice")
        assert list(client._store) == ["cacheman:users:42"]
        assert client._store["cacheman:users:42"] == b'"alice"'

    @pytest.mark.asyncio
    async def test_ttl_sent_in_milliseconds(self):
        client = FakeRedis()
        engine = RedisCacheEngine(client, default_ttl=timedelta(seconds=60))
        await engine.set("a", 1)
        await engine.set("b", 1, ttl=timedelta(milliseconds=1500))
        assert client.expiries == {"a": 60000, "b": 1500}

    @pytest.mark.asyncio
    async def test_sub_millisecond_ttl_rounds_up(self):
        client = FakeRedis()
        engine = RedisCacheEngine(client)
        await engine.set("a", 1, ttl=timedelta(microseconds=200))
        assert client.expiries == {"a": 1}

    @pytest.mark.asyncio
    async def test_no_ttl_means_no_expiry(self):
        client = FakeRedis()
        engine = RedisCacheEngine(client)
        await engine.set("a", 1)
        assert client.expiries == {"a": None}

    @pytest.mark.asyncio
    async def test_delete(self):
        engine = RedisCacheEngine(FakeRedis())
        await engine.set("key", "value")
        await engine.delete("key")
        assert await engine.get("key") is None

    @pytest.mark.asyncio
    async def test_clear_only_removes_namespace(self):
        client = FakeRedis()
        client._store["other:key"] = b"1"
        engine = RedisCacheEngine(client, namespace="cacheman:cache:")
        await engine.set("a", 1)
        await engine.set("b", 2)
        await engine.clear()
        assert list(client._store) == ["other:key"]

    @pytest.mark.asyncio
    async def test_start_pings_and_stop_closes(self):
        client = FakeRedis()
        engine = RedisCacheEngine(client)
        await engine.start()
        await engine.stop()
        assert client.pinged is True
        assert client.closed is True


class TestRedisThroughFacade:
    @pytest.mark.asyncio
    async def test_wrap_and_pull(self):
        cache = Cacheman("testing", engine=RedisCacheEngine(FakeRedis(), namespace="cacheman:testing:"))
        assert await cache.wrap("k", {"name": "Bob"}) == {"name": "Bob"}
        assert await cache.pull("k") == {"name": "Bob"}
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_unserializable_value_is_engine_error(self):
        cache = Cacheman(engine=RedisCacheEngine(FakeRedis()))
        with pytest.raises(CacheEngineException) as exc_info:
            await cache.set("k", object())
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.asyncio
    async def test_corrupt_payload_is_engine_error(self):
        client = FakeRedis()
        client._store["k"] = b"not-json"
        cache = Cacheman(engine=RedisCacheEngine(client))
        with pytest.raises(CacheEngineException):
            await cache.get("k")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ttl", [0, -5, timedelta(0)])
    async def test_non_positive_ttl_never_reaches_redis(self, ttl):
        client = FakeRedis()
        cache = Cacheman(engine=RedisCacheEngine(client))
        with pytest.raises(ValidationException):
            await cache.set("k", 1, ttl=ttl)
        assert client.expiries == {}
        assert client._store == {}
