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
"""Cacheman — awaitable facade over a pluggable cache engine."""

from __future__ import annotations

import asyncio
import dataclasses
import inspect
from collections.abc import Awaitable, Callable, Coroutine, Mapping, Sequence
from datetime import timedelta
from functools import partial
from typing import Any, TypeVar

import structlog

from cacheman.cache.factory import bind_properties, create_engine
from cacheman.cache.ports.outbound import CacheEngine
from cacheman.config.properties.cache import CacheProperties
from cacheman.core.config import Config
from cacheman.kernel.exceptions import (
    CacheEngineException,
    InvalidCacheKeyException,
    ValidationException,
)
from cacheman.kernel.lifecycle import Lifecycle
from cacheman.logging import configure_logging

logger = structlog.get_logger("cacheman.cache")

T = TypeVar("T")

TTL = int | float | timedelta | None


def _check_key(key: Any) -> str:
    if not isinstance(key, str) or not key:
        raise InvalidCacheKeyException(
            f"Cache key must be a non-empty string, got {key!r}",
            code="CACHE_INVALID_KEY",
            context={"key": repr(key)},
        )
    return key


def _key_list(keys: Any) -> list[str]:
    if not isinstance(keys, (list, tuple)):
        raise InvalidCacheKeyException(
            f"Expected a key or a list of keys, got {type(keys).__name__}",
            code="CACHE_INVALID_KEY",
            context={"key": repr(keys)},
        )
    return [_check_key(k) for k in keys]


def _to_timedelta(ttl: TTL) -> timedelta | None:
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        expires = ttl
    elif isinstance(ttl, (int, float)) and not isinstance(ttl, bool):
        expires = timedelta(seconds=ttl)
    else:
        raise ValidationException(
            f"TTL must be seconds or a timedelta, got {type(ttl).__name__}",
            code="CACHE_INVALID_TTL",
            context={"ttl": repr(ttl)},
        )
    if expires <= timedelta(0):
        raise ValidationException(
            f"TTL must be positive, got {ttl!r}; pass None to use the engine default",
            code="CACHE_INVALID_TTL",
            context={"ttl": repr(ttl)},
        )
    return expires


async def _run_all(calls: Sequence[Coroutine[Any, Any, T]]) -> list[T]:
    """Await *calls* concurrently; the first failure cancels the rest and is raised."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(call) for call in calls]
    except ExceptionGroup as failures:
        raise failures.exceptions[0]
    return [task.result() for task in tasks]


async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    outcome = callback(*args)
    if inspect.isawaitable(outcome):
        await outcome


class Cacheman:
    """Awaitable cache API in front of a memory, Redis or Mongo engine.

    Every operation is a coroutine; its awaited value is the result. An
    optional ``callback`` runs once the result is known and may itself be
    a coroutine function. Its return value is ignored and its exceptions
    propagate to the awaiting caller.

    ``None`` is the only absent value: ``0``, ``False`` and ``""`` are
    cache hits everywhere.

    Two concurrent :meth:`wrap` misses on one key both compute and both
    write; there is no per-key locking.

    Usage::

        cache = Cacheman("users", {"engine": "redis", "ttl": 300})
        user = await cache.wrap(f"user:{uid}", lambda: repo.load(uid))
    """

    def __init__(
        self,
        name: str | Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        engine: CacheEngine | None = None,
    ) -> None:
        if isinstance(name, Mapping):
            name, options = None, name
        options = dict(options or {})

        engine_option = options.get("engine")
        if engine is None and engine_option is not None and not isinstance(engine_option, str):
            engine = engine_option

        self.name = name
        self.properties: CacheProperties = bind_properties(options)
        self.engine: CacheEngine = engine if engine is not None else create_engine(name, self.properties)
        self._pending: set[asyncio.Task[Any]] = set()

    @classmethod
    def from_config(
        cls,
        config: Config,
        name: str | None = None,
        *,
        engine: CacheEngine | None = None,
        setup_logging: bool = True,
    ) -> Cacheman:
        """Build a facade from the ``cacheman.cache`` section of *config*.

        Fields resolve like :meth:`Config.get`, so ``CACHEMAN_CACHE_*``
        variables and ``${...}`` placeholders apply. Unless *setup_logging*
        is false, structlog is configured from ``cacheman.logging`` first.
        """
        if setup_logging:
            configure_logging(config)
        properties = config.bind(CacheProperties)
        return cls(name, dataclasses.asdict(properties), engine=engine)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def wrap(
        self,
        key: str,
        data: Any,
        ttl: TTL = None,
        *,
        callback: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Return the cached value for *key*, computing and storing it on a miss.

        On a miss, a callable *data* is called with no arguments (and awaited
        if it returns an awaitable); any other *data* is the value itself.
        The computed value is then written with *ttl*. On a hit nothing is
        computed and nothing is written.
        """
        _check_key(key)
        expires = _to_timedelta(ttl)
        value = await self._read(key)

        if value is not None:
            logger.debug("cache_hit", key=key)
        else:
            logger.debug("cache_miss", key=key)
            value = data() if callable(data) else data
            if inspect.isawaitable(value):
                value = await value
            await self._write_behind("set", key, partial(self.engine.set, key, value, expires))

        await _notify(callback, value)
        return value

    async def get(
        self,
        key: str | Sequence[str],
        *,
        callback: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Read one key, or a list of keys concurrently.

        A list returns ``{key: value_or_None}``. The first failing read
        raises and the other results are discarded.
        """
        if isinstance(key, str):
            result: Any = await self._read(key)
        else:
            keys = _key_list(key)
            values = await _run_all([self._read(k) for k in keys])
            result = dict(zip(keys, values))

        await _notify(callback, result)
        return result

    async def set(
        self,
        key: str,
        value: Any,
        ttl: TTL = None,
        *,
        callback: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Store *value*; a ``None`` *ttl* leaves the engine default in place."""
        _check_key(key)
        stored = await self._engine_call("set", key, partial(self.engine.set, key, value, _to_timedelta(ttl)))
        await _notify(callback, stored)
        return stored

    async def delete(
        self,
        key: str | Sequence[str],
        *,
        callback: Callable[[], Any] | None = None,
    ) -> None:
        """Delete one key or a list of keys concurrently (fail-fast)."""
        keys = [_check_key(key)] if isinstance(key, str) else _key_list(key)
        await _run_all([self._engine_call("delete", k, partial(self.engine.delete, k)) for k in keys])
        await _notify(callback)

    async def clear(self, *, callback: Callable[[], Any] | None = None) -> None:
        """Remove every entry in this cache's namespace."""
        await self._engine_call("clear", None, self.engine.clear)
        await _notify(callback)

    async def pull(self, key: str, default: Any = None) -> Any:
        """Read *key* and delete it; return *default* if it was absent."""
        value = await self._read(key)
        if value is None:
            return default
        await self._write_behind("delete", key, partial(self.engine.delete, key))
        return value

    # ------------------------------------------------------------------
    # Background writes and lifecycle
    # ------------------------------------------------------------------

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every background write has finished."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def start(self) -> None:
        if isinstance(self.engine, Lifecycle):
            await self.engine.start()

    async def stop(self) -> None:
        """Flush background writes, then stop the engine."""
        await self.drain()
        if isinstance(self.engine, Lifecycle):
            await self.engine.stop()

    async def __aenter__(self) -> Cacheman:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _read(self, key: str) -> Any | None:
        _check_key(key)
        return await self._engine_call("get", key, partial(self.engine.get, key))

    async def _engine_call(
        self,
        operation: str,
        key: str | None,
        call: Callable[[], Awaitable[T]],
    ) -> T:
        try:
            return await call()
        except Exception as exc:
            target = f" '{key}'" if key is not None else ""
            raise CacheEngineException(
                f"Cache engine failed to {operation}{target}: {exc}",
                code="CACHE_ENGINE_ERROR",
                context={"operation": operation, "key": key, "engine": type(self.engine).__name__},
            ) from exc

    async def _write_behind(self, operation: str, key: str, call: Callable[[], Awaitable[Any]]) -> None:
        if not self.properties.background_writes:
            await self._engine_call(operation, key, call)
            return

        task = asyncio.create_task(self._engine_call(operation, key, call))
        self._pending.add(task)
        task.add_done_callback(self._background_done)

    def _background_done(self, task: asyncio.Task[Any]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            context = getattr(exc, "context", {})
            logger.error(
                "background_write_failed",
                operation=context.get("operation"),
                key=context.get("key"),
                error=str(exc),
                exc_info=exc,
            )
