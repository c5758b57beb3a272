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
"""Engine factory: turn a cache name and an options mapping into an engine."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any

import structlog

from cacheman.cache.adapters.memory import InMemoryCache
from cacheman.cache.ports.outbound import CacheEngine
from cacheman.config.auto import AutoConfiguration
from cacheman.config.properties.cache import CacheProperties
from cacheman.core.config import Config
from cacheman.kernel.exceptions import InvalidConfigurationException

logger = structlog.get_logger("cacheman.cache")

DEFAULT_NAME = "cache"

SUPPORTED_ENGINES = ("auto", "memory", "mongo", "redis")


def bind_properties(options: Mapping[str, Any]) -> CacheProperties:
    """Bind a raw options mapping to :class:`CacheProperties`.

    An engine instance under ``engine`` is skipped; only engine names bind.
    """
    section = {k: v for k, v in options.items() if k != "engine" or isinstance(v, str)}
    return Config({"cacheman": {"cache": section}}).bind(CacheProperties, env=False)


def namespace_for(name: str | None, properties: CacheProperties) -> str:
    """Key prefix for a cache, e.g. ``cacheman:users:``."""
    delimiter = properties.delimiter
    return f"{properties.prefix}{delimiter}{name or DEFAULT_NAME}{delimiter}"


def default_ttl(properties: CacheProperties) -> timedelta | None:
    if properties.ttl <= 0:
        return None
    return timedelta(seconds=properties.ttl)


def create_engine(name: str | None, properties: CacheProperties) -> CacheEngine:
    """Instantiate the engine selected by ``properties.engine``.

    ``auto`` picks redis when ``redis.asyncio`` is importable, memory otherwise.
    """
    provider = properties.engine.lower()
    if provider == "auto":
        provider = AutoConfiguration.detect_cache_provider()

    namespace = namespace_for(name, properties)
    ttl = default_ttl(properties)

    engine: CacheEngine
    if provider == "memory":
        engine = InMemoryCache(namespace=namespace, default_ttl=ttl)
    elif provider == "redis":
        import redis.asyncio as aioredis

        from cacheman.cache.adapters.redis import RedisCacheEngine

        url = str(properties.redis.get("url", "redis://localhost:6379/0"))
        engine = RedisCacheEngine(aioredis.from_url(url), namespace=namespace, default_ttl=ttl)
    elif provider == "mongo":
        from motor.motor_asyncio import AsyncIOMotorClient

        from cacheman.cache.adapters.mongo import MongoCacheEngine

        mongo = properties.mongo
        client = AsyncIOMotorClient(str(mongo.get("url", "mongodb://localhost:27017")))
        collection = client[str(mongo.get("database", "cacheman"))][str(mongo.get("collection", "cacheman"))]
        engine = MongoCacheEngine(collection, namespace=namespace, default_ttl=ttl, client=client)
    else:
        raise InvalidConfigurationException(
            f"Unknown cache engine '{properties.engine}'",
            code="CACHE_UNKNOWN_ENGINE",
            context={"engine": properties.engine, "supported": list(SUPPORTED_ENGINES)},
        )

    logger.info("engine_created", engine=provider, namespace=namespace)
    return engine
