"""Cache engines — concrete storage behind the facade."""

from cacheman.cache.adapters.memory import InMemoryCache
from cacheman.cache.adapters.mongo import MongoCacheEngine
from cacheman.cache.adapters.redis import RedisCacheEngine

__all__ = ["InMemoryCache", "MongoCacheEngine", "RedisCacheEngine"]
