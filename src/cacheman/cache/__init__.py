"""cacheman cache — awaitable facade, engine port and engines."""

from cacheman.cache.adapters.memory import InMemoryCache
from cacheman.cache.adapters.mongo import MongoCacheEngine
from cacheman.cache.adapters.redis import RedisCacheEngine
from cacheman.cache.decorators import cache_evict, cached
from cacheman.cache.facade import Cacheman
from cacheman.cache.factory import create_engine
from cacheman.cache.ports.outbound import CacheEngine

__all__ = [
    "CacheEngine",
    "Cacheman",
    "InMemoryCache",
    "MongoCacheEngine",
    "RedisCacheEngine",
    "cache_evict",
    "cached",
    "create_engine",
]
