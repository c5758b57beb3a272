"""cacheman — awaitable cache facade with wrap, pull and batched reads."""

from cacheman.cache import Cacheman, CacheEngine, InMemoryCache, cache_evict, cached
from cacheman.core.config import Config
from cacheman.kernel.exceptions import (
    CacheEngineException,
    CachemanException,
    InvalidCacheKeyException,
    InvalidConfigurationException,
)

__version__ = "0.1.0"

__all__ = [
    "CacheEngine",
    "CacheEngineException",
    "Cacheman",
    "CachemanException",
    "Config",
    "InMemoryCache",
    "InvalidCacheKeyException",
    "InvalidConfigurationException",
    "cache_evict",
    "cached",
]
