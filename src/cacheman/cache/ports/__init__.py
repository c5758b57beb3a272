"""Cache ports."""

from cacheman.cache.ports.outbound import CacheEngine

__all__ = ["CacheEngine"]
