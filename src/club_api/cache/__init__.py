from .backends import CacheBackend, MemoryCache, RedisCache, build_cache
from .cache_through import CachedCollection

__all__ = ["CacheBackend", "MemoryCache", "RedisCache", "build_cache", "CachedCollection"]
