"""Cache module - Parsed dataset caching."""

from .cache_manager import CacheManager, LRUCache, cache_manager

__all__ = ['CacheManager', 'LRUCache', 'cache_manager']
