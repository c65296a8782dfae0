from .result_cache import CacheEntry, ResultCache, build_cache_key

__all__ = ["CacheEntry", "ResultCache", "build_cache_key"]
