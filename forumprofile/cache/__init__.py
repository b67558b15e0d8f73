"""Profile cache implementations."""

from forumprofile.cache.base import ProfileCache, cache_key
from forumprofile.cache.sqlite_cache import SQLiteCache

__all__ = ["ProfileCache", "SQLiteCache", "cache_key"]
