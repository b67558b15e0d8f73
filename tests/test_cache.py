"""Unit tests for the profile cache - no internet."""

import asyncio

import pytest

from forumprofile.cache.base import cache_key
from forumprofile.cache.sqlite_cache import SQLiteCache

from conftest import make_profile


@pytest.fixture
def cache(tmp_path):
    """Create a temporary SQLite cache for testing."""
    return SQLiteCache(str(tmp_path / "test_cache.db"), default_ttl=60)


class TestCacheKey:
    """Test cache key derivation."""

    def test_user_id_preferred(self):
        assert cache_key("42", "tom") == "id:42"

    def test_username_case_insensitive(self):
        assert cache_key(None, "Tom") == cache_key(None, "tom") == "name:tom"

    def test_requires_identity(self):
        with pytest.raises(ValueError):
            cache_key(None, None)


class TestSQLiteCacheBasics:
    """Test basic cache operations."""

    @pytest.mark.asyncio
    async def test_cache_miss_returns_none(self, cache):
        async with cache:
            assert await cache.get("id:nobody") is None

    @pytest.mark.asyncio
    async def test_cache_set_and_get(self, cache):
        profile = make_profile()
        async with cache:
            await cache.set("id:42", profile)
            retrieved = await cache.get("id:42")

        assert retrieved == profile

    @pytest.mark.asyncio
    async def test_cache_invalidate(self, cache):
        async with cache:
            await cache.set("id:42", make_profile())
            await cache.invalidate("id:42")
            assert await cache.get("id:42") is None

    @pytest.mark.asyncio
    async def test_cache_clear(self, cache):
        async with cache:
            await cache.set("id:1", make_profile(user_id="1"))
            await cache.set("id:2", make_profile(user_id="2"))
            assert await cache.count() == 2
            await cache.clear()

            assert await cache.get("id:1") is None
            assert await cache.get("id:2") is None

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_dropped(self, cache):
        async with cache:
            db = await cache._ensure_db()
            await db.execute(
                "INSERT INTO profiles VALUES (?, ?, ?, ?)",
                ("id:42", '{"username": 5}', 0, 1e12),
            )
            await db.commit()

            assert await cache.get("id:42") is None
            assert await cache.count() == 0


class TestSQLiteCacheTTL:
    """Test cache TTL behavior."""

    @pytest.mark.asyncio
    async def test_expired_entry_returns_none(self, tmp_path):
        cache = SQLiteCache(str(tmp_path / "test_cache.db"), default_ttl=0)
        async with cache:
            await cache.set("id:42", make_profile())
            await asyncio.sleep(0.1)
            assert await cache.get("id:42") is None

    @pytest.mark.asyncio
    async def test_custom_ttl_per_entry(self, cache):
        async with cache:
            await cache.set("id:42", make_profile(), ttl_seconds=0)
            await asyncio.sleep(0.1)
            assert await cache.get("id:42") is None

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, cache):
        async with cache:
            await cache.set("id:1", make_profile(), ttl_seconds=0)
            await cache.set("id:2", make_profile())
            await asyncio.sleep(0.1)

            removed = await cache.cleanup_expired()

            assert removed == 1
            assert await cache.get("id:2") is not None
