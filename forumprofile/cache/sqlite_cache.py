"""SQLite-based profile cache implementation."""

import time
from pathlib import Path

import aiosqlite
from pydantic import ValidationError

from forumprofile.cache.base import ProfileCache
from forumprofile.exceptions import CacheError
from forumprofile.models.profile import Profile


class SQLiteCache(ProfileCache):
    """SQLite-based local cache using aiosqlite."""

    def __init__(self, db_path: str = ".forumprofile_cache.db", default_ttl: int = 300):
        """
        Initialize SQLite cache.

        Args:
            db_path: Path to SQLite database file
            default_ttl: Default TTL in seconds (5 minutes)
        """
        self.db_path = Path(db_path)
        self.default_ttl = default_ttl
        self._db: aiosqlite.Connection | None = None

    async def _ensure_db(self) -> aiosqlite.Connection:
        """Ensure database connection and schema exist."""
        if self._db is None:
            try:
                self._db = await aiosqlite.connect(self.db_path)
            except aiosqlite.Error as e:
                raise CacheError(f"Cannot open cache at {self.db_path}: {e}") from e
            await self._db.execute("""
                CREATE TABLE IF NOT EXISTS profiles (
                    cache_key TEXT PRIMARY KEY,
                    profile_json TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    expires_at REAL NOT NULL
                )
            """)
            await self._db.execute(
                "CREATE INDEX IF NOT EXISTS idx_expires ON profiles(expires_at)"
            )
            await self._db.commit()
        return self._db

    async def get(self, key: str) -> Profile | None:
        """Retrieve cached profile, None if miss, expired or unreadable."""
        db = await self._ensure_db()
        now = time.time()

        async with db.execute(
            "SELECT profile_json FROM profiles WHERE cache_key = ? AND expires_at > ?",
            (key, now),
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None

        try:
            return Profile.model_validate_json(row[0])
        except ValidationError:
            # Written by an older schema
            await self.invalidate(key)
            return None

    async def set(self, key: str, profile: Profile, ttl_seconds: int | None = None) -> None:
        """Store profile in cache."""
        db = await self._ensure_db()
        now = time.time()
        ttl = ttl_seconds if ttl_seconds is not None else self.default_ttl

        await db.execute(
            """
            INSERT OR REPLACE INTO profiles (cache_key, profile_json, created_at, expires_at)
            VALUES (?, ?, ?, ?)
            """,
            (key, profile.model_dump_json(), now, now + ttl),
        )
        await db.commit()

    async def invalidate(self, key: str) -> None:
        """Remove specific entry."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profiles WHERE cache_key = ?", (key,))
        await db.commit()

    async def clear(self) -> None:
        """Clear all cached entries."""
        db = await self._ensure_db()
        await db.execute("DELETE FROM profiles")
        await db.commit()

    async def count(self) -> int:
        """Number of unexpired entries."""
        db = await self._ensure_db()
        async with db.execute(
            "SELECT COUNT(*) FROM profiles WHERE expires_at > ?", (time.time(),)
        ) as cursor:
            row = await cursor.fetchone()
        return row[0]

    async def cleanup_expired(self) -> int:
        """
        Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        db = await self._ensure_db()
        cursor = await db.execute(
            "DELETE FROM profiles WHERE expires_at <= ?", (time.time(),)
        )
        await db.commit()
        return cursor.rowcount

    async def close(self) -> None:
        """Close database connection."""
        if self._db is not None:
            await self._db.close()
            self._db = None
