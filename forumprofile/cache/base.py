"""Abstract profile cache interface."""

from abc import ABC, abstractmethod

from forumprofile.models.profile import Profile


def cache_key(user_id: str | None, username: str | None) -> str:
    """Key for a profile lookup; user IDs win over usernames."""
    if user_id:
        return f"id:{user_id}"
    if username:
        return f"name:{username.lower()}"
    raise ValueError("user_id or username is required")


class ProfileCache(ABC):
    """Abstract base class for profile cache implementations."""

    @abstractmethod
    async def get(self, key: str) -> Profile | None:
        """
        Retrieve a cached profile.

        Args:
            key: Key from cache_key()

        Returns:
            Cached Profile or None if miss/expired
        """
        ...

    @abstractmethod
    async def set(self, key: str, profile: Profile, ttl_seconds: int | None = None) -> None:
        """
        Store a profile in cache.

        Args:
            key: Key from cache_key()
            profile: Profile to cache
            ttl_seconds: Optional TTL override
        """
        ...

    @abstractmethod
    async def invalidate(self, key: str) -> None:
        """Remove specific entry from cache."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cached entries."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Cleanup connections and resources."""
        ...

    async def __aenter__(self) -> "ProfileCache":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
