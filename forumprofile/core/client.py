"""Forum HTTP client that fetches member profiles."""

import asyncio
from typing import Callable

import httpx

from forumprofile.cache.base import ProfileCache, cache_key
from forumprofile.cache.sqlite_cache import SQLiteCache
from forumprofile.config import CacheBackend, ProfileConfig
from forumprofile.core.parser import parse_page
from forumprofile.core.transformer import transform_profile
from forumprofile.exceptions import (
    AccessDeniedError,
    FetchError,
    ForumProfileError,
    ProfileNotFoundError,
)
from forumprofile.logging import configure_logging, get_logger
from forumprofile.models.profile import Profile

DEFAULT_USER_AGENT = "forumprofile/0.1"

ProfileCallback = Callable[[ForumProfileError | None, Profile | None], None]


class ForumsClient:
    """
    Fetches and caches forum member profiles.

    Example:
        async with ForumsClient() as client:
            profile = await client.fetch_profile("12345")
            print(profile.post_count)
    """

    def __init__(
        self,
        config: ProfileConfig | None = None,
        cache: ProfileCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client with optional configuration.

        Args:
            config: ProfileConfig instance, uses defaults if None
            cache: Profile cache; built from config on entry if None
            transport: httpx transport override, used by tests
        """
        self.config = config or ProfileConfig()
        self._cache = cache
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._tasks: set[asyncio.Task] = set()
        self._log = get_logger("forums_client")

    @property
    def base_url(self) -> str:
        """Address the forum is served from; relative links resolve against it."""
        return self.config.base_url

    async def __aenter__(self) -> "ForumsClient":
        """Async context manager entry - initialize resources."""
        configure_logging(self.config)

        if self._cache is None and self.config.cache_backend == CacheBackend.SQLITE:
            self._cache = SQLiteCache(
                self.config.sqlite_path,
                self.config.cache_ttl_seconds,
            )
        self._ensure_http()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - cleanup resources."""
        await self.close()

    async def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        if self._cache:
            await self._cache.close()

    def _ensure_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.config.fetch_timeout_seconds,
                headers={"User-Agent": self.config.user_agent or DEFAULT_USER_AGENT},
                cookies=self.config.cookies,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._http

    async def fetch_profile(
        self,
        user_id: str | None,
        username: str | None = None,
        force_refresh: bool = False,
    ) -> Profile:
        """
        Fetch a member's profile, from cache when fresh.

        Args:
            user_id: Forum user ID; preferred over username when both are given
            username: Forum username
            force_refresh: Skip cache and fetch fresh data

        Returns:
            Profile

        Raises:
            ProfileNotFoundError: If the member does not exist
            AccessDeniedError: If the forum requires a login
            FetchError: On network errors and unexpected HTTP statuses
            ParseError: If the page held no recognizable profile
        """
        key = cache_key(user_id, username)
        self._log.info("profile_fetch_start", user_id=user_id, username=username)

        if self._cache and not force_refresh:
            cached = await self._cache.get(key)
            if cached:
                self._log.info("cache_hit", user_id=user_id, username=username)
                return cached

        params = {"action": "getinfo"}
        if user_id:
            params["userid"] = user_id
        else:
            params["username"] = username

        http = self._ensure_http()
        try:
            response = await http.get("member.php", params=params)
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out fetching profile for {username or user_id}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Network error: {e}") from e

        status = response.status_code
        if status == 404:
            raise ProfileNotFoundError(f"User {username or user_id} not found")
        if status in (401, 403):
            raise AccessDeniedError(f"Forum refused request (HTTP {status})")
        if status >= 400:
            raise FetchError(f"HTTP {status}")

        parse_result = parse_page(response.text)
        if "Login required" in parse_result.parse_errors:
            raise AccessDeniedError("Login required to view profiles")
        forum_errors = [e for e in parse_result.parse_errors if e.startswith("Forum error")]
        if forum_errors:
            raise ProfileNotFoundError(forum_errors[0])

        profile = transform_profile(parse_result, user_id or "", username)

        self._log.info(
            "profile_fetch_complete",
            user_id=profile.user_id,
            username=profile.username,
            post_count=profile.post_count,
        )

        if self._cache:
            await self._cache.set(key, profile)

        return profile

    def profile_user(
        self,
        user_id: str | None,
        username: str | None,
        callback: ProfileCallback,
    ) -> asyncio.Task:
        """
        Fetch a profile in the background.

        ``callback(error, profile)`` is called exactly once on the event loop,
        with either an error or the profile. Must be called from a running
        event loop.

        Returns:
            The task running the fetch
        """

        async def run() -> None:
            try:
                profile = await self.fetch_profile(user_id, username)
            except ForumProfileError as e:
                callback(e, None)
                return
            except Exception as e:
                callback(FetchError(f"Unexpected error: {e}"), None)
                return
            callback(None, profile)

        task = asyncio.get_running_loop().create_task(run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def invalidate_cache(self, user_id: str | None, username: str | None = None) -> None:
        """Remove a specific profile from cache."""
        if self._cache:
            await self._cache.invalidate(cache_key(user_id, username))

    async def clear_cache(self) -> None:
        """Clear all cached profiles."""
        if self._cache:
            await self._cache.clear()
