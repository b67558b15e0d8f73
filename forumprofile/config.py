"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic_settings import BaseSettings


class CacheBackend(str, Enum):
    """Profile cache backend type."""
    SQLITE = "sqlite"
    NONE = "none"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class ProfileConfig(BaseSettings):
    """Configuration for the forum profile screen."""

    # Forum client settings
    base_url: str = "https://forums.somethingawful.com/"
    fetch_timeout_seconds: float = 30.0
    user_agent: str | None = None
    cookies: dict[str, str] = {}

    # Rendering
    template_name: str = "profile.html"
    dark_theme: bool = False

    # Display surface
    headless: bool = False

    # Cache settings
    cache_backend: CacheBackend = CacheBackend.SQLITE
    cache_ttl_seconds: int = 300
    sqlite_path: str = ".forumprofile_cache.db"

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "FORUMPROFILE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
